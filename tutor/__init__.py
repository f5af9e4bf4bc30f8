from .content import render, render_html, segment_content

__all__ = ["render", "render_html", "segment_content"]
