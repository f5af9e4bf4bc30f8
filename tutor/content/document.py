from __future__ import annotations

import html
from typing import Iterable, Union

from .render import render

KATEX_VERSION = "0.16.11"

CONTENT_CSS = """
    :root {
      --font-family-base: "Segoe UI", system-ui, -apple-system, sans-serif;
      --color-text: #111;
      --color-muted: #555;
      --color-border: #e5e5e5;
      --color-stripe: #f4f7fb;
      --color-head: #e8f0fb;
      --spacing-unit: 8px;
      --max-width: 760px;
    }
    body {
      font-family: var(--font-family-base);
      color: var(--color-text);
      line-height: 1.6;
      margin: 0;
    }
    .document-wrapper { max-width: var(--max-width); margin: 0 auto; padding: calc(var(--spacing-unit) * 6) calc(var(--spacing-unit) * 3); }
    .document-title { font-size: 32px; font-weight: 500; margin-bottom: calc(var(--spacing-unit) * 4); }
    .content-renderer + .content-renderer { margin-top: calc(var(--spacing-unit) * 4); }
    .content-renderer h1 { font-size: 1.6rem; margin: 1.5rem 0 1rem; }
    .content-renderer h2 { font-size: 1.35rem; margin: 1.25rem 0 0.75rem; }
    .content-renderer h3 { font-size: 1.15rem; margin: 1rem 0 0.5rem; }
    .content-renderer h4 { font-size: 1rem; margin: 0.75rem 0 0.5rem; }
    .content-renderer p { margin: 0 0 1rem; color: var(--color-muted); }
    .content-renderer code { padding: 0.1rem 0.35rem; border-radius: 4px; background: var(--color-stripe); font-size: 0.9em; }
    .content-renderer pre { padding: 1rem; border: 1px solid var(--color-border); border-radius: 8px; overflow-x: auto; }
    .content-renderer pre code { padding: 0; background: none; }
    .math-block { margin: 1rem 0; overflow-x: auto; text-align: center; }
    .content-table { margin: 1.5rem 0; overflow-x: auto; }
    .content-table table { width: 100%; border-collapse: collapse; border: 1px solid var(--color-border); }
    .content-table th { background: var(--color-head); text-align: left; font-weight: 600; padding: 0.6rem 1rem; border-bottom: 1px solid var(--color-border); }
    .content-table td { padding: 0.6rem 1rem; border-right: 1px solid var(--color-border); }
    .content-table td:last-child { border-right: 0; }
    .content-table tr.row-even { background: var(--color-stripe); }
"""


def _katex_head() -> list[str]:
    base = f"https://cdn.jsdelivr.net/npm/katex@{KATEX_VERSION}/dist"
    return [
        f'  <link rel="stylesheet" href="{base}/katex.min.css">',
        f'  <script defer src="{base}/katex.min.js"></script>',
        f'  <script defer src="{base}/contrib/auto-render.min.js"'
        ' onload="renderMathInElement(document.body, {delimiters: ['
        "{left: '\\\\[', right: '\\\\]', display: true},"
        "{left: '\\\\(', right: '\\\\)', display: false}"
        '], throwOnError: false});"></script>',
    ]


def build_html_document(title: str, contents: Union[str, Iterable[str]], *, markdown: bool = True, normalize_math: bool = False) -> str:
    """Standalone HTML page; math is typeset in the browser by KaTeX auto-render."""
    if isinstance(contents, str):
        contents = [contents]
    safe_title = html.escape(title or "")

    html_parts: list[str] = []
    html_parts.append("<!DOCTYPE html>")
    html_parts.append('<html lang="en">')
    html_parts.append("<head>")
    html_parts.append('  <meta charset="UTF-8">')
    html_parts.append('  <meta name="viewport" content="width=device-width, initial-scale=1.0">')
    html_parts.append(f"  <title>{safe_title}</title>")
    html_parts.extend(_katex_head())
    html_parts.append("  <style>")
    html_parts.append(CONTENT_CSS)
    html_parts.append("  </style>")
    html_parts.append("</head>")
    html_parts.append("<body>")
    html_parts.append('  <div class="document-wrapper">')
    if safe_title:
        html_parts.append(f'    <h1 class="document-title">{safe_title}</h1>')
    for content in contents:
        body = render(content, markdown=markdown, normalize_math=normalize_math).to_html()
        if body:
            html_parts.append(body)
    html_parts.append("  </div>")
    html_parts.append("</body>")
    html_parts.append("</html>")
    return "\n".join(html_parts) + "\n"
