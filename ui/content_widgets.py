from __future__ import annotations

import re
from typing import Optional, Sequence

import streamlit as st

from tutor.content import (
    BlockMathBlock,
    InlineGroupBlock,
    MarkdownBlock,
    RenderedOutput,
    TableBlock,
    TableData,
    render,
    structured_table,
    table_to_markdown,
)
from tutor.content.render import restore_placeholders

_MD_SPECIAL_RE = re.compile(r"([\\`*_{}\[\]()#+\-.!|>~$<])")

_CONTENT_CSS = """
<style>
[data-testid="stMarkdownContainer"] table {
  width: 100%;
  border-collapse: collapse;
  border: 1px solid rgba(128, 128, 128, 0.25);
  display: block;
  overflow-x: auto;
}
[data-testid="stMarkdownContainer"] thead tr { background: rgba(77, 170, 252, 0.18); }
[data-testid="stMarkdownContainer"] th { font-weight: 600; text-align: left; }
[data-testid="stMarkdownContainer"] tbody tr:nth-child(odd) { background: rgba(77, 170, 252, 0.06); }
[data-testid="stMarkdownContainer"] td { border-right: 1px solid rgba(128, 128, 128, 0.12); }
.katex-display { overflow-x: auto; overflow-y: hidden; margin: 1rem 0; }
</style>
"""


def _inject_content_css() -> None:
    # Streamlit keeps injected <style> for the whole page run.
    st.markdown(_CONTENT_CSS, unsafe_allow_html=True)


def _escape_markdown(text: str) -> str:
    return _MD_SPECIAL_RE.sub(r"\\\1", text)


def _literal_markdown(text: str, math_map: dict[str, str]) -> str:
    body = "  \n".join(_escape_markdown(line) for line in text.split("\n"))
    return restore_placeholders(body, math_map, lambda m: f"${m}$")


def render_inline_math(math: str) -> None:
    st.markdown(f"${math.strip()}$")


def render_block_math(math: str) -> None:
    st.latex(math.strip())


def render_table(table: TableData) -> None:
    md = table_to_markdown(table)
    if md:
        st.markdown(md)


def render_structured_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> None:
    render_table(structured_table(headers, rows))


def render_output(out: RenderedOutput) -> None:
    if out.is_empty:
        return
    _inject_content_css()
    for block in out.blocks:
        if isinstance(block, MarkdownBlock):
            st.markdown(block.text)
        elif isinstance(block, InlineGroupBlock):
            if block.literal:
                st.markdown(_literal_markdown(block.text, block.math_map))
            else:
                st.markdown(restore_placeholders(block.text, block.math_map, lambda m: f"${m}$"))
        elif isinstance(block, BlockMathBlock):
            render_block_math(block.math)
        elif isinstance(block, TableBlock):
            render_table(block.table)


def render_content(
    content: Optional[str],
    *,
    markdown: bool = True,
    normalize_math: bool = True,
) -> RenderedOutput:
    """Draw tutor content in the current Streamlit container and return the plan used."""
    out = render(content, markdown=markdown, normalize_math=normalize_math)
    render_output(out)
    return out
