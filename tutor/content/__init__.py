from .document import build_html_document
from .models import (
    BlockMathBlock,
    BlockMathSegment,
    InlineGroupBlock,
    InlineMathSegment,
    MarkdownBlock,
    TableBlock,
    TableData,
    TableSegment,
    TextSegment,
)
from .render import RenderedOutput, block_math_html, inline_math_html, render, render_html, table_html
from .segmenter import segment_content
from .tables import parse_markdown_table, split_cell_math, structured_table, table_to_markdown

__all__ = [
    "BlockMathBlock",
    "BlockMathSegment",
    "InlineGroupBlock",
    "InlineMathSegment",
    "MarkdownBlock",
    "RenderedOutput",
    "TableBlock",
    "TableData",
    "TableSegment",
    "TextSegment",
    "block_math_html",
    "build_html_document",
    "inline_math_html",
    "parse_markdown_table",
    "render",
    "render_html",
    "segment_content",
    "split_cell_math",
    "structured_table",
    "table_html",
    "table_to_markdown",
]
