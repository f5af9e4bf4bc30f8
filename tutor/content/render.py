from __future__ import annotations

import html
import re
from typing import Optional

from pydantic import BaseModel, Field

from .markdown_html import markdown_to_html
from .math_text import md_to_plain_text, normalize_math_markdown
from .models import (
    BlockMathBlock,
    BlockMathSegment,
    ContentSegment,
    InlineGroupBlock,
    InlineMathSegment,
    MarkdownBlock,
    RenderBlock,
    TableBlock,
    TableData,
    TableSegment,
    TextSegment,
)
from .segmenter import segment_content
from .tables import split_cell_math

_PH_OPEN, _PH_CLOSE = chr(0xE000), chr(0xE001)


def _placeholder_prefix(content: str) -> str:
    """Pick a token prefix that does not already occur in `content`."""
    salt = 0
    prefix = f"{_PH_OPEN}M:"
    while prefix in content:
        salt += 1
        prefix = f"{_PH_OPEN}M{salt}:"
    return prefix


def _placeholder_re(math_map: dict[str, str]) -> Optional[re.Pattern]:
    if not math_map:
        return None
    return re.compile("|".join(re.escape(k) for k in sorted(math_map, key=len, reverse=True)))


def restore_placeholders(text: str, math_map: dict[str, str], fmt) -> str:
    """Swap every placeholder token in `text` for `fmt(math)`."""
    pattern = _placeholder_re(math_map)
    if pattern is None:
        return text
    return pattern.sub(lambda m: fmt(math_map[m.group(0)]), text)


def inline_math_html(math: str) -> str:
    return f'<span class="math math-inline">\\({html.escape(math, quote=False)}\\)</span>'


def block_math_html(math: str) -> str:
    return f'<div class="math math-block">\\[{html.escape(math, quote=False)}\\]</div>'


def _cell_html(cell: str) -> str:
    parts = []
    for part in split_cell_math(cell):
        if isinstance(part, InlineMathSegment):
            parts.append(inline_math_html(part.math))
        else:
            parts.append(html.escape(part.text, quote=False))
    return "".join(parts)


def table_html(table: TableData) -> str:
    if not table.headers:
        return ""
    head = "".join(f"<th>{_cell_html(h)}</th>" for h in table.headers)
    body: list[str] = []
    for idx, row in enumerate(table.rows):
        cls = "row-even" if idx % 2 == 0 else "row-odd"
        cells = "".join(f"<td>{_cell_html(row[i] if i < len(row) else '')}</td>" for i in range(table.width))
        body.append(f'<tr class="{cls}">{cells}</tr>')
    return (
        '<div class="content-table"><table>'
        f"<thead><tr>{head}</tr></thead>"
        f"<tbody>{''.join(body)}</tbody>"
        "</table></div>"
    )


def _literal_html(text: str) -> str:
    return "<br>\n".join(html.escape(line, quote=False) for line in text.split("\n"))


def _block_html(block: RenderBlock) -> str:
    if isinstance(block, MarkdownBlock):
        return f'<div class="content-markdown">{markdown_to_html(block.text)}</div>'
    if isinstance(block, InlineGroupBlock):
        if block.literal:
            body = _literal_html(block.text)
            return f'<span class="content-literal">{restore_placeholders(body, block.math_map, inline_math_html)}</span>'
        body = markdown_to_html(block.text)
        return f'<div class="content-inline">{restore_placeholders(body, block.math_map, inline_math_html)}</div>'
    if isinstance(block, BlockMathBlock):
        return block_math_html(block.math)
    if isinstance(block, TableBlock):
        return table_html(block.table)
    return ""


def _block_plain_text(block: RenderBlock) -> str:
    if isinstance(block, MarkdownBlock):
        return md_to_plain_text(block.text)
    if isinstance(block, InlineGroupBlock):
        text = block.text if block.literal else md_to_plain_text(block.text)
        return restore_placeholders(text, block.math_map, lambda m: f"${m}$")
    if isinstance(block, BlockMathBlock):
        return f"$${block.math}$$"
    if isinstance(block, TableBlock):
        lines = [" | ".join(block.table.headers)]
        lines.extend(" | ".join(row) for row in block.table.rows)
        return "\n".join(lines)
    return ""


class RenderedOutput(BaseModel):
    segments: list[ContentSegment] = Field(default_factory=list)
    blocks: list[RenderBlock] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.blocks

    def to_html(self) -> str:
        if not self.blocks:
            return ""
        return '<div class="content-renderer">' + "\n".join(_block_html(b) for b in self.blocks) + "</div>"

    def plain_text(self) -> str:
        """Order-preserving text flattening; math stays as LaTeX source."""
        parts = [_block_plain_text(b).strip() for b in self.blocks]
        return "\n\n".join(p for p in parts if p)


def group_segments(segments: list[ContentSegment], *, literal: bool = False, prefix: str = "") -> list[RenderBlock]:
    """
    Merge runs of text and inline math into single flow blocks.

    Each inline equation in a run becomes a placeholder token so the whole run
    can go through the markdown formatter at once; the tokens are swapped for
    typeset math afterwards.
    """
    prefix = prefix or f"{_PH_OPEN}M:"
    blocks: list[RenderBlock] = []
    run: list[ContentSegment] = []

    def flush_run() -> None:
        nonlocal run
        if not run:
            return
        text_parts: list[str] = []
        math_map: dict[str, str] = {}
        for seg in run:
            if isinstance(seg, InlineMathSegment):
                token = f"{prefix}{len(math_map)}{_PH_CLOSE}"
                math_map[token] = seg.math
                text_parts.append(token)
            else:
                text_parts.append(seg.text)
        blocks.append(InlineGroupBlock(text="".join(text_parts), math_map=math_map, literal=literal))
        run = []

    for seg in segments:
        if isinstance(seg, (TextSegment, InlineMathSegment)):
            run.append(seg)
            continue
        flush_run()
        if isinstance(seg, BlockMathSegment):
            blocks.append(BlockMathBlock(math=seg.math))
        elif isinstance(seg, TableSegment):
            blocks.append(TableBlock(table=seg.table))
    flush_run()
    return blocks


def render(
    content: Optional[str],
    *,
    markdown: bool = True,
    normalize_math: bool = False,
) -> RenderedOutput:
    """
    Build the render plan for a piece of tutor content.

    With `markdown=True` prose goes through the markdown formatter and pipe
    tables become grids. With `markdown=False` prose is shown literally with
    its line breaks, and only math is typeset. Never raises.
    """
    text = content or ""
    if normalize_math:
        text = normalize_math_markdown(text)
    if not text:
        return RenderedOutput()

    segments = segment_content(text, tables=markdown)
    if not segments:
        return RenderedOutput()

    if all(isinstance(s, TextSegment) for s in segments):
        if markdown:
            return RenderedOutput(segments=segments, blocks=[MarkdownBlock(text=text)])
        return RenderedOutput(segments=segments, blocks=[InlineGroupBlock(text=text, literal=True)])

    blocks = group_segments(segments, literal=not markdown, prefix=_placeholder_prefix(text))
    return RenderedOutput(segments=segments, blocks=blocks)


def render_html(content: Optional[str], *, markdown: bool = True, normalize_math: bool = False) -> str:
    return render(content, markdown=markdown, normalize_math=normalize_math).to_html()
