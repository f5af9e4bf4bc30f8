from __future__ import annotations

from typing import Optional

from .models import BlockMathSegment, ContentSegment, InlineMathSegment, TableSegment, TextSegment
from .patterns import BLOCK_MATH_RE, INLINE_MATH_RE, TABLE_RE
from .tables import parse_markdown_table


def _overlaps(start: int, end: int, spans: list[tuple[int, int]]) -> bool:
    return any(start < s_end and s_start < end for s_start, s_end in spans)


def _find_block_math(text: str) -> list[BlockMathSegment]:
    return [
        BlockMathSegment(start=m.start(), end=m.end(), raw=m.group(0), math=m.group(1).strip())
        for m in BLOCK_MATH_RE.finditer(text)
    ]


def _find_tables(text: str, taken: list[tuple[int, int]]) -> list[TableSegment]:
    out: list[TableSegment] = []
    for m in TABLE_RE.finditer(text):
        if _overlaps(m.start(), m.end(), taken):
            continue
        table = parse_markdown_table(m.group(0))
        if table is None:
            continue
        out.append(TableSegment(start=m.start(), end=m.end(), raw=m.group(0), table=table))
    return out


def _find_inline_math(text: str, taken: list[tuple[int, int]]) -> list[InlineMathSegment]:
    """
    Scan only the stretches between block math and tables.

    A `$` inside an accepted span can never pair with one outside it, so a
    rejected candidate does not eat the opening delimiter of the next pair.
    """
    out: list[InlineMathSegment] = []
    cursor = 0
    for s_start, s_end in sorted(taken) + [(len(text), len(text))]:
        if s_start > cursor:
            for m in INLINE_MATH_RE.finditer(text, cursor, s_start):
                out.append(InlineMathSegment(start=m.start(), end=m.end(), raw=m.group(0), math=m.group(1).strip()))
        cursor = max(cursor, s_end)
    return out


def _text_segment(text: str, start: int, end: int) -> TextSegment:
    chunk = text[start:end]
    return TextSegment(start=start, end=end, raw=chunk, text=chunk)


def segment_content(
    content: Optional[str],
    *,
    tables: bool = True,
    keep_blank_text: bool = False,
) -> list[ContentSegment]:
    """
    Split mixed prose into text, inline math, block math and table segments.

    Block math is matched first and wins every overlap; tables come next and
    may not touch block math; inline math is only looked for outside both.
    Whitespace-only gaps between matches are dropped unless `keep_blank_text`
    is set, in which case joining every segment's `raw` gives back `content`.
    """
    text = content or ""
    if not text:
        return []

    blocks = _find_block_math(text)
    taken = [(b.start, b.end) for b in blocks]
    found_tables = _find_tables(text, taken) if tables else []
    taken.extend((t.start, t.end) for t in found_tables)
    inline = _find_inline_math(text, taken)

    matches: list[ContentSegment] = sorted([*blocks, *found_tables, *inline], key=lambda s: s.start)
    if not matches:
        return [_text_segment(text, 0, len(text))]

    segments: list[ContentSegment] = []
    last = 0
    for seg in matches:
        if seg.start > last:
            gap = text[last:seg.start]
            if keep_blank_text or gap.strip():
                segments.append(_text_segment(text, last, seg.start))
        segments.append(seg)
        last = seg.end
    if last < len(text):
        tail = text[last:]
        if keep_blank_text or tail.strip():
            segments.append(_text_segment(text, last, len(text)))
    return segments
