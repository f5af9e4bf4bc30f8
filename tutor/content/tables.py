from __future__ import annotations

from typing import Optional, Sequence

from .models import InlineMathSegment, TableData, TextSegment
from .patterns import CELL_SPLIT_RE, INLINE_MATH_RE, TABLE_SEPARATOR_RE


def _split_row(line: str) -> list[str]:
    cells = [c.strip().replace("\\|", "|") for c in CELL_SPLIT_RE.split(line.strip())]
    # Leading/trailing pipes leave an empty cell at each edge.
    if cells and not cells[0]:
        cells = cells[1:]
    if cells and not cells[-1]:
        cells = cells[:-1]
    return cells


def _fit_row(cells: Sequence[str], width: int) -> list[str]:
    row = [str(c if c is not None else "") for c in cells][:width]
    return row + [""] * (width - len(row))


def parse_markdown_table(source: str) -> Optional[TableData]:
    """
    Parse a pipe-delimited markdown table.

    | Header 1 | Header 2 |
    |----------|----------|
    | Cell 1   | Cell 2   |

    Short rows are padded with empty cells, cells past the header width are
    dropped. Returns None when the text is not a table (no separator line or
    no header cell).
    """
    lines = [ln for ln in (source or "").strip().splitlines() if ln.strip()]
    if len(lines) < 2:
        return None
    if not lines[0].strip().startswith("|") or not TABLE_SEPARATOR_RE.match(lines[1]):
        return None

    headers = _split_row(lines[0])
    if not any(headers):
        return None

    rows: list[list[str]] = []
    for line in lines[2:]:
        cells = _split_row(line)
        if not any(cells):
            continue
        rows.append(_fit_row(cells, len(headers)))
    return TableData(headers=headers, rows=rows)


def structured_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> TableData:
    head = [str(h or "").strip() for h in headers]
    return TableData(headers=head, rows=[_fit_row(r, len(head)) for r in rows])


def split_cell_math(cell: str) -> list[TextSegment | InlineMathSegment]:
    parts: list[TextSegment | InlineMathSegment] = []
    last = 0
    for m in INLINE_MATH_RE.finditer(cell or ""):
        if m.start() > last:
            chunk = cell[last:m.start()]
            parts.append(TextSegment(start=last, end=m.start(), raw=chunk, text=chunk))
        parts.append(InlineMathSegment(start=m.start(), end=m.end(), raw=m.group(0), math=m.group(1).strip()))
        last = m.end()
    if last < len(cell or ""):
        chunk = cell[last:]
        parts.append(TextSegment(start=last, end=len(cell), raw=chunk, text=chunk))
    return parts


def _escape_md_table_cell(value: str) -> str:
    cell = str(value or "").replace("\r", "\n")
    cell = "<br>".join(p.strip() for p in cell.split("\n"))
    return cell.replace("|", r"\|").strip()


def table_to_markdown(table: TableData) -> str:
    width = table.width
    if width == 0:
        return ""
    md_lines = [
        "| " + " | ".join(_escape_md_table_cell(h) for h in table.headers) + " |",
        "| " + " | ".join(["---"] * width) + " |",
    ]
    for row in table.rows:
        md_lines.append("| " + " | ".join(_escape_md_table_cell(c) for c in _fit_row(row, width)) + " |")
    return "\n".join(md_lines)
