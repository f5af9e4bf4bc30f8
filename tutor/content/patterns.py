from __future__ import annotations

import re

# $$ ... $$, may span lines; shortest match wins.
BLOCK_MATH_RE = re.compile(r"\$\$([\s\S]+?)\$\$")

# $ ... $ with no `$` inside.
INLINE_MATH_RE = re.compile(r"\$([^$]+?)\$")

# Header row, dash separator row, then one or more `|` rows. Lines may end in
# \n or \r\n.
TABLE_RE = re.compile(
    r"^[ \t]*\|[^\r\n]+\|[ \t]*\r?\n"
    r"[ \t]*\|[ \t:|-]*-[ \t:|-]*\|[ \t]*\r?\n"
    r"(?:[ \t]*\|[^\r\n]+\|[ \t]*(?:\r?\n|\Z))+",
    re.MULTILINE,
)

TABLE_SEPARATOR_RE = re.compile(r"^\s*\|?[\s:|-]*-[\s:|-]*\|?\s*$")

# Cell boundaries are unescaped pipes; `\|` stays inside the cell.
CELL_SPLIT_RE = re.compile(r"(?<!\\)\|")
