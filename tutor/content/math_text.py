from __future__ import annotations

import re

_CITATION_LIKE_RE = re.compile(r"\d{1,4}(?:\s*[,;-]\s*\d{1,4})*")
_DISPLAY_HINT_RE = re.compile(
    r"[=^_{}]|\\(?:frac|sum|int|prod|sqrt|mathbf|mathbb|left|right|begin|end|alpha|beta|gamma|theta|lambda|pi|cdot|times)"
)


def normalize_math_markdown(text: str) -> str:
    """
    Rewrite the other common LaTeX delimiters into the dollar forms.

    - Inline math: \\( ... \\) -> $...$
    - Display math: \\[ ... \\] -> $$...$$ (only when it looks like math)
    - Math wrapped in code spans is unwrapped.
    """
    if not text:
        return text

    s = text

    def _inline_math_repl(m: re.Match) -> str:
        return f"${m.group(1) or ''}$"

    def _display_math_repl(m: re.Match) -> str:
        inner = str(m.group(1) or "")
        probe = inner.strip()
        # Escaped reference brackets such as \[24\] stay untouched.
        if _CITATION_LIKE_RE.fullmatch(probe):
            return m.group(0)
        if "\n" not in inner and not _DISPLAY_HINT_RE.search(inner):
            return m.group(0)
        return "$$" + inner + "$$"

    s = re.sub(r"\\\((.+?)\\\)", _inline_math_repl, s, flags=re.DOTALL)
    s = re.sub(r"\\\[(.+?)\\\]", _display_math_repl, s, flags=re.DOTALL)

    s = re.sub(r"`(\$\$[\s\S]+?\$\$)`", r"\1", s)
    s = re.sub(r"`(\$[^`$]+?\$)`", r"\1", s)
    return s


def md_to_plain_text(md: str) -> str:
    """Best-effort markdown -> plain text. Math delimiters are left alone."""
    if not md:
        return ""

    s = md
    s = re.sub(r"```[^\n]*\n", "", s)
    s = s.replace("```", "")
    s = re.sub(r"`([^`]+)`", r"\1", s)
    s = re.sub(r"!\[([^\]]*)\]\([^)]+\)", r"\1", s)
    s = re.sub(r"\[([^\]]+)\]\([^)]+\)", r"\1", s)
    s = re.sub(r"\*\*(.+?)\*\*", r"\1", s, flags=re.DOTALL)
    s = re.sub(r"__(.+?)__", r"\1", s, flags=re.DOTALL)
    s = re.sub(r"(?<![\w*])\*(?!\s)(.+?)(?<!\s)\*(?!\*)", r"\1", s)
    s = re.sub(r"(?<!\w)_(?!\s)(.+?)(?<!\s)_(?!\w)", r"\1", s)
    s = re.sub(r"(?m)^[ \t]{0,3}#{1,6}[ \t]+", "", s)
    s = re.sub(r"(?m)^[ \t]*[-*+][ \t]+", "", s)
    s = re.sub(r"(?m)^[ \t]*\d+[.)][ \t]+", "", s)
    s = re.sub(r"\n{3,}", "\n\n", s)
    return s
