from __future__ import annotations

import html
import re

_FENCE_RE = re.compile(r"^\s*(`{3,}|~{3,})\s*([\w+-]*)\s*$")
_HEADING_RE = re.compile(r"^\s{0,3}(#{1,6})\s+(.*?)\s*#*\s*$")
_HR_RE = re.compile(r"^\s{0,3}([-*_])(?:\s*\1){2,}\s*$")
_UL_RE = re.compile(r"^\s*[-*+]\s+(.*)$")
_OL_RE = re.compile(r"^\s*(\d{1,9})[.)]\s+(.*)$")

_CODE_SPAN_RE = re.compile(r"(`+)(.+?)\1", re.DOTALL)
_STRONG_RE = re.compile(r"\*\*(?!\s)(.+?)(?<!\s)\*\*|__(?!\s)(.+?)(?<!\s)__", re.DOTALL)
_EM_RE = re.compile(r"(?<![\w*])\*(?![\s*])(.+?)(?<![\s*])\*(?!\*)|(?<!\w)_(?![\s_])(.+?)(?<![\s_])_(?!\w)", re.DOTALL)
_LINK_RE = re.compile(r"\[([^\]\n]+)\]\(([^)\s]+)\)")
# http(s), mailto, or a relative URL (no scheme before the first / ? #).
_SAFE_HREF_RE = re.compile(r"^(?:https?:|mailto:|[^:/?#]*(?:[/?#]|$))", re.IGNORECASE)
_STASH_OPEN, _STASH_CLOSE = chr(0xE002), chr(0xE003)


def _stash_prefix(text: str) -> str:
    """Token prefix for stashed HTML that does not already occur in `text`."""
    salt = 0
    prefix = f"{_STASH_OPEN}S:"
    while prefix in text:
        salt += 1
        prefix = f"{_STASH_OPEN}S{salt}:"
    return prefix


def _emphasis(s: str) -> str:
    s = _STRONG_RE.sub(lambda m: f"<strong>{m.group(1) or m.group(2)}</strong>", s)
    return _EM_RE.sub(lambda m: f"<em>{m.group(1) or m.group(2)}</em>", s)


def _format_inline(text: str) -> str:
    """Escape, then apply code spans, links, bold and italic."""
    prefix = _stash_prefix(text)
    token_re = re.compile(re.escape(prefix) + r"(\d+)" + re.escape(_STASH_CLOSE))
    stash: list[str] = []

    def _stash(fragment: str) -> str:
        stash.append(fragment)
        return f"{prefix}{len(stash) - 1}{_STASH_CLOSE}"

    def _link(m: re.Match) -> str:
        # Unsafe schemes (javascript:, data:, ...) stay as escaped text.
        href = html.unescape(m.group(2))
        if not _SAFE_HREF_RE.match(href):
            return m.group(0)
        return _stash(f'<a href="{html.escape(href)}">{_emphasis(m.group(1))}</a>')

    def _restore(m: re.Match) -> str:
        idx = int(m.group(1))
        return stash[idx] if idx < len(stash) else m.group(0)

    s = _CODE_SPAN_RE.sub(lambda m: _stash(f"<code>{html.escape(m.group(2).strip(), quote=False)}</code>"), text)
    s = html.escape(s, quote=False)
    s = _LINK_RE.sub(_link, s)
    s = _emphasis(s)
    return token_re.sub(_restore, s)


def markdown_to_html(md: str) -> str:
    """
    Small markdown formatter for tutor prose.

    Supports ATX headings, paragraphs, bullet and numbered lists, fenced code
    blocks, horizontal rules, inline code, links, bold and italic. Anything
    else is kept as escaped text.
    """
    if not md:
        return ""

    out: list[str] = []
    para: list[str] = []
    list_kind: str | None = None
    items: list[str] = []

    def flush_para() -> None:
        nonlocal para
        if para:
            out.append(f"<p>{_format_inline(chr(10).join(para))}</p>")
        para = []

    def flush_list() -> None:
        nonlocal list_kind, items
        if list_kind and items:
            body = "".join(f"<li>{_format_inline(it)}</li>" for it in items)
            out.append(f"<{list_kind}>{body}</{list_kind}>")
        list_kind = None
        items = []

    lines = md.replace("\r\n", "\n").split("\n")
    i = 0
    while i < len(lines):
        line = lines[i]
        stripped = line.strip()

        m_fence = _FENCE_RE.match(line)
        if m_fence:
            flush_para()
            flush_list()
            fence = m_fence.group(1)
            lang = m_fence.group(2)
            code: list[str] = []
            i += 1
            # An unterminated fence runs to the end of the text.
            while i < len(lines) and not lines[i].strip().startswith(fence):
                code.append(lines[i])
                i += 1
            i += 1
            cls = f' class="language-{html.escape(lang)}"' if lang else ""
            out.append(f"<pre><code{cls}>{html.escape(chr(10).join(code), quote=False)}</code></pre>")
            continue

        if not stripped:
            flush_para()
            flush_list()
            i += 1
            continue

        m_head = _HEADING_RE.match(line)
        if m_head:
            flush_para()
            flush_list()
            level = len(m_head.group(1))
            out.append(f"<h{level}>{_format_inline(m_head.group(2))}</h{level}>")
            i += 1
            continue

        if _HR_RE.match(line):
            flush_para()
            flush_list()
            out.append("<hr>")
            i += 1
            continue

        m_ul = _UL_RE.match(line)
        m_ol = None if m_ul else _OL_RE.match(line)
        if m_ul or m_ol:
            flush_para()
            kind = "ul" if m_ul else "ol"
            if list_kind != kind:
                flush_list()
                list_kind = kind
            items.append(m_ul.group(1) if m_ul else m_ol.group(2))
            i += 1
            continue

        if list_kind and line[:1] in (" ", "\t") and items:
            # Indented continuation of the previous list item.
            items[-1] = items[-1] + "\n" + stripped
            i += 1
            continue

        flush_list()
        para.append(stripped)
        i += 1

    flush_para()
    flush_list()
    return "\n".join(out)
