"""
Textual CSS minification.

Runs after generation and never looks at token values: it strips comments,
collapses whitespace outside string literals, drops duplicate semicolons and
shortens zero values. Quoted strings (font names, ``content`` values) pass
through untouched.
"""

from __future__ import annotations

import re

# Characters around which whitespace is never significant
_TIGHT = frozenset("{};:,>")

# A quote right after a word character is an apostrophe ("Don't"), not a delimiter
_STRING_RE = re.compile(r"((?<![\w-])\"(?:\\.|[^\"\\])*\"|(?<![\w-])'(?:\\.|[^'\\])*')")
# 0px -> 0, but not 10px, 1.0px, #0px or 0% (keyframe selectors need the unit)
_ZERO_UNIT_RE = re.compile(r"(?<![\w.#-])0(?:\.0+)?(?:px|em|rem|vh|vw)\b")
# 0.5 -> .5
_LEADING_ZERO_RE = re.compile(r"(?<![\w.#])0\.(\d)")


def _is_line_comment_start(css: str, index: int) -> bool:
    """``//`` only starts a comment when it is the first thing on its line."""
    if not css.startswith("//", index):
        return False
    line_start = css.rfind("\n", 0, index) + 1
    return css[line_start:index].strip() == ""


def _opens_string(out: list[str]) -> bool:
    return not out or not (out[-1].isalnum() or out[-1] in "_-")


def _collapse(css: str) -> str:
    out: list[str] = []
    quote: str | None = None
    pending_space = False
    i = 0
    n = len(css)

    while i < n:
        ch = css[i]

        if quote:
            out.append(ch)
            if ch == "\\" and i + 1 < n:
                out.append(css[i + 1])
                i += 2
                continue
            if ch == quote:
                quote = None
            i += 1
            continue

        if css.startswith("/*", i):
            end = css.find("*/", i + 2)
            i = n if end == -1 else end + 2
            pending_space = True
            continue

        if _is_line_comment_start(css, i):
            end = css.find("\n", i)
            i = n if end == -1 else end
            pending_space = True
            continue

        if ch.isspace():
            pending_space = True
            i += 1
            continue

        if pending_space:
            if out and out[-1] not in _TIGHT and ch not in _TIGHT:
                out.append(" ")
            pending_space = False

        if ch == ";" and out and out[-1] in ";{":
            i += 1
            continue

        if ch in "\"'" and _opens_string(out):
            quote = ch

        out.append(ch)
        i += 1

    return "".join(out).strip()


def _shorten_values(text: str) -> str:
    text = _ZERO_UNIT_RE.sub("0", text)
    return _LEADING_ZERO_RE.sub(r".\1", text)


def minify_css(css: str) -> str:
    """Minify CSS text.

    Example:
        >>> minify_css(".test {\\n  color: red;\\n  margin: 10px;\\n}")
        '.test{color:red;margin:10px;}'
    """
    collapsed = _collapse(css)
    parts = _STRING_RE.split(collapsed)
    # Odd indexes are the captured string literals
    return "".join(part if i % 2 else _shorten_values(part) for i, part in enumerate(parts))
