"""
CSS minification.

Compression (whitespace collapsing, comment removal, zero/colour shortening)
is done by csscompressor. Two things are handled here on top of it:

- comments csscompressor deliberately keeps (/*! ... */ banners and the
  IE hack comments /*\\*/ and /**/) are dropped when comments are stripped,
  and have their newlines removed otherwise
- output is wrapped so no line exceeds the configured length, breaking only
  between tokens
"""

import re
from typing import Iterator

import csscompressor

from ..config import MinifyOptions


# Rule and declaration boundaries a line may end after
BREAK_AFTER = frozenset("{};,")

_NEWLINES = re.compile(r"\s*[\r\n]+\s*")
_WORD_CHAR = re.compile(r"[\w\-.%#)\]\\]")


def _scan(css: str) -> Iterator[tuple[str, str]]:
    """
    Split CSS into ("string" | "comment" | "char", text) atoms.

    Strings and comments come back whole so callers never look inside them.
    Unterminated strings and comments run to the end of the input.
    """
    i = 0
    n = len(css)

    while i < n:
        ch = css[i]

        if ch in "\"'":
            j = i + 1
            while j < n and css[j] != ch:
                if css[j] == "\\":
                    j += 1
                elif css[j] == "\n":
                    break
                j += 1
            end = min(j + 1, n)
            yield "string", css[i:end]
            i = end
        elif css.startswith("/*", i):
            close = css.find("*/", i + 2)
            end = n if close == -1 else close + 2
            yield "comment", css[i:end]
            i = end
        else:
            yield "char", ch
            i += 1


def clean_comments(css: str, strip: bool) -> str:
    """Remove comments entirely, or keep them on a single line."""
    out: list[str] = []
    pending_gap = False

    for kind, text in _scan(css):
        if kind == "comment":
            if strip:
                pending_gap = True
                continue
            text = _NEWLINES.sub(" ", text)
        elif pending_gap:
            # Keep two words apart if a comment was the only thing between them
            if out and _WORD_CHAR.match(out[-1][-1]) and _WORD_CHAR.match(text[0]):
                out.append(" ")
            pending_gap = False
        out.append(text)

    return "".join(out)


def _chunks(css: str) -> list[tuple[str, str]]:
    """
    Cut CSS into unbreakable chunks.

    Returns (glue, chunk) pairs where glue is what separates the chunk from
    the previous one when both stay on the same line: "" after a rule or
    declaration boundary, " " where the source had whitespace.
    """
    chunks: list[tuple[str, str]] = []
    buf: list[str] = []
    glue = ""
    depth = 0

    def flush():
        nonlocal glue
        if buf:
            chunks.append((glue, "".join(buf)))
            buf.clear()
            glue = ""

    for kind, text in _scan(css):
        if kind == "comment" and depth == 0:
            # A comment may break where it has whitespace of its own
            words = text.split()
            buf.append(words[0])
            for word in words[1:]:
                flush()
                glue = " "
                buf.append(word)
            continue
        if kind != "char":
            buf.append(text)
            continue

        if text in "([":
            depth += 1
        elif text in ")]":
            depth = max(depth - 1, 0)

        if text.isspace() and depth == 0:
            flush()
            glue = " "
            continue

        buf.append(text)
        if text in BREAK_AFTER and depth == 0:
            flush()

    flush()
    return chunks


def wrap_lines(css: str, max_line_length: int) -> str:
    """
    Re-wrap minified CSS so no line is longer than `max_line_length`.

    Lines break after `{`, `}`, `;` and `,` or in place of whitespace,
    including whitespace inside a comment. They never break inside a token,
    string or parenthesised value. A single chunk longer than the limit gets a
    line of its own. A limit of 0 disables wrapping.
    """
    if max_line_length <= 0:
        return css

    lines: list[str] = []
    current = ""

    for glue, chunk in _chunks(css):
        if not current:
            current = chunk
        elif len(current) + len(glue) + len(chunk) <= max_line_length:
            current += glue + chunk
        else:
            lines.append(current)
            current = chunk

    if current:
        lines.append(current)

    return "\n".join(lines)


def minify(css: str, options: MinifyOptions | None = None) -> str:
    """Minify concatenated CSS according to `options`."""
    options = options or MinifyOptions()

    compressed = csscompressor.compress(
        css,
        preserve_exclamation_comments=not options.strip_comments,
    )
    compressed = clean_comments(compressed, strip=options.strip_comments)

    return wrap_lines(compressed.strip(), options.max_line_length)
