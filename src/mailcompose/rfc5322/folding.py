"""
Line folding helpers for RFC5322 header fields.

Header lines are soft-wrapped on existing spaces so that they stay within
the recommended line length of RFC5322 section 2.1.1. Folding never alters
the content of a line: it only inserts CRLF + TAB before a space.
"""

import re

MIME_LINE_LENGTH = 78

LINE_BREAKS_RE = re.compile(r"\r\n|\r|\n")


def fold(text: str, start_column: int = 0) -> str:
    """
    Fold a header line on spaces once it reaches MIME_LINE_LENGTH columns.

    Text that is already folded (CRLF followed by whitespace) is kept as is:
    the whitespace opening a continuation line is not counted, and a line
    that ends right where it reaches the limit is not folded again.

    Args:
        text: The text to fold. Embedded line breaks reset the column count.
        start_column: Column at which ``text`` starts on its line, e.g. the
            width of the ``Name: `` prefix of a header field.

    Returns:
        The folded text. Runs without any space are never broken.

    Examples:
        >>> fold("short line")
        'short line'
    """
    parts = []
    line_length = start_column
    last_space = None
    last_cut = 0
    line_start = False

    for pos, char in enumerate(text):
        if char in "\r\n":
            line_length = 0
            last_space = None
            line_start = True
            continue
        if line_start and char in " \t":
            continue
        line_start = False
        if char == " ":
            last_space = pos

        line_length += 1
        if line_length < MIME_LINE_LENGTH or last_space is None:
            continue
        if pos + 1 == len(text) or text[pos + 1] in "\r\n":
            # Nothing would be left for a continuation line
            continue

        parts.append(text[last_cut:last_space])
        parts.append("\r\n\t")

        line_length = 0
        last_cut = last_space + 1
        last_space = None

    parts.append(text[last_cut:])
    return "".join(parts)


def normalize_line_breaks(text: str) -> str:
    """Rewrite every CRLF, lone CR and lone LF of ``text`` to CRLF."""
    return LINE_BREAKS_RE.sub("\r\n", text)
