"""Unescaping of Crowdin's ``key=value`` translation lines.

Crowdin exports values with properties-style escapes for ``!`` and ``:``;
``.lang`` loaders expect them raw.
"""

import re
from typing import List

_LINE_BREAK = re.compile(r"\r\n|\r|\n")

ESCAPES = (
    ("\\!", "!"),
    ("\\:", ":"),
)


def split_lines(text: str) -> List[str]:
    """Split on \\r\\n, \\r or \\n. A trailing line break does not start a new line."""
    if not text:
        return []
    lines = _LINE_BREAK.split(text)
    if lines[-1] == "":
        lines.pop()
    return lines


def unescape_line(line: str) -> str:
    """Unescape the value part of a single ``key=value`` line."""
    key, sep, value = line.partition("=")
    if not sep:
        return line
    for escaped, raw in ESCAPES:
        value = value.replace(escaped, raw)
    return f"{key}={value}"


def unescape_lines(text: str) -> str:
    """Unescape every line of ``text``; each output line ends with ``\\n``."""
    return "".join(f"{unescape_line(line)}\n" for line in split_lines(text))
