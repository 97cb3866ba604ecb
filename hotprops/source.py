"""
Properties source: read a ``.properties`` file into ordered (key, value) pairs.

- Grammar: ``#``/``!`` comment lines, ``=``, ``:`` or whitespace separators,
  backslash line continuation, escapes (``\\t \\n \\r \\f \\uXXXX``, escaped separators).
- Pairs come back in file order; duplicate keys are left to the snapshot
  (first position kept, last value wins).
- last_modified() reports ``st_mtime_ns``, or 0 when the file can't be read.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterator

from hotprops.exceptions import SourceLoadError

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_WHITESPACE = " \t\f"
_SEPARATORS = "=:"
_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def _continues(line: str) -> bool:
    """True when the line ends with an odd number of backslashes."""
    count = len(line) - len(line.rstrip("\\"))
    return count % 2 == 1


def _logical_lines(text: str) -> Iterator[str]:
    """Join continued natural lines; drop blank and comment lines."""
    buf: list[str] = []
    for line in _LINE_BREAK.split(text):
        stripped = line.lstrip(_WHITESPACE)
        if not buf and (not stripped or stripped[0] in "#!"):
            continue
        if _continues(stripped):
            buf.append(stripped[:-1])
            continue
        buf.append(stripped)
        yield "".join(buf)
        buf = []
    if buf:
        yield "".join(buf)


def _unescape(s: str) -> str:
    out: list[str] = []
    i, n = 0, len(s)
    while i < n:
        c = s[i]
        if c != "\\":
            out.append(c)
            i += 1
            continue
        i += 1
        if i >= n:
            break
        c = s[i]
        if c == "u":
            digits = s[i + 1 : i + 5]
            if len(digits) != 4 or not set(digits) <= _HEX_DIGITS:
                raise ValueError(f"malformed \\uxxxx encoding: {s[i - 1 : i + 5]!r}")
            out.append(chr(int(digits, 16)))
            i += 5
            continue
        out.append(_ESCAPES.get(c, c))
        i += 1
    return "".join(out)


def _split_entry(line: str) -> tuple[str, str]:
    """Split a logical line at the first unescaped separator."""
    n = len(line)
    i = 0
    while i < n:
        c = line[i]
        if c == "\\":
            i += 2
            continue
        if c in _SEPARATORS or c in _WHITESPACE:
            break
        i += 1
    i = min(i, n)
    j = i
    while j < n and line[j] in _WHITESPACE:
        j += 1
    if j < n and line[j] in _SEPARATORS:
        j += 1
    while j < n and line[j] in _WHITESPACE:
        j += 1
    return _unescape(line[:i]), _unescape(line[j:])


def parse_properties(text: str) -> list[tuple[str, str]]:
    """
    Parse properties text into (key, value) pairs in source order.

    Raises:
        ValueError: On a malformed ``\\uXXXX`` escape.
    """
    return [_split_entry(line) for line in _logical_lines(text)]


def read_properties(path: str | Path, encoding: str = "utf-8") -> list[tuple[str, str]]:
    """
    Read and parse a properties file.

    Raises:
        SourceLoadError: If the file can't be read, decoded, or parsed.
    """
    p = Path(path)
    try:
        text = p.read_text(encoding=encoding)
        return parse_properties(text)
    except (OSError, ValueError) as e:
        raise SourceLoadError(p, e) from e


def last_modified(path: str | Path) -> int:
    """Modification time in nanoseconds; 0 if missing, not a regular file, or unreadable."""
    p = Path(path)
    try:
        if not p.is_file():
            return 0
        return p.stat().st_mtime_ns
    except OSError:
        return 0
