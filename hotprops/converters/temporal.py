"""
Temporal converters: date, time, timestamp and their local (naive) variants.

Patterns use date-format field letters:

- ``yyyy`` year (``yy`` = 2000-based two digits, ``y`` = one to four digits)
- ``MM`` month, ``dd`` day, ``HH`` hour (0-23), ``mm`` minute, ``ss`` second
  (a single letter accepts one or two digits)
- ``S`` repeated = fraction of a second with exactly that many digits
- ``'text'`` quoted literal (``''`` is a quote); an unquoted ``T`` is a literal

A pattern containing ``%`` is passed to ``datetime.strptime`` instead. Use it for
what the field letters above do not cover: month names (``%b``), the 12-hour
clock (``%I`` with ``%p``) and UTC offsets (``%z``). Other letters such as
``MMM``, ``hh``, ``a``, ``X`` or ``Z`` make the pattern invalid (NO_MATCH).

With an explicit pattern exactly one parse is attempted. Without one the
converter walks its fallback chain in order and the first pattern that matches
the whole string wins; the order below is fixed and must not change.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache
from typing import Any, Literal

from hotprops.converters.base import NO_MATCH, Converter

DATE_PATTERNS: tuple[str, ...] = ("yyyy-MM-dd", "yyyyMMdd")
TIME_PATTERNS: tuple[str, ...] = ("HH:mm:ss.SSS", "HHmmss.SSS", "HHmmssSSS", "HH:mm:ss", "HHmmss")
DATETIME_PATTERNS: tuple[str, ...] = (
    "yyyy-MM-dd HH:mm:ss.SSS",
    "yyyy-MM-ddTHH:mm:ss.SSS",
    "yyyyMMddHHmmss.SSS",
    "yyyyMMddHHmmssSSS",
    "yyyy-MM-dd HH:mm:ss",
    "yyyy-MM-ddTHH:mm:ss",
    "yyyyMMddHHmmss",
)

TemporalKind = Literal["date", "time", "datetime", "timestamp"]

_FIELDS = {"y": "year", "M": "month", "d": "day", "H": "hour", "m": "minute", "s": "second", "S": "fraction"}
_LITERAL_LETTERS = frozenset("T")
_STRPTIME_DIRECTIVE = re.compile(r"%(.)")
_STRPTIME_FIELDS: dict[str, tuple[str, ...]] = {
    "Y": ("year",),
    "y": ("year",),
    "G": ("year",),
    "m": ("month",),
    "b": ("month",),
    "B": ("month",),
    "d": ("day",),
    "H": ("hour",),
    "I": ("hour",),
    "M": ("minute",),
    "S": ("second",),
    "f": ("fraction",),
    "x": ("year", "month", "day"),
    "X": ("hour", "minute", "second"),
    "c": ("year", "month", "day", "hour", "minute", "second"),
}
# fields a strict converter needs from an explicit pattern
_REQUIRED_FIELDS: dict[str, frozenset[str]] = {
    "date": frozenset({"year", "month", "day"}),
    "time": frozenset({"hour"}),
    "datetime": frozenset({"year", "month", "day", "hour"}),
    "timestamp": frozenset({"year", "month", "day", "hour"}),
}


@dataclass(frozen=True)
class DatePattern:
    """A compiled pattern: full-match regex plus the fields it captures."""

    source: str
    regex: re.Pattern[str]
    two_digit_year: bool = False

    def match(self, s: str) -> datetime | None:
        m = self.regex.fullmatch(s)
        if m is None:
            return None
        fields = m.groupdict()
        year = int(fields["year"]) if fields.get("year") else 1970
        if self.two_digit_year:
            year += 2000
        fraction = fields.get("fraction")
        micro = int(fraction.ljust(6, "0")[:6]) if fraction else 0
        try:
            return datetime(
                year,
                int(fields.get("month") or 1),
                int(fields.get("day") or 1),
                int(fields.get("hour") or 0),
                int(fields.get("minute") or 0),
                int(fields.get("second") or 0),
                micro,
            )
        except ValueError:
            return None


def _field_regex(letter: str, count: int) -> str:
    name = _FIELDS[letter]
    if letter == "S":
        return f"(?P<{name}>[0-9]{{{count}}})"
    if letter == "y":
        if count == 1:
            return f"(?P<{name}>[0-9]{{1,4}})"
        return f"(?P<{name}>[0-9]{{{count}}})"
    if count == 1:
        return f"(?P<{name}>[0-9]{{1,2}})"
    if count == 2:
        return f"(?P<{name}>[0-9]{{2}})"
    raise ValueError(f"unsupported field {letter * count!r}")


@lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> DatePattern:
    """
    Compile a date-format pattern.

    Raises:
        ValueError: Unknown field letter, repeated field, or unterminated quote.
    """
    parts: list[str] = []
    seen: set[str] = set()
    two_digit_year = False
    i, n = 0, len(pattern)
    while i < n:
        c = pattern[i]
        if c == "'":
            if pattern.startswith("''", i):
                parts.append("'")
                i += 2
                continue
            literal: list[str] = []
            j = i + 1
            while True:
                if j >= n:
                    raise ValueError(f"unterminated quote in pattern {pattern!r}")
                if pattern[j] == "'":
                    if pattern.startswith("''", j):
                        literal.append("'")
                        j += 2
                        continue
                    break
                literal.append(pattern[j])
                j += 1
            parts.append(re.escape("".join(literal)))
            i = j + 1
            continue
        if c.isalpha() and c not in _LITERAL_LETTERS:
            if c not in _FIELDS:
                raise ValueError(f"unknown pattern letter {c!r} in {pattern!r}")
            if c in seen:
                raise ValueError(f"repeated pattern letter {c!r} in {pattern!r}")
            seen.add(c)
            j = i
            while j < n and pattern[j] == c:
                j += 1
            count = j - i
            if c == "y" and count == 2:
                two_digit_year = True
            parts.append(_field_regex(c, count))
            i = j
            continue
        parts.append(re.escape(c))
        i += 1
    return DatePattern(pattern, re.compile("".join(parts)), two_digit_year)


def parse_with_pattern(s: str, pattern: str) -> datetime | None:
    """One parse attempt; None when the string or the pattern is invalid."""
    if "%" in pattern:
        try:
            return datetime.strptime(s, pattern)
        except ValueError:
            return None
    try:
        compiled = compile_pattern(pattern)
    except ValueError:
        return None
    return compiled.match(s)


def pattern_fields(pattern: str) -> frozenset[str]:
    """Fields an explicit pattern supplies (year, month, day, hour, ...); empty for an invalid pattern."""
    if "%" in pattern:
        fields: set[str] = set()
        for m in _STRPTIME_DIRECTIVE.finditer(pattern):
            fields.update(_STRPTIME_FIELDS.get(m.group(1), ()))
        return frozenset(fields)
    try:
        return frozenset(compile_pattern(pattern).regex.groupindex)
    except ValueError:
        return frozenset()


def parse_first(s: str, patterns: tuple[str, ...]) -> datetime | None:
    """Try patterns in order; return the first full match."""
    for pattern in patterns:
        dt = parse_with_pattern(s, pattern)
        if dt is not None:
            return dt
    return None


class TemporalConverter(Converter):
    """Parse a trimmed string and project it onto ``kind``.

    - ``date``: ``datetime.date``
    - ``time``: ``datetime.time``
    - ``datetime``: naive ``datetime.datetime``
    - ``timestamp``: aware ``datetime.datetime`` in the local zone

    With ``strict=True`` an explicit pattern must supply every field of the
    result (a date needs y, M and d; a time needs H), otherwise NO_MATCH.
    Without it, missing fields fall back to the epoch.
    """

    def __init__(self, kind: TemporalKind, defaults: tuple[str, ...], strict: bool = False):
        self.kind = kind
        self.defaults = defaults
        self.strict = strict

    def parse(self, raw: str, pattern: str | None = None) -> Any:
        s = raw.strip()
        if pattern:
            if self.strict and not _REQUIRED_FIELDS[self.kind] <= pattern_fields(pattern):
                return NO_MATCH
            dt = parse_with_pattern(s, pattern)
        else:
            dt = parse_first(s, self.defaults)
        if dt is None:
            return NO_MATCH
        return self._project(dt)

    def _project(self, dt: datetime) -> Any:
        if self.kind == "date":
            return dt.date()
        if self.kind == "time":
            return dt.time()
        if self.kind == "timestamp":
            try:
                return dt.astimezone()
            except (ValueError, OverflowError, OSError):
                return NO_MATCH
        return dt

    def __repr__(self) -> str:
        return f"TemporalConverter(kind={self.kind!r}, strict={self.strict})"
