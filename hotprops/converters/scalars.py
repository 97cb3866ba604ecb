"""
Scalar converters: string, character, fixed-width integers, floats, boolean.

Numbers are parsed without locale: an optional sign and ASCII digits for
integers (range-checked to the descriptor's bit width); decimal/exponent
literals, ``NaN`` and ``Infinity`` with an optional ``f``/``d`` suffix for floats.
"""

import math
import re
import struct
from typing import Any

from hotprops.converters.base import NO_MATCH, Converter

_INTEGER = re.compile(r"[+-]?[0-9]+")
_FLOAT = re.compile(
    r"(?P<num>[+-]?(?:NaN|Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?))(?P<suffix>[fFdD]?)"
)

TRUE_WORDS = frozenset({"true", "yes", "y", "1"})
FALSE_WORDS = frozenset({"false", "no", "n", "0"})


class StringConverter(Converter):
    """Return the raw value untouched (no trimming)."""

    def parse(self, raw: str, pattern: str | None = None) -> Any:
        return raw


class CharacterConverter(Converter):
    """First character of the trimmed value; empty is NO_MATCH."""

    def parse(self, raw: str, pattern: str | None = None) -> Any:
        s = raw.strip()
        return s[0] if s else NO_MATCH


class IntegerConverter(Converter):
    """Signed integer limited to ``bits`` (8 byte, 16 short, 32 int, 64 long)."""

    def __init__(self, bits: int = 32):
        self.bits = bits
        self.min_value = -(1 << (bits - 1))
        self.max_value = (1 << (bits - 1)) - 1

    def parse(self, raw: str, pattern: str | None = None) -> Any:
        s = raw.strip()
        if not _INTEGER.fullmatch(s):
            return NO_MATCH
        value = int(s)
        if value < self.min_value or value > self.max_value:
            return NO_MATCH
        return value

    def __repr__(self) -> str:
        return f"IntegerConverter(bits={self.bits})"


def _to_single(value: float) -> float:
    """Round a double to the nearest IEEE-754 single precision value."""
    if math.isnan(value) or math.isinf(value):
        return value
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


class FloatConverter(Converter):
    """Floating point literal; ``single=True`` rounds to 32-bit precision."""

    def __init__(self, single: bool = False):
        self.single = single

    def parse(self, raw: str, pattern: str | None = None) -> Any:
        m = _FLOAT.fullmatch(raw.strip())
        if not m:
            return NO_MATCH
        num = m.group("num")
        if m.group("suffix") and ("NaN" in num or "Infinity" in num):
            return NO_MATCH
        value = float(num)
        return _to_single(value) if self.single else value

    def __repr__(self) -> str:
        return f"FloatConverter(single={self.single})"


class BooleanConverter(Converter):
    """true/yes/y/1 and false/no/n/0, case-insensitive."""

    def parse(self, raw: str, pattern: str | None = None) -> Any:
        s = raw.strip().lower()
        if s in TRUE_WORDS:
            return True
        if s in FALSE_WORDS:
            return False
        return NO_MATCH
