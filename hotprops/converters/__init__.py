"""Converters: one parser per semantic type, returning a value or NO_MATCH."""

from hotprops.converters.base import NO_MATCH, Converter, FunctionConverter
from hotprops.converters.references import ClassConverter, PathConverter, UrlConverter
from hotprops.converters.scalars import (
    BooleanConverter,
    CharacterConverter,
    FloatConverter,
    IntegerConverter,
    StringConverter,
)
from hotprops.converters.temporal import (
    DATE_PATTERNS,
    DATETIME_PATTERNS,
    TIME_PATTERNS,
    TemporalConverter,
)

__all__ = [
    "NO_MATCH",
    "Converter",
    "FunctionConverter",
    "StringConverter",
    "CharacterConverter",
    "IntegerConverter",
    "FloatConverter",
    "BooleanConverter",
    "TemporalConverter",
    "ClassConverter",
    "PathConverter",
    "UrlConverter",
    "DATE_PATTERNS",
    "TIME_PATTERNS",
    "DATETIME_PATTERNS",
]
