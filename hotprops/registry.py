"""
Type descriptors and the converter registry.

- TypeDescriptor names a semantic type; ``Types`` holds the built-in ones.
- Plain Python types map to descriptors through an explicit alias table
  (str, int, float, bool, date, time, datetime, type, Path).
- ConverterRegistry maps descriptor -> Converter under one lock; lookup() of an
  unmapped type raises UnsupportedTypeError.
"""

from __future__ import annotations

import datetime as dt
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import structlog

from hotprops.converters import (
    DATE_PATTERNS,
    DATETIME_PATTERNS,
    TIME_PATTERNS,
    BooleanConverter,
    CharacterConverter,
    ClassConverter,
    Converter,
    FloatConverter,
    IntegerConverter,
    PathConverter,
    StringConverter,
    TemporalConverter,
    UrlConverter,
)
from hotprops.exceptions import UnsupportedTypeError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class TypeDescriptor:
    """Identifies one semantic type, e.g. ``TypeDescriptor("local-date")``."""

    name: str

    def __str__(self) -> str:
        return self.name


class Types:
    """Built-in descriptors."""

    STRING = TypeDescriptor("string")
    CHARACTER = TypeDescriptor("character")
    BYTE = TypeDescriptor("byte")
    SHORT = TypeDescriptor("short")
    INT = TypeDescriptor("int")
    LONG = TypeDescriptor("long")
    FLOAT = TypeDescriptor("float")
    DOUBLE = TypeDescriptor("double")
    BOOLEAN = TypeDescriptor("boolean")
    DATE = TypeDescriptor("date")
    TIME = TypeDescriptor("time")
    TIMESTAMP = TypeDescriptor("timestamp")
    LOCAL_DATE = TypeDescriptor("local-date")
    LOCAL_TIME = TypeDescriptor("local-time")
    LOCAL_DATE_TIME = TypeDescriptor("local-date-time")
    CLASS = TypeDescriptor("class-reference")
    FILE = TypeDescriptor("file-path")
    URL = TypeDescriptor("url")

    @classmethod
    def all(cls) -> list[TypeDescriptor]:
        return [v for v in vars(cls).values() if isinstance(v, TypeDescriptor)]

    @classmethod
    def by_name(cls, name: str) -> TypeDescriptor:
        """Built-in descriptor by name ("int", "local-date", ...); unknown names make a new descriptor."""
        for t in cls.all():
            if t.name == name:
                return t
        return TypeDescriptor(name)


PYTHON_TYPE_ALIASES: dict[type, TypeDescriptor] = {
    str: Types.STRING,
    int: Types.LONG,
    float: Types.DOUBLE,
    bool: Types.BOOLEAN,
    dt.date: Types.LOCAL_DATE,
    dt.time: Types.LOCAL_TIME,
    dt.datetime: Types.LOCAL_DATE_TIME,
    type: Types.CLASS,
    Path: Types.FILE,
}


def resolve_type(type_: TypeDescriptor | type | str) -> TypeDescriptor:
    """
    Normalize a descriptor, an aliased Python type, or a descriptor name.

    Raises:
        UnsupportedTypeError: For a Python type with no alias.
    """
    if isinstance(type_, TypeDescriptor):
        return type_
    if isinstance(type_, str):
        return Types.by_name(type_)
    alias = PYTHON_TYPE_ALIASES.get(type_)
    if alias is None:
        raise UnsupportedTypeError(type_)
    return alias


def default_converters() -> dict[TypeDescriptor, Converter]:
    """Fresh converter instances for every built-in descriptor."""
    return {
        Types.STRING: StringConverter(),
        Types.CHARACTER: CharacterConverter(),
        Types.BYTE: IntegerConverter(bits=8),
        Types.SHORT: IntegerConverter(bits=16),
        Types.INT: IntegerConverter(bits=32),
        Types.LONG: IntegerConverter(bits=64),
        Types.FLOAT: FloatConverter(single=True),
        Types.DOUBLE: FloatConverter(),
        Types.BOOLEAN: BooleanConverter(),
        Types.DATE: TemporalConverter("date", DATE_PATTERNS),
        Types.TIME: TemporalConverter("time", TIME_PATTERNS),
        Types.TIMESTAMP: TemporalConverter("timestamp", DATETIME_PATTERNS),
        Types.LOCAL_DATE: TemporalConverter("date", DATE_PATTERNS, strict=True),
        Types.LOCAL_TIME: TemporalConverter("time", TIME_PATTERNS, strict=True),
        Types.LOCAL_DATE_TIME: TemporalConverter("datetime", DATETIME_PATTERNS, strict=True),
        Types.CLASS: ClassConverter(),
        Types.FILE: PathConverter(),
        Types.URL: UrlConverter(),
    }


class ConverterRegistry:
    """Mutable descriptor -> Converter mapping, safe to share across threads."""

    def __init__(self, converters: Mapping[TypeDescriptor, Converter] | None = None):
        self._lock = threading.RLock()
        self._converters: dict[TypeDescriptor, Converter] = {}
        for type_, converter in (converters or {}).items():
            self._converters[resolve_type(type_)] = converter

    @classmethod
    def with_defaults(cls) -> "ConverterRegistry":
        return cls(default_converters())

    def register(self, type_: TypeDescriptor | type | str, converter: Converter) -> Converter | None:
        """Install or replace the converter for type_; return the previous one."""
        if not isinstance(converter, Converter):
            raise TypeError(f"converter must be a Converter, got {type(converter).__name__}")
        key = resolve_type(type_)
        with self._lock:
            previous = self._converters.get(key)
            self._converters[key] = converter
        logger.debug("converter_registered", type=key.name, replaced=previous is not None)
        return previous

    def unregister(self, type_: TypeDescriptor | type | str) -> Converter | None:
        """Remove the converter for type_; return it (None if there was none)."""
        key = resolve_type(type_)
        with self._lock:
            previous = self._converters.pop(key, None)
        logger.debug("converter_unregistered", type=key.name, found=previous is not None)
        return previous

    def clear(self) -> None:
        with self._lock:
            count = len(self._converters)
            self._converters.clear()
        logger.debug("converters_cleared", count=count)

    def count(self) -> int:
        with self._lock:
            return len(self._converters)

    def __len__(self) -> int:
        return self.count()

    def __contains__(self, type_: Any) -> bool:
        try:
            key = resolve_type(type_)
        except UnsupportedTypeError:
            return False
        with self._lock:
            return key in self._converters

    def descriptors(self) -> list[TypeDescriptor]:
        with self._lock:
            return list(self._converters)

    def lookup(self, type_: TypeDescriptor | type | str) -> Converter:
        """
        Converter registered for type_.

        Raises:
            UnsupportedTypeError: If nothing is registered for type_.
        """
        key = resolve_type(type_)
        with self._lock:
            converter = self._converters.get(key)
        if converter is None:
            raise UnsupportedTypeError(key)
        return converter
