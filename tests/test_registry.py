"""ConverterRegistry: register/unregister/clear/count/lookup and type aliases."""

import datetime as dt
from pathlib import Path

import pytest

from hotprops.converters import BooleanConverter, FunctionConverter, IntegerConverter
from hotprops.exceptions import UnsupportedTypeError
from hotprops.registry import (
    ConverterRegistry,
    TypeDescriptor,
    Types,
    default_converters,
    resolve_type,
)


def test_with_defaults_covers_every_builtin_type():
    registry = ConverterRegistry.with_defaults()
    assert registry.count() == len(Types.all()) == 18
    for t in Types.all():
        assert t in registry
        registry.lookup(t)


def test_default_converters_are_fresh_instances():
    assert default_converters()[Types.INT] is not default_converters()[Types.INT]


def test_register_returns_previous():
    registry = ConverterRegistry()
    first = IntegerConverter()
    second = IntegerConverter(bits=64)
    assert registry.register(Types.INT, first) is None
    assert registry.register(Types.INT, second) is first
    assert registry.lookup(Types.INT) is second
    assert registry.count() == 1


def test_unregister_returns_previous():
    registry = ConverterRegistry.with_defaults()
    conv = registry.lookup(Types.BOOLEAN)
    assert registry.unregister(Types.BOOLEAN) is conv
    assert registry.unregister(Types.BOOLEAN) is None
    assert Types.BOOLEAN not in registry
    with pytest.raises(UnsupportedTypeError):
        registry.lookup(Types.BOOLEAN)


def test_clear():
    registry = ConverterRegistry.with_defaults()
    registry.clear()
    assert registry.count() == 0
    assert len(registry) == 0
    assert registry.descriptors() == []


def test_lookup_unknown_descriptor_raises():
    registry = ConverterRegistry.with_defaults()
    with pytest.raises(UnsupportedTypeError) as exc_info:
        registry.lookup(TypeDescriptor("decimal"))
    assert isinstance(exc_info.value, TypeError)
    assert "decimal" in str(exc_info.value)


def test_custom_descriptor():
    registry = ConverterRegistry()
    hex_int = TypeDescriptor("hex-int")
    registry.register(hex_int, FunctionConverter(lambda raw, pattern: int(raw.strip(), 16)))
    assert registry.lookup("hex-int").parse(" ff ") == 255


def test_register_rejects_non_converter():
    with pytest.raises(TypeError):
        ConverterRegistry().register(Types.INT, lambda raw, pattern: raw)  # type: ignore[arg-type]


def test_python_type_aliases():
    assert resolve_type(str) is Types.STRING
    assert resolve_type(int) is Types.LONG
    assert resolve_type(float) is Types.DOUBLE
    assert resolve_type(bool) is Types.BOOLEAN
    assert resolve_type(dt.date) is Types.LOCAL_DATE
    assert resolve_type(dt.time) is Types.LOCAL_TIME
    assert resolve_type(dt.datetime) is Types.LOCAL_DATE_TIME
    assert resolve_type(type) is Types.CLASS
    assert resolve_type(Path) is Types.FILE


def test_descriptor_names():
    assert resolve_type("local-date") is Types.LOCAL_DATE
    assert resolve_type(Types.URL) is Types.URL
    assert resolve_type("brand-new") == TypeDescriptor("brand-new")
    assert str(Types.INT) == "int"


def test_unaliased_python_type_is_unsupported():
    with pytest.raises(UnsupportedTypeError):
        resolve_type(complex)
    assert complex not in ConverterRegistry.with_defaults()


def test_registry_seeded_from_mapping():
    registry = ConverterRegistry({bool: BooleanConverter()})
    assert registry.descriptors() == [Types.BOOLEAN]
