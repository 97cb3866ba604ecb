"""Scalar and reference converters: parse or NO_MATCH, never raise."""

import collections
import math
from pathlib import Path

import pytest

from hotprops.converters import (
    NO_MATCH,
    BooleanConverter,
    CharacterConverter,
    ClassConverter,
    FloatConverter,
    FunctionConverter,
    IntegerConverter,
    PathConverter,
    StringConverter,
    UrlConverter,
)


def test_string_converter_returns_raw_untrimmed():
    assert StringConverter().parse("  spaced  ") == "  spaced  "
    assert StringConverter().parse("") == ""


def test_character_converter():
    conv = CharacterConverter()
    assert conv.parse("  xyz") == "x"
    assert conv.parse("") is NO_MATCH
    assert conv.parse("   ") is NO_MATCH


@pytest.mark.parametrize(
    "raw,expected",
    [("42", 42), (" -7 ", -7), ("+5", 5), ("007", 7), ("2147483647", 2147483647), ("-2147483648", -2147483648)],
)
def test_int_converter_accepts(raw, expected):
    assert IntegerConverter(bits=32).parse(raw) == expected


@pytest.mark.parametrize("raw", ["", "abc", "3.5", "1_000", "1,000", "2147483648", "0x10", "--1", "١٢"])
def test_int_converter_rejects(raw):
    assert IntegerConverter(bits=32).parse(raw) is NO_MATCH


def test_integer_widths():
    assert IntegerConverter(bits=8).parse("127") == 127
    assert IntegerConverter(bits=8).parse("128") is NO_MATCH
    assert IntegerConverter(bits=8).parse("-128") == -128
    assert IntegerConverter(bits=16).parse("32768") is NO_MATCH
    assert IntegerConverter(bits=64).parse("2147483648") == 2147483648
    assert IntegerConverter(bits=64).parse("9223372036854775808") is NO_MATCH


@pytest.mark.parametrize(
    "raw,expected",
    [("1.5", 1.5), ("1.5d", 1.5), ("2f", 2.0), ("1e3", 1000.0), ("-.5", -0.5), ("3.", 3.0), (" 6.25 ", 6.25)],
)
def test_double_converter_accepts(raw, expected):
    assert FloatConverter().parse(raw) == expected


def test_double_converter_special_values():
    assert math.isnan(FloatConverter().parse("NaN"))
    assert FloatConverter().parse("-Infinity") == -math.inf
    assert FloatConverter().parse("NaNf") is NO_MATCH


@pytest.mark.parametrize("raw", ["", "abc", "1,5", "1.2.3", "inf", "nan", "1e", "e5"])
def test_double_converter_rejects(raw):
    assert FloatConverter().parse(raw) is NO_MATCH


def test_float_converter_rounds_to_single_precision():
    value = FloatConverter(single=True).parse("0.1")
    assert value != 0.1
    assert value == pytest.approx(0.1, rel=1e-7)
    assert FloatConverter(single=True).parse("1e39") == math.inf


@pytest.mark.parametrize("raw", ["Y", "yes", "1", "TRUE", " true ", "y"])
def test_boolean_true(raw):
    assert BooleanConverter().parse(raw) is True


@pytest.mark.parametrize("raw", ["n", "No", "0", "false", "FALSE "])
def test_boolean_false(raw):
    assert BooleanConverter().parse(raw) is False


@pytest.mark.parametrize("raw", ["maybe", "", "2", "on", "yess"])
def test_boolean_no_match(raw):
    assert BooleanConverter().parse(raw) is NO_MATCH


def test_class_converter():
    conv = ClassConverter()
    assert conv.parse("collections.OrderedDict") is collections.OrderedDict
    assert conv.parse(" pathlib:Path ") is Path
    assert conv.parse("builtins.int") is int
    assert conv.parse("os.path") is NO_MATCH
    assert conv.parse("no_such_module_xyz.Thing") is NO_MATCH
    assert conv.parse("collections.NoSuchClass") is NO_MATCH
    assert conv.parse("") is NO_MATCH


def test_path_converter_resolves(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = PathConverter().parse(" sub/../x.txt ")
    assert result == tmp_path.resolve() / "x.txt"
    assert result.is_absolute()


def test_url_converter():
    conv = UrlConverter()
    url = conv.parse("  http://localhost:8080/x?y=1 ")
    assert url is not NO_MATCH
    assert url.scheme == "http"
    assert url.host == "localhost"
    assert url.port == 8080
    assert conv.parse("https://example.com/a").scheme == "https"


@pytest.mark.parametrize("raw", ["", "example.com", "not a url", "foo://bar", "/relative/path"])
def test_url_converter_rejects(raw):
    assert UrlConverter().parse(raw) is NO_MATCH


def test_function_converter_maps_errors_to_no_match():
    conv = FunctionConverter(lambda raw, pattern: int(raw, 16))
    assert conv.parse("ff") == 255
    assert conv.parse("zz") is NO_MATCH


def test_no_match_is_falsy_singleton():
    assert not NO_MATCH
    assert repr(NO_MATCH) == "NO_MATCH"
    assert type(NO_MATCH)() is NO_MATCH


def test_path_converter_does_not_expand_home(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert PathConverter().parse("~/x") == tmp_path.resolve() / "~" / "x"
