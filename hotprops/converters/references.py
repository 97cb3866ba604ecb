"""
Reference converters: class by dotted name, filesystem path, URL.

- Class: ``pkgutil.resolve_name`` (``pkg.mod.Class`` or ``pkg.mod:Class``); must be a class.
- Path: resolved to an absolute, canonical path (``~`` is not expanded).
- URL: pydantic ``AnyUrl`` with a recognized scheme.
"""

import pkgutil
from pathlib import Path
from typing import Any

from pydantic import AnyUrl, TypeAdapter, ValidationError

from hotprops.converters.base import NO_MATCH, Converter

_URL_ADAPTER = TypeAdapter(AnyUrl)
URL_SCHEMES = frozenset({"http", "https", "ftp", "file", "jar", "mailto", "ws", "wss"})


class ClassConverter(Converter):
    """Resolve a fully-qualified class name in the running interpreter."""

    def parse(self, raw: str, pattern: str | None = None) -> Any:
        name = raw.strip()
        if not name:
            return NO_MATCH
        try:
            obj = pkgutil.resolve_name(name)
        except (ImportError, AttributeError, ValueError):
            return NO_MATCH
        return obj if isinstance(obj, type) else NO_MATCH


class PathConverter(Converter):
    """Absolute, canonical ``pathlib.Path``."""

    def parse(self, raw: str, pattern: str | None = None) -> Any:
        try:
            return Path(raw.strip()).resolve()
        except (OSError, RuntimeError, ValueError):
            return NO_MATCH


class UrlConverter(Converter):
    """Absolute URL whose scheme is one of ``schemes``."""

    def __init__(self, schemes: frozenset[str] = URL_SCHEMES):
        self.schemes = schemes

    def parse(self, raw: str, pattern: str | None = None) -> Any:
        s = raw.strip()
        if not s:
            return NO_MATCH
        try:
            url = _URL_ADAPTER.validate_python(s)
        except (ValidationError, ValueError, TypeError):
            return NO_MATCH
        return url if url.scheme in self.schemes else NO_MATCH
