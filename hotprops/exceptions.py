"""
Exceptions raised by hotprops.

Each error also derives from the builtin that best matches it, so callers may
catch either the hotprops type or the builtin (e.g. ``FileNotFoundError``).

- Construction: SourceNotFoundError, InvalidArgumentError, SourceLoadError.
- Conversion: UnsupportedTypeError (no converter for the requested type).
- CLI settings: SettingsError.

Unparsable values are never errors: converters return NO_MATCH and the store
falls back to the caller's default.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any


class HotPropsError(Exception):
    """Base class for all hotprops errors."""


class SourceNotFoundError(HotPropsError, FileNotFoundError):
    """Source path is missing or is not a regular file."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        super().__init__(f"source {str(self.path)!r} is not an existing regular file")


class InvalidArgumentError(HotPropsError, ValueError):
    """An argument is outside its allowed range (e.g. non-positive interval)."""


class SourceLoadError(HotPropsError, OSError):
    """Reading or decoding the source failed."""

    def __init__(self, path: str | Path, cause: BaseException | None = None):
        self.path = Path(path)
        self.cause = cause
        msg = f"source {str(self.path)!r} can't be loaded"
        if cause is not None:
            msg = f"{msg}: {cause}"
        super().__init__(msg)


class UnsupportedTypeError(HotPropsError, TypeError):
    """No converter is registered for the requested type."""

    def __init__(self, type_: Any):
        self.type = type_
        super().__init__(f"can't convert string to {type_!r}: no converter registered")


class SettingsError(HotPropsError, ValueError):
    """CLI settings file could not be parsed or validated."""
