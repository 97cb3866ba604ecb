"""Typed, hot-reloadable access to a properties file."""

__version__ = "1.0.0"

from hotprops.converters import NO_MATCH, Converter, FunctionConverter
from hotprops.exceptions import (
    HotPropsError,
    InvalidArgumentError,
    SettingsError,
    SourceLoadError,
    SourceNotFoundError,
    UnsupportedTypeError,
)
from hotprops.registry import ConverterRegistry, TypeDescriptor, Types
from hotprops.scheduler import ReloadScheduler
from hotprops.snapshot import ConfigSnapshot
from hotprops.store import ConfigStore

__all__ = [
    "__version__",
    "ConfigStore",
    "ConfigSnapshot",
    "ConverterRegistry",
    "TypeDescriptor",
    "Types",
    "Converter",
    "FunctionConverter",
    "NO_MATCH",
    "ReloadScheduler",
    "HotPropsError",
    "SourceNotFoundError",
    "InvalidArgumentError",
    "SourceLoadError",
    "UnsupportedTypeError",
    "SettingsError",
]
