"""
ConfigStore: typed, hot-reloadable access to a properties file.

- One immutable ConfigSnapshot is published at a time; reload() builds the next
  one off to the side and swaps the reference under a lock held only for the swap.
  Readers never lock: each call reads the reference once.
- reload_if_stale() compares the file's mtime with the snapshot's; an mtime of 0
  (file unreadable) never triggers a reload.
- Typed reads go through a ConverterRegistry. A missing key or a value that does
  not parse returns the caller's default; only an unregistered type raises.
- Hot loading is a ReloadScheduler started by open_hot_load() and stopped by
  close_hot_load(); background reload failures are logged and the old snapshot stays.
"""

from __future__ import annotations

import re
import threading
from pathlib import Path
from typing import Any, Iterator

import structlog

from hotprops.converters import NO_MATCH, Converter
from hotprops.exceptions import InvalidArgumentError, SourceLoadError, SourceNotFoundError
from hotprops.registry import ConverterRegistry, TypeDescriptor, Types
from hotprops.scheduler import ReloadScheduler
from hotprops.snapshot import ConfigSnapshot
from hotprops.source import last_modified, read_properties

logger = structlog.get_logger(__name__)

TypeLike = TypeDescriptor | type | str


def split_values(raw: str, delimiter: str | re.Pattern[str]) -> list[str]:
    """
    Split raw on a delimiter regex.

    Interior empty pieces are kept; trailing empty pieces are dropped; a string
    with no delimiter match comes back as a single piece.
    """
    regex = re.compile(delimiter) if isinstance(delimiter, str) else delimiter
    pieces: list[str] = []
    pos = 0
    matched = False
    for m in regex.finditer(raw):
        if m.end() == 0:
            continue
        matched = True
        pieces.append(raw[pos : m.start()])
        pos = m.end()
    if not matched:
        return [raw]
    pieces.append(raw[pos:])
    while pieces and pieces[-1] == "":
        pieces.pop()
    return pieces


class ConfigStore:
    """
    Hot-reloadable, typed view of one properties file.

    Args:
        source: Path to an existing regular file.
        interval_ms: Hot-load polling interval in milliseconds (> 0).
        auto_start: Open hot loading right after the initial load.
        registry: Converter registry (default: a fresh one with every built-in type).
        encoding: Source file encoding.

    Raises:
        SourceNotFoundError: source is missing or not a regular file.
        InvalidArgumentError: interval_ms is not a positive int.
        SourceLoadError: The initial load failed.
    """

    def __init__(
        self,
        source: str | Path,
        interval_ms: int,
        auto_start: bool = False,
        registry: ConverterRegistry | None = None,
        encoding: str = "utf-8",
    ):
        path = Path(source)
        if not path.is_file():
            raise SourceNotFoundError(path)
        if isinstance(interval_ms, bool) or not isinstance(interval_ms, int) or interval_ms <= 0:
            raise InvalidArgumentError(f"interval_ms must be an int greater than 0, got {interval_ms!r}")

        self.source = path
        self.interval_ms = interval_ms
        self.encoding = encoding
        self._registry = registry if registry is not None else ConverterRegistry.with_defaults()
        self._publish_lock = threading.Lock()
        self._hot_load_lock = threading.Lock()
        self._scheduler: ReloadScheduler | None = None
        self._snapshot = ConfigSnapshot()

        self.reload()
        logger.info("config_loaded", source=str(self.source), keys=len(self._snapshot))
        if auto_start:
            self.open_hot_load()

    # --- reload ---

    @property
    def snapshot(self) -> ConfigSnapshot:
        """The currently published snapshot."""
        return self._snapshot

    def is_stale(self) -> bool:
        modified = last_modified(self.source)
        return modified > 0 and modified != self._snapshot.modified

    def reload_if_stale(self) -> bool:
        """Reload when the source mtime is known and differs from the snapshot's."""
        if not self.is_stale():
            return False
        self.reload()
        return True

    def reload(self) -> ConfigSnapshot:
        """
        Read the whole source and publish a new snapshot.

        Raises:
            SourceLoadError: Reading failed; the published snapshot is unchanged.
        """
        modified = last_modified(self.source)
        pairs = read_properties(self.source, encoding=self.encoding)
        snapshot = ConfigSnapshot.from_pairs(pairs, modified)
        with self._publish_lock:
            previous = self._snapshot
            self._snapshot = snapshot
        logger.debug(
            "config_reloaded",
            source=str(self.source),
            keys=len(snapshot),
            previous_keys=len(previous),
            modified=modified,
        )
        return snapshot

    def _tick(self) -> None:
        try:
            self.reload_if_stale()
        except SourceLoadError as e:
            logger.warning("config_reload_failed", source=str(self.source), error=str(e))

    # --- hot loading ---

    def open_hot_load(self) -> None:
        """Start periodic reload checks (no-op if already open)."""
        with self._hot_load_lock:
            if self._scheduler is not None:
                return
            self._scheduler = ReloadScheduler(self._tick, self.interval_ms / 1000.0)
            self._scheduler.start()
        logger.info("hot_load_opened", source=str(self.source), interval_ms=self.interval_ms)

    def close_hot_load(self) -> None:
        """Stop periodic reload checks (no-op if not open)."""
        with self._hot_load_lock:
            if self._scheduler is None:
                return
            scheduler, self._scheduler = self._scheduler, None
            scheduler.stop()
        logger.info("hot_load_closed", source=str(self.source))

    @property
    def is_hot_loading(self) -> bool:
        return self._scheduler is not None

    def __enter__(self) -> "ConfigStore":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close_hot_load()

    # --- passive accessors (each reads the published snapshot once) ---

    def size(self) -> int:
        return len(self._snapshot)

    def __len__(self) -> int:
        return self.size()

    def is_empty(self) -> bool:
        return len(self._snapshot) == 0

    def contains_key(self, key: str) -> bool:
        return key in self._snapshot

    def __contains__(self, key: object) -> bool:
        return key in self._snapshot

    def contains_value(self, value: str) -> bool:
        return value in self._snapshot.values()

    def keys(self) -> list[str]:
        return list(self._snapshot.keys())

    def values(self) -> list[str]:
        return list(self._snapshot.values())

    def items(self) -> list[tuple[str, str]]:
        return list(self._snapshot.items())

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    # --- typed reads ---

    def convert(self, type_: TypeLike, raw: str | None, pattern: str | None = None, default: Any = None) -> Any:
        """
        Convert raw with the converter registered for type_.

        Returns:
            The converted value, or default when raw is None or does not parse.

        Raises:
            UnsupportedTypeError: No converter is registered for type_.
        """
        converter = self._registry.lookup(type_)
        if raw is None:
            return default
        value = converter.parse(raw, pattern)
        return default if value is NO_MATCH else value

    def get(self, type_: TypeLike, key: str, pattern: str | None = None, default: Any = None) -> Any:
        """
        Typed value for key.

        Args:
            type_: TypeDescriptor (e.g. ``Types.INT``), aliased Python type, or descriptor name.
            key: Property key.
            pattern: Optional format pattern (temporal types).
            default: Returned when the key is absent or the value does not parse.

        Raises:
            UnsupportedTypeError: No converter is registered for type_, whether or not key exists.
        """
        return self.convert(type_, self._snapshot.get(key), pattern, default)

    def get_str(self, key: str, default: str | None = None) -> str | None:
        """Raw string value for key."""
        return self.get(Types.STRING, key, None, default)

    def get_list(
        self,
        type_: TypeLike,
        key: str,
        delimiter: str | re.Pattern[str],
        pattern: str | None = None,
        default: Any = None,
    ) -> list[Any]:
        """
        Split the value for key on the delimiter regex and convert each piece.

        Returns:
            [] when key is absent; otherwise one entry per piece, default for pieces that don't parse.

        Raises:
            UnsupportedTypeError: No converter is registered for type_.
            InvalidArgumentError: delimiter is empty.
        """
        if not (delimiter if isinstance(delimiter, str) else delimiter.pattern):
            raise InvalidArgumentError("delimiter must not be empty")
        converter = self._registry.lookup(type_)
        raw = self._snapshot.get(key)
        if raw is None:
            return []
        result = []
        for piece in split_values(raw, delimiter):
            value = converter.parse(piece, pattern)
            result.append(default if value is NO_MATCH else value)
        return result

    def group_names(self, prefix: str, suffix: str) -> list[str]:
        """
        Middle part of every key that starts with prefix and ends with suffix, in key order.

        Bounds are ``[len(prefix), key.rfind(suffix))``; when prefix and suffix
        overlap inside a short key the bounds cross and the name is "".
        """
        names = []
        for key in self._snapshot:
            if key.startswith(prefix) and key.endswith(suffix):
                begin = key.find(prefix) + len(prefix)
                end = key.rfind(suffix)
                names.append(key[begin:end])
        return names

    def keys_by_value(self, value: str) -> list[str]:
        """Keys whose value equals value, in key order."""
        return [k for k, v in self._snapshot.items() if v == value]

    # --- converter registry ---

    @property
    def converters(self) -> ConverterRegistry:
        return self._registry

    def register_converter(self, type_: TypeLike, converter: Converter) -> Converter | None:
        return self._registry.register(type_, converter)

    def unregister_converter(self, type_: TypeLike) -> Converter | None:
        return self._registry.unregister(type_)

    def clear_converters(self) -> None:
        self._registry.clear()

    def count_converters(self) -> int:
        return self._registry.count()

    def __repr__(self) -> str:
        return f"ConfigStore(source={str(self.source)!r}, interval_ms={self.interval_ms}, hot_loading={self.is_hot_loading})"
