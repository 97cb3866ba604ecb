"""Immutable ordered key/value snapshot of a properties source."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType


class ConfigSnapshot(Mapping[str, str]):
    """
    Read-only ordered mapping captured from the source at one point in time.

    Keys keep first-seen order; a duplicate key overwrites the value in place.
    ``modified`` is the source's ``st_mtime_ns`` when the snapshot was taken.
    """

    __slots__ = ("_data", "_modified")

    def __init__(self, data: Mapping[str, str] | None = None, modified: int = 0):
        self._data = MappingProxyType(dict(data or {}))
        self._modified = modified

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]], modified: int = 0) -> "ConfigSnapshot":
        """Build from (key, value) pairs in one pass; last write wins, first position kept."""
        data: dict[str, str] = {}
        for key, value in pairs:
            data[key] = value
        return cls(data, modified)

    @property
    def modified(self) -> int:
        return self._modified

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __repr__(self) -> str:
        return f"ConfigSnapshot({dict(self._data)!r}, modified={self._modified})"
