"""Pytest fixtures: sample properties file, store factory, settings/logging reset."""

import os
import time
from pathlib import Path
from typing import Callable

import pytest
import structlog

from hotprops.config.loader import reset_settings_cache
from hotprops.store import ConfigStore

SAMPLE_PROPERTIES = """\
# sample application properties
app.name = demo
app.port = 8080
app.debug = yes
app.db.host = db.local
app.cache.host = cache.local
numbers = 1,,3
empty =
dup = first
start.date = 2023-01-01
dup = second
colors = red, green ,blue
"""


def write_properties(path: Path, text: str, bump_ns: int | None = None) -> None:
    """Write text and, when bump_ns is given, move the mtime forward by that many ns."""
    before = path.stat().st_mtime_ns if path.exists() else None
    path.write_text(text, encoding="utf-8")
    if bump_ns is not None and before is not None:
        ns = before + bump_ns
        os.utime(path, ns=(ns, ns))


def wait_until(predicate: Callable[[], bool], timeout: float = 3.0, step: float = 0.01) -> bool:
    """Poll predicate until it is true or timeout elapses."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(step)
    return predicate()


@pytest.fixture(autouse=True)
def _reset_global_state():
    """Settings cache and structlog config are process-wide; reset after each test."""
    reset_settings_cache()
    yield
    reset_settings_cache()
    structlog.reset_defaults()


@pytest.fixture
def properties_file(tmp_path):
    """Temporary app.properties with SAMPLE_PROPERTIES."""
    path = tmp_path / "app.properties"
    path.write_text(SAMPLE_PROPERTIES, encoding="utf-8")
    return path


@pytest.fixture
def make_store():
    """Factory for ConfigStore; closes hot loading of every store on teardown."""
    stores: list[ConfigStore] = []

    def _make(source, interval_ms: int = 50, **kwargs) -> ConfigStore:
        store = ConfigStore(source, interval_ms, **kwargs)
        stores.append(store)
        return store

    yield _make
    for store in stores:
        store.close_hot_load()


@pytest.fixture
def store(properties_file, make_store):
    """Store over the sample properties file (hot loading closed)."""
    return make_store(properties_file)
