"""
Periodic reload ticker: a daemon thread paired with a stop event.

- start(): first tick fires one interval after start, then once per interval.
- stop(): sets the stop event and joins the thread, so no tick runs after it returns;
  a tick already in progress finishes first.
- Both are idempotent and serialized; a failing callback is logged and the ticker keeps going.
"""

import math
import threading
from typing import Callable

import structlog

from hotprops.exceptions import InvalidArgumentError

logger = structlog.get_logger(__name__)


class ReloadScheduler:
    """Call ``callback`` every ``interval`` seconds on a daemon thread."""

    def __init__(self, callback: Callable[[], object], interval: float, name: str = "hotprops-reload"):
        if not interval > 0 or not math.isfinite(interval):
            raise InvalidArgumentError(f"interval must be a finite number greater than 0, got {interval!r}")
        self.callback = callback
        self.interval = interval
        self.name = name
        self._lock = threading.Lock()
        self._stop: threading.Event | None = None
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None

    def start(self) -> bool:
        """Start ticking; returns False if already running."""
        with self._lock:
            if self._thread is not None:
                return False
            stop = threading.Event()
            thread = threading.Thread(target=self._run, args=(stop,), name=self.name, daemon=True)
            self._stop = stop
            self._thread = thread
            thread.start()
        logger.debug("scheduler_started", name=self.name, interval_seconds=self.interval)
        return True

    def stop(self) -> bool:
        """Stop ticking and wait for the thread; returns False if not running."""
        with self._lock:
            if self._thread is None:
                return False
            stop, thread = self._stop, self._thread
            self._stop = None
            self._thread = None
            stop.set()
            if thread is not threading.current_thread():
                thread.join()
        logger.debug("scheduler_stopped", name=self.name)
        return True

    def _run(self, stop: threading.Event) -> None:
        while not stop.wait(self.interval):
            try:
                self.callback()
            except Exception as e:
                logger.warning("reload_tick_failed", name=self.name, error=str(e), error_type=type(e).__name__)
