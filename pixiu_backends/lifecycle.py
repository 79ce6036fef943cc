"""Signal handling and graceful shutdown for the sample providers."""

from __future__ import annotations

import logging
import os
import queue
import signal
import threading
from collections.abc import Iterable
from types import FrameType
from typing import Any

logger = logging.getLogger(__name__)

SURVIVAL_TIMEOUT = 3.0

_WATCHED_NAMES = ("SIGINT", "SIGHUP", "SIGQUIT", "SIGTERM")


def _watched_signals() -> list[signal.Signals]:
    return [getattr(signal, name) for name in _WATCHED_NAMES if hasattr(signal, name)]


class _SignalStream:
    """Iterator over received signals; restores the previous handlers on close."""

    def __init__(self, signals: Iterable[signal.Signals]) -> None:
        self._queue: queue.SimpleQueue[signal.Signals] = queue.SimpleQueue()
        self._previous: dict[signal.Signals, Any] = {}
        for sig in signals:
            self._previous[sig] = signal.signal(sig, self._handle)

    def _handle(self, signum: int, frame: FrameType | None) -> None:
        self._queue.put(signal.Signals(signum))

    def __iter__(self) -> _SignalStream:
        return self

    def __next__(self) -> signal.Signals:
        if not self._previous:
            raise StopIteration
        return self._queue.get()

    def close(self) -> None:
        """Put back the handlers that were installed before this stream."""
        for sig, handler in self._previous.items():
            signal.signal(sig, handler)
        self._previous.clear()

    def __enter__(self) -> _SignalStream:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def signal_stream() -> _SignalStream:
    """Catch the termination and hang-up signals and yield each one as it arrives.

    Must be called from the main thread. Handlers are installed at once and
    restored when the stream is closed.
    """
    return _SignalStream(_watched_signals())


def _exit_by_force() -> None:
    logger.warning("app exit now by force...")
    os._exit(1)


def force_exit_timer(timeout: float = SURVIVAL_TIMEOUT) -> threading.Timer:
    """Start a daemon timer that kills the process with status 1 after `timeout` seconds."""
    timer = threading.Timer(timeout, _exit_by_force)
    timer.daemon = True
    timer.start()
    return timer


def wait_for_shutdown(
    signals: Iterable[signal.Signals],
    survival_timeout: float = SURVIVAL_TIMEOUT,
) -> tuple[signal.Signals, threading.Timer] | None:
    """Wait for a shutdown signal, ignoring hang-ups.

    On the first other signal a forced-exit timer is armed and the signal
    and timer are returned. Returns None if the signals run out first.
    """
    hangup = getattr(signal, "SIGHUP", None)
    for sig in signals:
        logger.info("get signal %s", signal.Signals(sig).name)
        if hangup is not None and sig == hangup:
            continue
        timer = force_exit_timer(survival_timeout)
        print("provider app exit now...")
        return signal.Signals(sig), timer
    return None