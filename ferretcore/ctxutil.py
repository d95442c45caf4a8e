"""Cancellation helpers built on threading events."""

from __future__ import annotations

import datetime as _dt
import threading
from typing import Callable

_POLL_INTERVAL = 0.01


def with_delay(
    done: threading.Event, delay: float | _dt.timedelta
) -> tuple[threading.Event, Callable[[], None]]:
    """Return an event set ``delay`` seconds after ``done`` is set, and a function that sets it now.

    Calling the returned function cancels the wait and releases the watcher thread.
    """
    seconds = delay.total_seconds() if isinstance(delay, _dt.timedelta) else float(delay)
    cancelled = threading.Event()

    def watch() -> None:
        while not cancelled.is_set():
            if done.wait(_POLL_INTERVAL):
                cancelled.wait(max(seconds, 0.0))
                cancelled.set()
                return

    threading.Thread(target=watch, name="with-delay", daemon=True).start()
    return cancelled, cancelled.set