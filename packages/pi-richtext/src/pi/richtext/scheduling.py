"""Deferred work: restartable debounce timers and an ordered job pipeline."""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from typing import Callable

from pi.richtext.errors import RichTextError

logger = logging.getLogger(__name__)


class Debouncer:
    """Coalesces bursts of triggers into one callback after ``delay`` seconds.

    Every ``trigger`` cancels the pending timer and starts a new one. When
    no asyncio loop is running the callback runs synchronously.
    """

    def __init__(self, callback: Callable[[], None], delay: float) -> None:
        self._callback = callback
        self._delay = delay
        self._handle: asyncio.TimerHandle | None = None

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def trigger(self) -> None:
        self.cancel()
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No running loop - fire now
            self._callback()
            return
        self._handle = loop.call_later(self._delay, self._fire)

    def _fire(self) -> None:
        self._handle = None
        self._callback()

    def flush(self) -> None:
        """Run a pending callback immediately."""
        if self._handle is not None:
            self._handle.cancel()
            self._fire()

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None


class EventPipeline:
    """Runs jobs one at a time, in submission order.

    A job submitted while another job is running (for example from a
    document event fired by the running job's own mutation) is queued and
    runs after the current job returns. Rich-text errors raised by a job
    are logged and do not stop later jobs.
    """

    def __init__(self) -> None:
        self._queue: deque[tuple[str, Callable[[], None]]] = deque()
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def submit(self, name: str, job: Callable[[], None]) -> None:
        self._queue.append((name, job))
        if self._running:
            return
        self._drain()

    def _drain(self) -> None:
        self._running = True
        try:
            while self._queue:
                name, job = self._queue.popleft()
                try:
                    job()
                except RichTextError as e:
                    logger.warning("Step %r failed: %s", name, e)
        finally:
            self._running = False

    def clear(self) -> None:
        self._queue.clear()
