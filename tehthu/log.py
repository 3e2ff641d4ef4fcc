"""
Diagnostics log shared between the translator and a log viewer.

Parsing and translation report non-fatal anomalies (malformed rows,
ambiguous mappings, missing words) as single lines of text. Lines are
queued in a bounded FIFO that a viewer drains from another thread:

- push() is a no-op until a consumer has attached, so an application
  that never reads the log never fills it up
- push() blocks while the queue is full
- pop() attaches implicitly and blocks while the queue is empty
- close() wakes every waiter; pop() on a closed, drained log raises LogClosed

Every line is also forwarded to the ``tehthu.diagnostics`` logger, whether
or not a consumer is attached, so ordinary logging configuration sees it.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Deque, Optional

from tehthu.config import LOG_CAPACITY

logger = logging.getLogger("tehthu.diagnostics")

# Severity prefix -> logging level for the mirror logger
_LEVELS = (
    ("Critical error:", logging.ERROR),
    ("Error:", logging.ERROR),
    ("Warning:", logging.WARNING),
    ("Note:", logging.INFO),
    ("Info:", logging.DEBUG),
)


class LogClosed(Exception):
    """Raised by pop() once the log is closed and has nothing left."""


def level_for(line: str) -> int:
    """Logging level matching the severity prefix of a diagnostic line."""
    for prefix, level in _LEVELS:
        if line.startswith(prefix):
            return level
    return logging.INFO


class DiagnosticsLog:
    """Bounded, blocking producer/consumer queue of diagnostic lines.

    Safe to use from any number of producer and consumer threads. Waiting
    consumers are not woken in any particular order.
    """

    def __init__(self, capacity: int = LOG_CAPACITY):
        if capacity < 1:
            raise ValueError("Log capacity must be at least 1")
        self.capacity = capacity
        self._lines: Deque[str] = deque()
        self._cond = threading.Condition()
        self._attached = False
        self._closed = False

    def __len__(self) -> int:
        with self._cond:
            return len(self._lines)

    @property
    def attached(self) -> bool:
        return self._attached

    @property
    def closed(self) -> bool:
        return self._closed

    def attach(self) -> None:
        """Declare that a consumer will drain the log."""
        with self._cond:
            self._attached = True

    def detach(self) -> None:
        """Stop queueing new lines. Lines already queued are kept."""
        with self._cond:
            self._attached = False
            # Producers waiting for room would otherwise wait for a reader
            # that is never coming.
            self._cond.notify_all()

    def push(self, line: str) -> None:
        """Queue a line, blocking while the log is full."""
        logger.log(level_for(line), line)
        with self._cond:
            while self._attached and not self._closed and len(self._lines) >= self.capacity:
                self._cond.wait()
            if not self._attached or self._closed:
                return
            self._lines.append(line)
            self._cond.notify_all()

    def pop(self, timeout: Optional[float] = None) -> Optional[str]:
        """Take the oldest line, blocking until one is available.

        Args:
            timeout: Seconds to wait; None waits forever

        Returns:
            The line, or None if the timeout expired first

        Raises:
            LogClosed: the log was closed and every line has been taken
        """
        with self._cond:
            self._attached = True
            available = self._cond.wait_for(
                lambda: self._lines or self._closed, timeout=timeout
            )
            if not available:
                return None
            if not self._lines:
                raise LogClosed("Diagnostics log is closed")
            line = self._lines.popleft()
            self._cond.notify_all()
            return line

    def drain(self) -> list[str]:
        """Take every queued line without blocking."""
        with self._cond:
            lines = list(self._lines)
            self._lines.clear()
            self._cond.notify_all()
            return lines

    def close(self) -> None:
        """Wake all waiters and refuse further lines."""
        with self._cond:
            self._closed = True
            self._cond.notify_all()
