"""
Application state for interactive front ends.

A Session owns everything a front end needs between user actions: the
current Translator, the translation direction, the settings record and a
LogMonitor thread that forwards diagnostics to a callback. Opening a new
dictionary replaces the Translator wholesale.

LogMonitor is stopped cooperatively: it polls the log with a short timeout
and exits once its stop event is set or the log is closed.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

from tehthu.log import DiagnosticsLog, LogClosed
from tehthu.settings import SettingsStore
from tehthu.translate import Direction, Translator, TranslatorConfig

logger = logging.getLogger("tehthu.session")

# Receives each diagnostic line
LineCallback = Callable[[str], None]


class LogMonitor(threading.Thread):
    """Daemon thread draining a DiagnosticsLog into a callback."""

    def __init__(self, log: DiagnosticsLog, callback: LineCallback, poll_interval: float = 0.2):
        super().__init__(name="tehthu-log-monitor", daemon=True)
        self.log = log
        self.callback = callback
        self.poll_interval = poll_interval
        self._stop_event = threading.Event()
        self.log.attach()

    def run(self) -> None:
        while not self._stop_event.is_set():
            try:
                line = self.log.pop(timeout=self.poll_interval)
            except LogClosed:
                break
            if line is not None:
                self.callback(line)
        for line in self.log.drain():
            self.callback(line)

    def stop(self, timeout: float | None = 2.0) -> None:
        """Ask the thread to finish and wait for it."""
        self._stop_event.set()
        if self.is_alive():
            self.join(timeout)


@dataclass
class Session:
    """Top-level state held by a front end.

    Attributes:
        config: Settings for every Translator the session creates
        settings: Persisted "last dictionary" record
        on_log_line: Where diagnostics are delivered; None leaves the log
            disconnected
        direction: Current translation direction
    """
    config: TranslatorConfig = field(default_factory=TranslatorConfig)
    settings: SettingsStore = field(default_factory=SettingsStore)
    on_log_line: Optional[LineCallback] = None
    direction: Direction = Direction.LEFT_TO_RIGHT
    translator: Optional[Translator] = field(default=None, init=False)
    monitor: Optional[LogMonitor] = field(default=None, init=False)

    @property
    def ready(self) -> bool:
        """Whether a dictionary is loaded and input can be accepted."""
        return self.translator is not None

    def open_dictionary(self, path: str | Path, remember: bool = True) -> bool:
        """Load a dictionary, replacing the current one.

        With remember set, the dictionary is recorded in the settings once
        it has parsed.

        Returns:
            Whether the dictionary parsed; on False the session is not ready

        Raises:
            DictionaryNotFoundError: path does not exist
        """
        translator = Translator(path, self.config)
        self._stop_monitor()
        if self.translator is not None:
            self.translator.disconnect_log()
            self.translator.log.close()
        self.translator = translator

        if self.on_log_line is not None:
            self.monitor = LogMonitor(translator.log, self.on_log_line)
            self.monitor.start()

        if not translator.reparse():
            logger.error("Dictionary %s could not be parsed", path)
            self.translator = None
            return False

        if remember:
            self.settings.remember_dictionary(translator.file)
        return True

    def reload(self) -> bool:
        if self.translator is None:
            return False
        return self.translator.reparse()

    def swap_direction(self) -> Direction:
        self.direction = self.direction.reverse
        return self.direction

    def language_names(self) -> tuple[str, str]:
        """(input language, output language) for the current direction."""
        if self.translator is None:
            return "", ""
        left = self.translator.left_language_name
        right = self.translator.right_language_name
        if self.direction is Direction.LEFT_TO_RIGHT:
            return left, right
        return right, left

    def translate(self, text: str) -> Optional[str]:
        if self.translator is None:
            raise RuntimeError("No dictionary is loaded")
        return self.translator.translate_sentence(text, self.direction)

    def _stop_monitor(self) -> None:
        if self.monitor is not None:
            self.monitor.stop()
            self.monitor = None

    def close(self) -> None:
        self._stop_monitor()
        if self.translator is not None:
            self.translator.disconnect_log()
            self.translator.log.close()
