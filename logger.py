"""Simple logger abstraction."""

from __future__ import annotations

import sys
from typing import Callable, List, TextIO


_LEVELS = {"DEBUG": 10, "INFO": 20, "WARN": 30, "ERROR": 40}

Observer = Callable[[str, str], None]


class Logger:
    """Minimal structured logger with level filtering and observers.

    Observers receive ``(level, message)`` for every emitted line, so callers
    can collect pipeline narration without parsing console output.
    """

    def __init__(self, level: str = "INFO", stream: TextIO | None = None) -> None:
        self._level = _LEVELS.get(level.upper(), _LEVELS["INFO"])
        self._stream = stream
        self._observers: List[Observer] = []

    def set_stream(self, stream: TextIO | None) -> None:
        self._stream = stream

    def set_level(self, level: str) -> None:
        self._level = _LEVELS.get(level.upper(), _LEVELS["INFO"])

    def subscribe(self, observer: Observer) -> None:
        self._observers.append(observer)

    def unsubscribe(self, observer: Observer) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def _emit(self, level: str, message: str) -> None:
        if self._level > _LEVELS[level]:
            return
        stream = self._stream or sys.stdout
        print(message, file=stream)
        for observer in list(self._observers):
            observer(level, message)

    def debug(self, message: str) -> None:
        self._emit("DEBUG", message)

    def info(self, message: str) -> None:
        self._emit("INFO", message)

    def warn(self, message: str) -> None:
        self._emit("WARN", message)

    def error(self, message: str) -> None:
        self._emit("ERROR", message)


_LOGGER = Logger()


def get_logger() -> Logger:
    """Return the shared logger instance."""
    return _LOGGER
