"""
debug.py - Debug and logging support for the connect4ab engine

A single DebugManager instance (``debug``) wraps a standard library logger
named ``connect4ab``. Messages carry an optional component tag ("board",
"search", "game", "env", "cli") so noisy parts of the engine can be
filtered out, and named timers report how long a search or benchmark took.
"""

import logging
import sys
import time
from enum import Enum
from typing import Dict, Iterable, Optional, Set


class DebugLevel(Enum):
    NONE = 0
    ERROR = 1
    WARNING = 2
    INFO = 3
    DEBUG = 4
    TRACE = 5


# Python logging has no TRACE level; it is emitted as DEBUG with a prefix
LEVEL_MAP = {
    DebugLevel.NONE: logging.CRITICAL + 10,
    DebugLevel.ERROR: logging.ERROR,
    DebugLevel.WARNING: logging.WARNING,
    DebugLevel.INFO: logging.INFO,
    DebugLevel.DEBUG: logging.DEBUG,
    DebugLevel.TRACE: logging.DEBUG,
}

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class DebugManager:
    """Component-aware logging facade used throughout the engine."""

    def __init__(self, name: str = "connect4ab"):
        self._level = DebugLevel.WARNING
        self._enabled = True
        self._log_file: Optional[str] = None
        self._components: Set[str] = set()  # empty means every component
        self._timers: Dict[str, float] = {}
        self._logger = logging.getLogger(name)
        self._logger.setLevel(LEVEL_MAP[self._level])
        if not self._logger.handlers:
            console = logging.StreamHandler(sys.stderr)
            console.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S'))
            self._logger.addHandler(console)

    @property
    def level(self) -> DebugLevel:
        return self._level

    def configure(self, level: Optional[DebugLevel] = None,
                  enabled: Optional[bool] = None,
                  log_file: Optional[str] = None,
                  components: Optional[Iterable[str]] = None) -> None:
        """
        Change logging settings. Arguments left as None keep their value.

        Args:
            level: Most verbose level that is still emitted
            enabled: Master switch for all output
            log_file: Path of an additional log file ("" removes it)
            components: Components to keep (empty for all)
        """
        if level is not None:
            self._level = level
            self._logger.setLevel(LEVEL_MAP[level])

        if enabled is not None:
            self._enabled = enabled

        if log_file is not None:
            for handler in list(self._logger.handlers):
                if isinstance(handler, logging.FileHandler):
                    self._logger.removeHandler(handler)
                    handler.close()
            self._log_file = log_file or None
            if self._log_file:
                file_handler = logging.FileHandler(self._log_file)
                file_handler.setFormatter(
                    logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
                self._logger.addHandler(file_handler)

        if components is not None:
            self._components = set(components)

    def is_enabled_for(self, level: DebugLevel, component: Optional[str] = None) -> bool:
        """Cheap check so callers can skip building expensive messages."""
        if not self._enabled or self._level == DebugLevel.NONE:
            return False
        if level.value > self._level.value:
            return False
        if component and self._components and component not in self._components:
            return False
        return True

    def log(self, level: DebugLevel, message: str, component: Optional[str] = None) -> None:
        if not self.is_enabled_for(level, component):
            return

        if component:
            message = f"[{component}] {message}"
        if level == DebugLevel.TRACE:
            message = f"TRACE: {message}"
        self._logger.log(LEVEL_MAP[level], message)

    def error(self, message: str, component: Optional[str] = None) -> None:
        self.log(DebugLevel.ERROR, message, component)

    def warning(self, message: str, component: Optional[str] = None) -> None:
        self.log(DebugLevel.WARNING, message, component)

    def info(self, message: str, component: Optional[str] = None) -> None:
        self.log(DebugLevel.INFO, message, component)

    def debug(self, message: str, component: Optional[str] = None) -> None:
        self.log(DebugLevel.DEBUG, message, component)

    def trace(self, message: str, component: Optional[str] = None) -> None:
        self.log(DebugLevel.TRACE, message, component)

    def start_timer(self, marker_name: str) -> None:
        self._timers[marker_name] = time.perf_counter()

    def end_timer(self, marker_name: str, component: Optional[str] = None) -> Optional[float]:
        """
        Stop a timer started with start_timer and log the elapsed time.

        Returns:
            Elapsed seconds, or None if the timer was never started
        """
        started = self._timers.pop(marker_name, None)
        if started is None:
            self.warning(f"Timer '{marker_name}' not started", "debug")
            return None

        elapsed = time.perf_counter() - started
        self.debug(f"Timer [{marker_name}]: {elapsed:.6f} seconds", component)
        return elapsed

    def set_from_string(self, level_str: str) -> None:
        """Set the level from a command line value such as "debug"."""
        try:
            level = DebugLevel[level_str.upper()]
        except KeyError:
            raise ValueError(f"Unknown debug level: {level_str}") from None
        self.configure(level=level)
        self.info(f"Debug level set to {level.name}")


debug = DebugManager()
