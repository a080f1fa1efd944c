"""Console logging for the chipjax emulator.

One ``ConsoleLogger`` is shared by the CLI, the CPU thread and the window
loop, so writes are serialized with a lock. Lines look like::

    [    0.42s][    INFO][chipjax] Loaded 246 bytes, starting emulator
"""

import sys
import threading
import time
from dataclasses import asdict, is_dataclass
from typing import Any, Optional, TextIO


LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

LEVEL_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
RESET = "\033[0m"


class ConsoleLogger:
    """Leveled console logger with optional colours and relative timestamps."""

    def __init__(
        self,
        name: str = "chipjax",
        log_level: str = "INFO",
        use_colors: bool = True,
        show_timestamps: bool = True,
        stream: Optional[TextIO] = None,
    ):
        self.name = name
        self.stream = stream if stream is not None else sys.stdout
        self.set_level(log_level)
        # Colour only when a terminal is listening
        self.use_colors = use_colors and getattr(self.stream, "isatty", lambda: False)()
        self.show_timestamps = show_timestamps
        self.start_time = time.time()
        self._lock = threading.Lock()

    def set_level(self, log_level: str):
        level = log_level.upper()
        if level not in LEVELS:
            raise ValueError(f"Unknown log level '{log_level}'. Available: {list(LEVELS)}")
        self.log_level = level
        self._threshold = LEVELS.index(level)

    def is_enabled_for(self, level: str) -> bool:
        """True if a message at ``level`` would be printed."""
        return LEVELS.index(level.upper()) >= self._threshold

    def _format_message(self, level: str, message: str) -> str:
        timestamp = f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        level_str = f"[{level:>8s}]"
        if self.use_colors:
            level_str = f"{LEVEL_COLORS[level]}{level_str}{RESET}"
        return f"{timestamp}{level_str}[{self.name}] {message}"

    def log(self, level: str, message: str):
        """Log a message at the specified level."""
        level = level.upper()
        if not self.is_enabled_for(level):
            return
        line = self._format_message(level, message)
        with self._lock:
            print(line, file=self.stream, flush=True)

    def debug(self, message: str):
        self.log("DEBUG", message)

    def info(self, message: str):
        self.log("INFO", message)

    def warning(self, message: str):
        self.log("WARNING", message)

    def error(self, message: str):
        self.log("ERROR", message)

    def critical(self, message: str):
        self.log("CRITICAL", message)

    def log_config(self, config: Any):
        """Dump a configuration object at DEBUG level, one setting per line."""
        settings = asdict(config) if is_dataclass(config) else dict(config)
        self.debug("Configuration:")
        for key, value in settings.items():
            self.debug(f"  {key}: {value}")
