from __future__ import annotations

import logging
import sys
from typing import Iterable

# Chatty third-party loggers that --debug should not drown the console with.
NOISY_LOGGERS = ("urllib3", "influxdb_client")


def _default_logger_name() -> logging.Logger:
    return logging.getLogger("energy_influx")


class ConsoleLog:
    """Configure console logging for the application."""

    def __init__(self, level: str = "INFO", quiet: bool = False, debug_modules: Iterable[str] | None = None):
        self.level = level.upper()
        self.quiet = quiet
        self.debug_modules = list(debug_modules or [])

    def setup(self) -> logging.Logger:
        # Root logger handles all levels; handlers control visibility.
        root = logging.getLogger()
        root.handlers.clear()
        root.setLevel(logging.DEBUG)

        if not self.quiet:
            handler = logging.StreamHandler(sys.stdout)
            handler.setLevel(getattr(logging, self.level, logging.INFO))
            fmt = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
            handler.setFormatter(logging.Formatter(fmt, datefmt="%Y-%m-%d %H:%M:%S"))
            root.addHandler(handler)

        for name in NOISY_LOGGERS:
            if name not in self.debug_modules:
                logging.getLogger(name).setLevel(logging.INFO)

        for name in self.debug_modules:
            logging.getLogger(name).setLevel(logging.DEBUG)

        return _default_logger_name()
