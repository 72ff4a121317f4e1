"""Logging for jiracli.

Two rotating files live under ~/.jiracli/logs: jiracli.log for the
application loggers and performance.log for request timings. Handlers are
attached by configure_logging(), never at import time.
"""

import logging
import sys
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from .config import JIRACLI_HOME, JiraCliConfig

LOGS_DIR = JIRACLI_HOME / "logs"
ERROR_LOG = LOGS_DIR / "jiracli.log"
PERFORMANCE_LOG = LOGS_DIR / "performance.log"

LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

MAX_LOG_BYTES = 5 * 1024 * 1024
LOG_BACKUPS = 3
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_configured = False


def get_logger(name: str) -> logging.Logger:
    """Return the ``jiracli.<name>`` logger."""
    return logging.getLogger(f"jiracli.{name}")


def get_performance_logger() -> logging.Logger:
    return logging.getLogger("jiracli.performance")


def level_for(name: str) -> int:
    """Map a configured level name to a logging level; unknown names mean INFO."""
    return LEVELS.get(name.lower(), logging.INFO)


def _rotating_handler(path: Path, level: int, fmt: str) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        path, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8"
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=DATE_FORMAT))
    return handler


def _attach_app_handlers(config: JiraCliConfig, verbose: bool) -> None:
    root = logging.getLogger("jiracli")
    root.setLevel(logging.DEBUG)
    root.addHandler(
        _rotating_handler(
            ERROR_LOG,
            level_for(config.logging.level),
            "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        )
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(logging.DEBUG if verbose else level_for(config.logging.console_level))
    console.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    root.addHandler(console)


def _attach_performance_handler() -> None:
    perf = get_performance_logger()
    perf.setLevel(logging.INFO)
    perf.addHandler(_rotating_handler(PERFORMANCE_LOG, logging.INFO, "%(asctime)s | %(message)s"))
    # Timings stay out of jiracli.log and off the console
    perf.propagate = False


def log_performance(operation: str, duration_ms: float, **metrics: Any) -> None:
    """Write one ``op=... | duration_ms=... | key=value`` line."""
    fields = [f"op={operation}", f"duration_ms={duration_ms:.2f}"]
    fields.extend(f"{key}={value}" for key, value in metrics.items())
    get_performance_logger().info(" | ".join(fields))


class PerformanceTimer:
    """Time a block and log it, with an ``error`` metric if the block raised.

        with PerformanceTimer("http_get", url=url) as timer:
            response = http.get(url)
            timer.add_metric("status", response.status_code)
    """

    def __init__(self, operation: str, **metrics: Any):
        self.operation = operation
        self.metrics = metrics
        self._started: datetime | None = None

    def __enter__(self) -> "PerformanceTimer":
        self._started = datetime.now(UTC)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._started is None:
            return
        elapsed_ms = (datetime.now(UTC) - self._started).total_seconds() * 1000
        if exc_type is not None:
            self.metrics["error"] = exc_type.__name__
        log_performance(self.operation, elapsed_ms, **self.metrics)

    def add_metric(self, key: str, value: Any) -> None:
        self.metrics[key] = value


def configure_logging(config: JiraCliConfig, verbose: bool = False) -> None:
    """Attach the file and console handlers once per process.

    ``verbose`` lowers the console threshold to DEBUG regardless of the
    configured ``console_level``.
    """
    global _configured

    if _configured:
        return

    LOGS_DIR.mkdir(parents=True, exist_ok=True)
    _attach_app_handlers(config, verbose)
    _attach_performance_handler()
    _configured = True
