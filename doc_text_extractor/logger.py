"""Logging utilities for doc-text-extractor."""

import logging
import sys
import time
import uuid
from contextvars import ContextVar
from typing import Any, Optional, TextIO

# Set per extraction call so every log line of one call can be correlated
extraction_id_var: ContextVar[Optional[str]] = ContextVar("extraction_id", default=None)


class ContextLogger:
    """Logger wrapper that appends structured data to log messages."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    @staticmethod
    def _format_extra_data(extra_data: Optional[dict[str, Any]]) -> str:
        if not extra_data:
            return ""
        parts = [f"{k}={v}" for k, v in extra_data.items()]
        return " [" + ", ".join(parts) + "]"

    def _log(self, level: int, msg: str, extra_data: Optional[dict[str, Any]] = None, **kwargs):
        if not self.logger.isEnabledFor(level):
            return

        extraction_id = extraction_id_var.get()
        if extraction_id:
            extra_data = {**(extra_data or {}), "extraction_id": extraction_id}

        self.logger.log(level, msg + self._format_extra_data(extra_data), **kwargs)

    def debug(self, msg: str, extra_data: Optional[dict[str, Any]] = None, **kwargs):
        self._log(logging.DEBUG, msg, extra_data, **kwargs)

    def info(self, msg: str, extra_data: Optional[dict[str, Any]] = None, **kwargs):
        self._log(logging.INFO, msg, extra_data, **kwargs)

    def warning(self, msg: str, extra_data: Optional[dict[str, Any]] = None, **kwargs):
        self._log(logging.WARNING, msg, extra_data, **kwargs)

    def error(self, msg: str, extra_data: Optional[dict[str, Any]] = None, **kwargs):
        self._log(logging.ERROR, msg, extra_data, **kwargs)


def setup_logging(log_level: str = "INFO", stream: Optional[TextIO] = None):
    """Configure application logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        stream: Where log lines go. Defaults to stderr so stdout stays free
            for extracted text.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    # botocore is chatty at DEBUG; keep it one notch quieter than ours
    logging.getLogger("botocore").setLevel(max(level, logging.INFO))


def get_logger(name: str) -> ContextLogger:
    """Get a context-aware logger instance (name is typically __name__)."""
    return ContextLogger(logging.getLogger(name))


def set_extraction_id(extraction_id: Optional[str] = None) -> str:
    """Set the extraction ID for the current context, generating one if needed."""
    if extraction_id is None:
        extraction_id = uuid.uuid4().hex[:12]
    extraction_id_var.set(extraction_id)
    return extraction_id


class Timer:
    """Context manager measuring elapsed wall time in milliseconds."""

    def __init__(self, name: str):
        self.name = name
        self.start_time: Optional[float] = None
        self.elapsed_ms: Optional[int] = None

    def __enter__(self) -> "Timer":
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, *args):
        if self.start_time is not None:
            self.elapsed_ms = int((time.perf_counter() - self.start_time) * 1000)

    def get_elapsed_ms(self) -> int:
        """Elapsed time so far, or the final value once the block has exited."""
        if self.elapsed_ms is not None:
            return self.elapsed_ms
        if self.start_time is not None:
            return int((time.perf_counter() - self.start_time) * 1000)
        return 0
