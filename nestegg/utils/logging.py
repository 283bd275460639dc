"""Structured logging for the contribution planner."""

import json
import logging
import sys
import threading
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Optional

# Attributes every LogRecord carries; anything else came in through `extra`.
_RESERVED_ATTRS = frozenset((
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "pathname", "process", "processName", "relativeCreated",
    "stack_info", "exc_info", "exc_text", "thread", "threadName",
    "message", "taskName",
))


class JSONFormatter(logging.Formatter):
    """Format log records as JSON for structured logging."""

    def __init__(
        self,
        include_timestamp: bool = True,
        include_level: bool = True,
        include_logger: bool = True,
        include_location: bool = False,
        extra_fields: Optional[dict] = None,
    ):
        super().__init__()
        self.include_timestamp = include_timestamp
        self.include_level = include_level
        self.include_logger = include_logger
        self.include_location = include_location
        self.extra_fields = extra_fields or {}

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON string."""
        log_data: dict[str, Any] = {}

        if self.include_timestamp:
            created = datetime.fromtimestamp(record.created, tz=timezone.utc)
            log_data["timestamp"] = created.strftime("%Y-%m-%dT%H:%M:%S.%fZ")

        if self.include_level:
            log_data["level"] = record.levelname

        if self.include_logger:
            log_data["logger"] = record.name

        if self.include_location:
            log_data["location"] = {
                "file": record.pathname,
                "line": record.lineno,
                "function": record.funcName,
            }

        log_data["message"] = record.getMessage()

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS:
                continue
            try:
                json.dumps(value)
                log_data[key] = value
            except (TypeError, ValueError):
                log_data[key] = str(value)

        for key, value in self.extra_fields.items():
            if key not in log_data:
                log_data[key] = value

        return json.dumps(log_data, default=str)


class RunContextFilter(logging.Filter):
    """Add run context (input file, holding being sized, ...) to log records."""

    _context = threading.local()

    @classmethod
    def set_context(cls, **kwargs) -> None:
        """Set context values for current thread."""
        if not hasattr(cls._context, "data"):
            cls._context.data = {}
        cls._context.data.update(kwargs)

    @classmethod
    def clear_context(cls) -> None:
        """Clear context for current thread."""
        cls._context.data = {}

    @classmethod
    def get_context(cls) -> dict:
        """Get current context."""
        if not hasattr(cls._context, "data"):
            cls._context.data = {}
        return cls._context.data.copy()

    def filter(self, record: logging.LogRecord) -> bool:
        """Add context to log record."""
        for key, value in self.get_context().items():
            setattr(record, key, value)
        return True


class PlannerLogger:
    """
    Configured logger for the planner.

    Console output goes to stderr; stdout is reserved for the reports.
    """

    def __init__(
        self,
        name: str = "nestegg",
        level: str = "WARNING",
        log_file: Optional[str] = None,
        json_format: bool = False,
        max_bytes: int = 1024 * 1024,  # 1 MB
        backup_count: int = 3,
        console_output: bool = True,
        stream=None,
    ):
        self.name = name
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))
        self.logger.handlers = []

        # Filters on a logger skip records propagated from child loggers,
        # so the context filter sits on each handler instead.
        self.context_filter = RunContextFilter()

        if json_format:
            formatter = JSONFormatter(include_location=True)
        else:
            formatter = logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            )

        if console_output:
            console_handler = logging.StreamHandler(stream or sys.stderr)
            console_handler.setFormatter(formatter)
            console_handler.addFilter(self.context_filter)
            self.logger.addHandler(console_handler)

        if log_file:
            log_path = Path(log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=max_bytes,
                backupCount=backup_count,
            )
            file_handler.setFormatter(formatter)
            file_handler.addFilter(self.context_filter)
            self.logger.addHandler(file_handler)

        if not self.logger.handlers:
            self.logger.addHandler(logging.NullHandler())

    def set_context(self, **kwargs) -> None:
        """Set logging context for current thread."""
        RunContextFilter.set_context(**kwargs)

    def clear_context(self) -> None:
        """Clear logging context for current thread."""
        RunContextFilter.clear_context()

    def get_logger(self) -> logging.Logger:
        """Get the configured logger."""
        return self.logger


def setup_logging(
    level: str = "WARNING",
    log_file: Optional[str] = None,
    json_format: bool = False,
    console_output: bool = True,
) -> logging.Logger:
    """
    Set up logging for the planner.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Path to log file (optional)
        json_format: Use JSON formatting
        console_output: Output to stderr

    Returns:
        Configured logger
    """
    planner_logger = PlannerLogger(
        name="nestegg",
        level=level,
        log_file=log_file,
        json_format=json_format,
        console_output=console_output,
    )
    return planner_logger.get_logger()


def get_logger(name: str) -> logging.Logger:
    """Get a child logger with the nestegg parent."""
    return logging.getLogger(f"nestegg.{name}")


class LogContext:
    """Context manager for scoped logging context."""

    def __init__(self, **kwargs):
        self.context = kwargs
        self.previous_context: dict = {}

    def __enter__(self):
        self.previous_context = RunContextFilter.get_context()
        RunContextFilter.set_context(**self.context)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        RunContextFilter.clear_context()
        if self.previous_context:
            RunContextFilter.set_context(**self.previous_context)
        return False


def log_recommendation(
    logger: logging.Logger,
    phase: str,
    recommendation,
    remaining_budget: float,
    **kwargs,
) -> None:
    """Log an accepted purchase recommendation with structured data."""
    logger.info(
        f"{phase}: buy {recommendation.shares} {recommendation.symbol} "
        f"for {recommendation.cost:.2f} (remaining {remaining_budget:.2f})",
        extra={
            "event_type": "recommendation",
            "phase": phase,
            "symbol": recommendation.symbol,
            "shares": recommendation.shares,
            "cost": recommendation.cost,
            "remaining_budget": remaining_budget,
            **kwargs,
        },
    )


def log_projection(
    logger: logging.Logger,
    projection,
    **kwargs,
) -> None:
    """Log a retirement projection with structured data."""
    logger.info(
        f"Projection: {projection.future_value:.2f} in {projection.years_to_grow} years "
        f"({projection.percent_of_target:.1f}% of target)",
        extra={
            "event_type": "projection",
            **projection.to_dict(),
            **kwargs,
        },
    )
