"""Utility modules for the contribution planner."""

from .logging import (
    setup_logging,
    get_logger,
    LogContext,
    PlannerLogger,
    JSONFormatter,
    RunContextFilter,
    log_recommendation,
    log_projection,
)
from .numeric import format_number, ieee_divide, ieee_power, truncate_shares

__all__ = [
    "setup_logging",
    "get_logger",
    "LogContext",
    "PlannerLogger",
    "JSONFormatter",
    "RunContextFilter",
    "log_recommendation",
    "log_projection",
    "format_number",
    "ieee_divide",
    "ieee_power",
    "truncate_shares",
]
