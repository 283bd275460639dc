"""Retirement projection module."""

from .projector import (
    WITHDRAWAL_RATE_PCT,
    RetirementProjection,
    project_retirement,
    project_snapshot,
)

__all__ = [
    "WITHDRAWAL_RATE_PCT",
    "RetirementProjection",
    "project_retirement",
    "project_snapshot",
]
