"""Input loading and validation."""

from .validator import (
    DEFAULT_DATA_PATH,
    SnapshotValidationError,
    SnapshotValidator,
    ValidationResult,
    load_snapshot,
    validate_snapshot_file,
)

__all__ = [
    "DEFAULT_DATA_PATH",
    "SnapshotValidationError",
    "SnapshotValidator",
    "ValidationResult",
    "load_snapshot",
    "validate_snapshot_file",
]
