"""Loading and structural validation of the portfolio input document."""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from ..portfolio.models import PortfolioSnapshot

logger = logging.getLogger(__name__)

DEFAULT_DATA_PATH = "data.json"

YAML_SUFFIXES = (".yaml", ".yml")


class SnapshotValidationError(Exception):
    """Raised when the input document cannot be parsed or has the wrong shape."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Portfolio data validation failed: {'; '.join(errors)}")


@dataclass
class ValidationResult:
    """Result of input document validation."""
    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.valid


# Types and presence only. Ranges are deliberately unchecked: negative ages,
# negative quotes and allocations that do not sum to 100 are all accepted.
HOLDING_SCHEMA = {
    "symbol": {"type": str, "required": True},
    "quote": {"type": float, "required": True},
    "number_of_shares": {"type": int, "required": True},
    "target_allocation": {"type": float, "required": True},
    "is_usd": {"type": bool, "required": True},
}

SNAPSHOT_SCHEMA = {
    "stocks": {"type": list, "required": True, "items": HOLDING_SCHEMA},
    "annual_expenses": {"type": float, "required": True},
    "target_retirement_age": {"type": int, "required": True},
    "current_age": {"type": int, "required": True},
    "target_growth_rate": {"type": float, "required": True},
    "usd_to_cad_exchange_rate": {"type": float, "required": True},
    "expected_contribution": {"type": float, "required": True},
}


class SnapshotValidator:
    """Validates a parsed input document against the snapshot schema."""

    def __init__(self, schema: Optional[dict] = None):
        self.schema = schema or SNAPSHOT_SCHEMA

    def validate(self, document: Any) -> ValidationResult:
        """
        Validate a parsed document.

        Args:
            document: Result of parsing the input file

        Returns:
            ValidationResult with errors and warnings
        """
        errors: list[str] = []
        warnings: list[str] = []

        if not isinstance(document, dict):
            errors.append(
                f"document: Expected object, got {type(document).__name__}"
            )
        else:
            self._validate_object(document, self.schema, "", errors, warnings)

        return ValidationResult(
            valid=len(errors) == 0,
            errors=errors,
            warnings=warnings,
        )

    def _validate_object(
        self,
        data: dict,
        schema: dict,
        path: str,
        errors: list,
        warnings: list,
    ) -> None:
        """Validate every schema field of one object and flag unknown keys."""
        for key, rules in schema.items():
            full_path = f"{path}.{key}" if path else key
            self._validate_field(full_path, data.get(key), key in data, rules, errors, warnings)

        for key in data:
            if key not in schema:
                full_path = f"{path}.{key}" if path else key
                warnings.append(f"{full_path}: Unknown field is ignored")

    def _validate_field(
        self,
        path: str,
        value: Any,
        present: bool,
        rules: dict,
        errors: list,
        warnings: list,
    ) -> None:
        """Validate a single field against its rules."""
        if not present:
            if rules.get("required"):
                errors.append(f"{path}: Required field is missing")
            return

        expected_type = rules["type"]
        if not self._matches_type(value, expected_type):
            errors.append(
                f"{path}: Expected {expected_type.__name__}, got {type(value).__name__}"
            )
            return

        item_schema = rules.get("items")
        if item_schema is not None:
            for index, item in enumerate(value):
                item_path = f"{path}[{index}]"
                if not isinstance(item, dict):
                    errors.append(f"{item_path}: Expected object, got {type(item).__name__}")
                    continue
                self._validate_object(item, item_schema, item_path, errors, warnings)

    @staticmethod
    def _matches_type(value: Any, expected_type: type) -> bool:
        # bool is an int subclass; true/false are never numbers here
        if isinstance(value, bool):
            return expected_type is bool
        if expected_type is float:
            return isinstance(value, (int, float))
        return isinstance(value, expected_type)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not a valid JSON number")


def parse_document(path: Path) -> Any:
    """
    Parse the input file as YAML or JSON depending on its suffix.

    JSON is strict: the NaN/Infinity literals Python's json accepts are
    rejected.

    Raises:
        SnapshotValidationError: If the file is not well-formed
    """
    try:
        with open(path, encoding="utf-8") as f:
            text = f.read()
    except UnicodeDecodeError as e:
        raise SnapshotValidationError([f"document: Not UTF-8 text: {e}"]) from e

    if path.suffix.lower() in YAML_SUFFIXES:
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise SnapshotValidationError([f"document: Invalid YAML: {e}"]) from e

    try:
        return json.loads(text, parse_constant=_reject_constant)
    except ValueError as e:
        raise SnapshotValidationError([f"document: Invalid JSON: {e}"]) from e


def validate_snapshot_file(data_path: str = DEFAULT_DATA_PATH) -> ValidationResult:
    """
    Validate an input file without building a snapshot.

    Raises:
        FileNotFoundError: If the file doesn't exist
        SnapshotValidationError: If the file is not well-formed
    """
    path = Path(data_path)
    if not path.exists():
        raise FileNotFoundError(f"Portfolio data file not found: {data_path}")

    return SnapshotValidator().validate(parse_document(path))


def load_snapshot(data_path: str = DEFAULT_DATA_PATH) -> PortfolioSnapshot:
    """
    Load and validate the portfolio input, raising on errors.

    The file is read completely and closed before anything is computed.

    Args:
        data_path: Path to the JSON (or YAML) input document

    Returns:
        PortfolioSnapshot

    Raises:
        FileNotFoundError: If the file doesn't exist
        OSError: If the file can't be read
        SnapshotValidationError: If the document is malformed
    """
    path = Path(data_path)
    if not path.exists():
        raise FileNotFoundError(f"Portfolio data file not found: {data_path}")

    document = parse_document(path)

    result = SnapshotValidator().validate(document)
    if not result.valid:
        raise SnapshotValidationError(result.errors)

    for warning in result.warnings:
        logger.warning(f"Portfolio data warning: {warning}")

    snapshot = PortfolioSnapshot.from_dict(document)
    logger.info(
        f"Loaded {len(snapshot.holdings)} holdings from {path}: "
        f"{', '.join(snapshot.symbols)}"
    )
    return snapshot
