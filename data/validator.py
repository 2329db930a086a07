"""Shape validation for uploaded participant and housing tables."""

from dataclasses import dataclass, field
from typing import List
import pandas as pd

from config.defaults import (
    HOUSING_COLUMNS, HOUSING_MIN_COLUMNS,
    PARTICIPANT_COLUMNS, PARTICIPANT_MIN_COLUMNS,
)


@dataclass
class ValidationResult:
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


def _check_shape(df: pd.DataFrame, min_columns: int, expected: List[str], file_label: str) -> ValidationResult:
    result = ValidationResult()
    if len(df.columns) < min_columns:
        result.is_valid = False
        result.errors.append(
            f"{file_label}: Expected at least {min_columns} columns "
            f"({', '.join(expected[:min_columns])}), found {len(df.columns)}."
        )
    if df.empty:
        result.is_valid = False
        result.errors.append(f"{file_label}: File contains no data rows.")
    return result


def validate_participant_table(df: pd.DataFrame) -> ValidationResult:
    return _check_shape(df, PARTICIPANT_MIN_COLUMNS, PARTICIPANT_COLUMNS, "Participants")


def validate_housing_table(df: pd.DataFrame) -> ValidationResult:
    result = _check_shape(df, HOUSING_MIN_COLUMNS, HOUSING_COLUMNS, "Housing")
    if not result.is_valid:
        return result

    if len(df.columns) < len(HOUSING_COLUMNS):
        missing = HOUSING_COLUMNS[len(df.columns):]
        result.warnings.append(
            f"Housing: Columns not provided and left blank: {', '.join(missing)}."
        )
    return result


def import_warnings(dropped_participant_rows: int, dropped_housing_rows: int) -> List[str]:
    """Warnings for rows the importer skipped."""
    warnings = []
    if dropped_participant_rows:
        warnings.append(
            f"Participants: Skipped {dropped_participant_rows} row(s) with a missing name "
            "or housing type, or a quantity that is not a positive whole number."
        )
    if dropped_housing_rows:
        warnings.append(f"Housing: Skipped {dropped_housing_rows} row(s) with no housing type.")
    return warnings
