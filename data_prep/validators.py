"""
Data quality validation for monthly records before they reach the calibrator.

Errors (blocking):
- Missing or non-integer monetary fields
- Unparseable, duplicate, or out-of-order periods

Warnings (informational):
- Fewer months than the recommended minimum
- Negative revenue
- total_expenses / net_income identities that don't hold (never repaired)
"""

from __future__ import annotations

import logging
import numbers
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Sequence

import pandas as pd

from core.config import EngineConfig
from core.schema import MONETARY_FIELDS, MonthlyFinancialRecord, to_period

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Collects all validation warnings/errors for a record sequence."""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def summary(self) -> str:
        lines = []
        if self.errors:
            lines.append(f"ERRORS ({len(self.errors)}):")
            for e in self.errors:
                lines.append(f"  ✗ {e}")
        if self.warnings:
            lines.append(f"WARNINGS ({len(self.warnings)}):")
            for w in self.warnings:
                lines.append(f"  ⚠ {w}")
        if not lines:
            lines.append("✓ All checks passed.")
        return "\n".join(lines)


class MalformedRecordError(ValueError):
    """Raised when records are structurally invalid; carries the ValidationResult."""

    def __init__(self, result: ValidationResult):
        self.result = result
        super().__init__(result.summary())


def _is_int(value: Any) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def _field(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def validate_records(
    records: Sequence[Any],
    *,
    config: EngineConfig = EngineConfig(),
) -> ValidationResult:
    """
    Run all validation checks on a record sequence.

    Accepts MonthlyFinancialRecord instances or plain mappings with the same
    field names. An empty sequence is valid (the calibrator returns defaults).
    """
    result = ValidationResult()

    periods = []
    for i, rec in enumerate(records):
        missing = [f for f in MONETARY_FIELDS if _field(rec, f) is None]
        if missing:
            result.errors.append(f"Record {i} is missing monetary fields: {missing}")
        bad_type = [
            f for f in MONETARY_FIELDS
            if f not in missing and not _is_int(_field(rec, f))
        ]
        if bad_type:
            result.errors.append(
                f"Record {i} has non-integer (minor-unit) values for: {bad_type}"
            )

        raw_period = _field(rec, "period")
        if raw_period is None:
            result.errors.append(f"Record {i} has no period.")
            continue
        try:
            periods.append((i, to_period(raw_period)))
        except (ValueError, TypeError):
            result.errors.append(f"Record {i} has unparseable period {raw_period!r}.")

    for (_, prev), (j, curr) in zip(periods, periods[1:]):
        if curr == prev:
            result.errors.append(f"Record {j} duplicates period {curr}.")
        elif curr < prev:
            result.errors.append(
                f"Record {j} period {curr} is earlier than the preceding {prev}; "
                f"records must be in chronological order."
            )

    if not result.is_valid:
        logger.warning("Record validation failed with %d error(s)", len(result.errors))
        return result  # identity checks assume well-typed fields

    n = len(records)
    if 0 < n < config.min_history_months:
        result.warnings.append(
            f"Only {n} month(s) of history; at least {config.min_history_months} "
            f"are recommended for reliable assumptions."
        )

    n_neg = sum(1 for r in records if _field(r, "revenue") < 0)
    if n_neg:
        result.warnings.append(f"{n_neg} record(s) have negative revenue.")

    n_exp = sum(
        1 for r in records
        if _field(r, "total_expenses")
        != _field(r, "cogs") + _field(r, "opex") + _field(r, "personnel")
    )
    if n_exp:
        result.warnings.append(
            f"{n_exp} record(s) have total_expenses != cogs + opex + personnel."
        )

    n_net = sum(
        1 for r in records
        if _field(r, "net_income") != _field(r, "revenue") - _field(r, "total_expenses")
    )
    if n_net:
        result.warnings.append(
            f"{n_net} record(s) have net_income != revenue - total_expenses."
        )

    return result


def require_valid_records(
    records: Sequence[Any],
    *,
    config: EngineConfig = EngineConfig(),
) -> List[MonthlyFinancialRecord]:
    """
    Validate and normalize records, raising MalformedRecordError on any error.
    Warnings are logged and do not block.
    """
    result = validate_records(records, config=config)
    if not result.is_valid:
        raise MalformedRecordError(result)
    for w in result.warnings:
        logger.warning("Record quality: %s", w)

    out: List[MonthlyFinancialRecord] = []
    for rec in records:
        if isinstance(rec, MonthlyFinancialRecord):
            out.append(rec)
            continue
        out.append(MonthlyFinancialRecord(
            period=to_period(_field(rec, "period")),
            **{f: int(_field(rec, f)) for f in MONETARY_FIELDS},
        ))
    return out


def records_to_dataframe(records: Sequence[MonthlyFinancialRecord]) -> pd.DataFrame:
    return pd.DataFrame(
        [r.to_dict() for r in records],
        columns=["period", *MONETARY_FIELDS],
    )
