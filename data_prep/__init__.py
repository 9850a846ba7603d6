"""
Data preparation — backend payload adapters and record validation.
"""

from .loader import (
    kpis_from_payload,
    parse_payload,
    records_from_frame,
    records_from_summary,
    series_from_forecast_result,
    series_from_ml_result,
)
from .validators import (
    MalformedRecordError,
    ValidationResult,
    records_to_dataframe,
    require_valid_records,
    validate_records,
)

__all__ = [
    "kpis_from_payload",
    "parse_payload",
    "records_from_frame",
    "records_from_summary",
    "series_from_forecast_result",
    "series_from_ml_result",
    "MalformedRecordError",
    "ValidationResult",
    "records_to_dataframe",
    "require_valid_records",
    "validate_records",
]
