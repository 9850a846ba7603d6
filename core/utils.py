from __future__ import annotations

from typing import Iterable, Sequence, Tuple

import numpy as np
import pandas as pd


def require_columns(df: pd.DataFrame, cols: Iterable[str]) -> None:
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}")


def clamp(value: float, lower: float, upper: float) -> float:
    return float(min(max(value, lower), upper))


def clamp_to(value: float, bounds: Tuple[float, float]) -> float:
    return clamp(value, bounds[0], bounds[1])


def safe_ratio(numerator: float, denominator: float) -> float:
    """numerator / denominator, or 0.0 when the denominator is zero or negative."""
    if denominator <= 0:
        return 0.0
    return float(numerator / denominator)


def mean_period_growth(values: Sequence[float]) -> Tuple[float, int]:
    """
    Average month-over-month growth (curr - prev) / prev.

    Pairs whose earlier value is <= 0 are skipped. Returns (mean, n_valid_pairs);
    mean is 0.0 when no pair is valid.
    """
    arr = np.asarray(values, dtype=float)
    if arr.size < 2:
        return 0.0, 0
    prev = arr[:-1]
    curr = arr[1:]
    valid = prev > 0
    n_valid = int(valid.sum())
    if n_valid == 0:
        return 0.0, 0
    growth = (curr[valid] - prev[valid]) / prev[valid]
    return float(growth.mean()), n_valid


def coefficient_of_variation(values: Sequence[float]) -> float:
    """Population standard deviation over mean; 0.0 when the mean is <= 0 or input is empty."""
    arr = np.asarray(values, dtype=float)
    if arr.size == 0:
        return 0.0
    mean = float(arr.mean())
    if mean <= 0:
        return 0.0
    return float(np.std(arr, ddof=0) / mean)


def to_minor_units(amount: float) -> int:
    """Major currency units to integer cents (half away from zero)."""
    return int(np.sign(amount) * np.floor(abs(amount) * 100 + 0.5))


def to_major_units(cents: float) -> float:
    return cents / 100.0
