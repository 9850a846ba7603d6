"""
Named scenario multipliers.

Each scenario kind maps to a (revenue, expense) multiplier pair applied
per period to a baseline forecast. SCENARIO_PRESETS holds the house defaults;
callers may pass their own mapping to the projector as long as it covers
every ScenarioKind.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class ScenarioKind(str, Enum):
    BASE = "Base"
    UPSIDE = "Upside"
    DOWNSIDE = "Downside"


@dataclass(frozen=True)
class ScenarioMultipliers:
    revenue: float
    expense: float
    description: str = ""


SCENARIO_PRESETS: Mapping[ScenarioKind, ScenarioMultipliers] = MappingProxyType({
    ScenarioKind.BASE: ScenarioMultipliers(
        revenue=1.00, expense=1.00,
        description="Expected performance based on current trends",
    ),
    ScenarioKind.UPSIDE: ScenarioMultipliers(
        revenue=1.10, expense=0.95,
        description="+10% revenue growth, 5% cost reduction",
    ),
    ScenarioKind.DOWNSIDE: ScenarioMultipliers(
        revenue=0.90, expense=1.05,
        description="-10% revenue decline, 5% cost increase",
    ),
})


def get_scenario_multipliers(
    kind: ScenarioKind | str,
    presets: Mapping[ScenarioKind, ScenarioMultipliers] = SCENARIO_PRESETS,
) -> ScenarioMultipliers:
    """
    Return the multipliers for a scenario kind.

    Parameters
    ----------
    kind : ScenarioKind or str
        One of: "Base", "Upside", "Downside"
    """
    try:
        key = ScenarioKind(kind)
    except ValueError:
        raise KeyError(
            f"Unknown scenario '{kind}'. "
            f"Available: {[k.value for k in ScenarioKind]}"
        ) from None
    if key not in presets:
        raise KeyError(f"Scenario presets do not define '{key.value}'.")
    return presets[key]
