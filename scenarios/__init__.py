"""
Scenario projection — expand a baseline forecast into named scenario variants.
"""

from .presets import SCENARIO_PRESETS, ScenarioKind, ScenarioMultipliers, get_scenario_multipliers
from .projector import ScenarioBundle, ScenarioResult, project

__all__ = [
    "SCENARIO_PRESETS",
    "ScenarioKind",
    "ScenarioMultipliers",
    "get_scenario_multipliers",
    "ScenarioBundle",
    "ScenarioResult",
    "project",
]
