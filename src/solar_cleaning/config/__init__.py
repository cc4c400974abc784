"""
Configuration Module

This module provides tools for handling simulation parameters, scenario
configuration and input validation.
"""

from .scenario_config import (
    PanelVariant,
    PhysicalConstants,
    SimulationParameters,
    SimulationConfig,
    ScenarioConfig,
    parameters_from_form,
)

__all__ = [
    "PanelVariant",
    "PhysicalConstants",
    "SimulationParameters",
    "SimulationConfig",
    "ScenarioConfig",
    "parameters_from_form",
]
