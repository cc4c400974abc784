"""
Scenario Configuration Module

This module handles scenario configuration, validation, and management for the
solar panel cleaning simulator. It provides structured configuration schemas,
boundary validation of simulation inputs, and templates for common cleaning
schedules.

References:
- JSON Schema validation standards
- Pydantic configuration management
"""

import copy
import json
import logging
import math
from typing import Dict, List, Optional, Any, Mapping
from datetime import datetime
from pathlib import Path
from enum import Enum

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


logger = logging.getLogger(__name__)

HORIZON_STEP_MONTHS = 12


class PanelVariant(int, Enum):
    """Rated power presets offered by the calculator"""
    STANDARD_400W = 400
    HIGH_OUTPUT_575W = 575


class PhysicalConstants(BaseModel):
    """Fixed physical and pricing constants of a simulation run"""
    model_config = ConfigDict(frozen=True, extra="forbid")

    max_efficiency_pct: float = Field(100.0, gt=0, le=100, description="Efficiency of a clean panel (%)")
    min_efficiency_pct: float = Field(70.0, ge=0, le=100, description="Soiling floor (%)")
    monthly_dirt_degradation_pct: float = Field(2.0, ge=0, description="Efficiency lost to dirt per month (%)")
    yearly_panel_degradation_pct: float = Field(0.7, ge=0, le=100, description="Irreversible aging per year (%)")
    base_cost_per_cleaning: float = Field(100.0, ge=0, description="List price of one cleaning")
    panel_rated_power_watts: float = Field(float(PanelVariant.HIGH_OUTPUT_575W.value), gt=0,
                                           description="Panel rated power (W)")
    average_daily_peak_hours: float = Field(5.0, gt=0, le=24, description="Peak sun hours per day")

    @model_validator(mode="after")
    def validate_efficiency_bounds(self):
        if self.min_efficiency_pct > self.max_efficiency_pct:
            raise ValueError("min_efficiency_pct must not exceed max_efficiency_pct")
        return self

    @classmethod
    def for_variant(cls, variant: PanelVariant, **overrides) -> "PhysicalConstants":
        """Constants for one of the preset panel variants"""
        return cls(panel_rated_power_watts=float(PanelVariant(variant).value), **overrides)


class SimulationParameters(BaseModel):
    """Inputs of a single simulation run. Immutable once validated."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    cleaning_enabled: bool = Field(True, description="Whether scheduled cleaning happens")
    cleaning_interval_months: int = Field(6, ge=1, le=12, description="Months between cleanings")
    horizon_months: int = Field(120, ge=12, le=240, description="Simulated duration in months")
    constants: PhysicalConstants = Field(default_factory=PhysicalConstants)

    @field_validator('horizon_months')
    @classmethod
    def validate_horizon_step(cls, v):
        if v % HORIZON_STEP_MONTHS != 0:
            raise ValueError(f"horizon_months must be a multiple of {HORIZON_STEP_MONTHS}")
        return v

    @property
    def horizon_years(self) -> float:
        return self.horizon_months / 12


class SimulationConfig(BaseModel):
    """A named scenario wrapping one set of simulation parameters"""
    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "example": {
                "scenario_name": "Commercial_575W",
                "description": "575 W panel cleaned twice a year over ten years",
                "parameters": {
                    "cleaning_enabled": True,
                    "cleaning_interval_months": 6,
                    "horizon_months": 120,
                    "constants": {"panel_rated_power_watts": 575}
                }
            }
        }
    )

    scenario_name: str = Field(..., min_length=1, description="Scenario name")
    description: Optional[str] = Field(None, description="Scenario description")
    parameters: SimulationParameters = Field(default_factory=SimulationParameters)
    version: str = Field("1.0", description="Configuration version")
    created_at: datetime = Field(default_factory=datetime.now)
    created_by: Optional[str] = Field(None, description="Configuration author")


def parameters_from_form(form: Mapping[str, Any],
                         defaults: Optional[SimulationParameters] = None) -> SimulationParameters:
    """
    Build validated parameters from untyped form or query-string values

    Missing keys fall back to ``defaults``. A present ``cleaning_enabled`` key
    is read as a checkbox: "on", "true", "1" and "yes" enable cleaning.

    Args:
        form: Mapping of field name to raw value
        defaults: Parameters supplying values for missing keys

    Returns:
        Validated simulation parameters
    """
    base = defaults or SimulationParameters()
    data = base.model_dump()

    if 'cleaning_enabled' in form:
        raw = form['cleaning_enabled']
        if isinstance(raw, str):
            data['cleaning_enabled'] = raw.strip().lower() in ('on', 'true', '1', 'yes')
        else:
            data['cleaning_enabled'] = bool(raw)

    for key in ('cleaning_interval_months', 'horizon_months'):
        if key in form and form[key] not in (None, ''):
            data[key] = form[key]

    if 'panel_rated_power_watts' in form and form['panel_rated_power_watts'] not in (None, ''):
        data['constants']['panel_rated_power_watts'] = form['panel_rated_power_watts']

    return SimulationParameters.model_validate(data)


class ScenarioConfig:
    """
    Scenario configuration management system.

    Features:
    - JSON/YAML configuration loading and validation
    - Pre-defined cleaning schedule templates
    - Schedule feasibility checks
    - Configuration import/export
    """

    def __init__(self):
        """Initialize scenario configuration manager"""
        self.config: Optional[SimulationConfig] = None
        self.templates = self._load_default_templates()

    def load_config(self, filepath: str) -> SimulationConfig:
        """
        Load configuration from file

        Args:
            filepath: Path to configuration file

        Returns:
            Validated simulation configuration
        """
        path = Path(filepath)

        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {filepath}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                if path.suffix.lower() in ['.yaml', '.yml']:
                    data = yaml.safe_load(f)
                else:
                    data = json.load(f)

            self.config = SimulationConfig(**(data or {}))
            logger.debug(f"Loaded scenario '{self.config.scenario_name}' from {filepath}")
            return self.config

        except Exception as e:
            raise ValueError(f"Error loading configuration: {e}") from e

    def save_config(self, config: SimulationConfig, filepath: str, format: str = "json"):
        """
        Save configuration to file

        Args:
            config: Configuration to save
            filepath: Output file path
            format: Output format ("json" or "yaml")
        """
        path = Path(filepath)
        path.parent.mkdir(parents=True, exist_ok=True)

        data = config.model_dump(mode="json")

        try:
            with open(path, 'w', encoding='utf-8') as f:
                if format.lower() in ['yaml', 'yml']:
                    yaml.safe_dump(data, f, default_flow_style=False, indent=2, sort_keys=False)
                else:
                    json.dump(data, f, indent=2)

        except Exception as e:
            raise ValueError(f"Error saving configuration: {e}") from e

    def create_from_template(self, template_name: str, **kwargs) -> SimulationConfig:
        """
        Create configuration from predefined template

        Args:
            template_name: Name of template
            **kwargs: Parameters to override (nested dicts are merged)

        Returns:
            Configured simulation scenario
        """
        if template_name not in self.templates:
            raise ValueError(f"Template not found: {template_name}")

        template_data = copy.deepcopy(self.templates[template_name])
        self._deep_update(template_data, kwargs)

        return SimulationConfig(**template_data)

    def apply_overrides(self, config: SimulationConfig, **kwargs) -> SimulationConfig:
        """
        Copy of a configuration with overrides merged in

        Args:
            config: Configuration to start from
            **kwargs: Fields to override (nested dicts are merged)

        Returns:
            New validated configuration
        """
        data = config.model_dump()
        self._deep_update(data, kwargs)
        return SimulationConfig(**data)

    def validate_config(self, config_data: Dict) -> SimulationConfig:
        """
        Validate configuration data

        Args:
            config_data: Configuration data dictionary

        Returns:
            Validated configuration
        """
        return SimulationConfig(**config_data)

    def get_config_schema(self) -> Dict:
        """JSON schema for scenario files"""
        return SimulationConfig.model_json_schema()

    def list_templates(self) -> List[str]:
        """
        List available templates

        Returns:
            List of template names
        """
        return list(self.templates.keys())

    def _load_default_templates(self) -> Dict[str, Dict]:
        """Load default cleaning schedule templates"""
        return {
            "Commercial_575W": {
                "scenario_name": "Commercial_575W",
                "description": "575 W commercial panel cleaned twice a year for ten years",
                "parameters": {
                    "cleaning_enabled": True,
                    "cleaning_interval_months": 6,
                    "horizon_months": 120,
                    "constants": {"panel_rated_power_watts": 575}
                }
            },

            "Residential_400W": {
                "scenario_name": "Residential_400W",
                "description": "400 W residential panel cleaned twice a year for ten years",
                "parameters": {
                    "cleaning_enabled": True,
                    "cleaning_interval_months": 6,
                    "horizon_months": 120,
                    "constants": {"panel_rated_power_watts": 400}
                }
            },

            "Monthly_Cleaning": {
                "scenario_name": "Monthly_Cleaning",
                "description": "Monthly cleaning contract over five years",
                "parameters": {
                    "cleaning_enabled": True,
                    "cleaning_interval_months": 1,
                    "horizon_months": 60,
                    "constants": {"panel_rated_power_watts": 575}
                }
            },

            "Annual_Cleaning": {
                "scenario_name": "Annual_Cleaning",
                "description": "One cleaning per year over twenty years",
                "parameters": {
                    "cleaning_enabled": True,
                    "cleaning_interval_months": 12,
                    "horizon_months": 240,
                    "constants": {"panel_rated_power_watts": 575}
                }
            },

            "No_Cleaning_Baseline": {
                "scenario_name": "No_Cleaning_Baseline",
                "description": "Panels left to soil for ten years",
                "parameters": {
                    "cleaning_enabled": False,
                    "cleaning_interval_months": 6,
                    "horizon_months": 120,
                    "constants": {"panel_rated_power_watts": 575}
                }
            }
        }

    def _deep_update(self, base_dict: Dict, update_dict: Dict):
        """Deep update dictionary"""
        for key, value in update_dict.items():
            if key in base_dict and isinstance(base_dict[key], dict) and isinstance(value, dict):
                self._deep_update(base_dict[key], value)
            else:
                base_dict[key] = value

    def generate_config_summary(self, config: SimulationConfig) -> Dict:
        """
        Generate configuration summary

        Args:
            config: Simulation configuration

        Returns:
            Configuration summary dictionary
        """
        params = config.parameters
        constants = params.constants
        return {
            'scenario_name': config.scenario_name,
            'description': config.description,
            'horizon_months': params.horizon_months,
            'horizon_years': params.horizon_years,
            'cleaning': {
                'enabled': params.cleaning_enabled,
                'interval_months': params.cleaning_interval_months,
                'base_cost': constants.base_cost_per_cleaning
            },
            'panel': {
                'rated_power_W': constants.panel_rated_power_watts,
                'average_daily_peak_hours': constants.average_daily_peak_hours
            },
            'degradation': {
                'monthly_dirt_pct': constants.monthly_dirt_degradation_pct,
                'yearly_panel_pct': constants.yearly_panel_degradation_pct,
                'efficiency_range_pct': [constants.min_efficiency_pct, constants.max_efficiency_pct]
            }
        }

    def compare_configs(self, config1: SimulationConfig, config2: SimulationConfig) -> Dict:
        """
        Compare two configurations

        Args:
            config1: First configuration
            config2: Second configuration

        Returns:
            Mapping of differing field to both values
        """
        differences = {}

        first = config1.parameters.model_dump()
        second = config2.parameters.model_dump()
        first.update(first.pop('constants'))
        second.update(second.pop('constants'))

        for key, value in first.items():
            if second.get(key) != value:
                differences[key] = {'config1': value, 'config2': second.get(key)}

        return differences

    def validate_schedule_feasibility(self, config: SimulationConfig) -> Dict:
        """
        Check a cleaning schedule and provide recommendations

        A schedule is infeasible when it pays for cleanings that can never
        recover any efficiency. Warnings describe schedules that waste money
        or leave panels at the soiling floor.

        Args:
            config: Simulation configuration

        Returns:
            Feasibility analysis and recommendations
        """
        issues = []
        warnings = []
        recommendations = []

        params = config.parameters
        constants = params.constants
        headroom = constants.max_efficiency_pct - constants.min_efficiency_pct

        if constants.monthly_dirt_degradation_pct > 0:
            months_to_floor = math.ceil(headroom / constants.monthly_dirt_degradation_pct)
        else:
            months_to_floor = None

        if not params.cleaning_enabled:
            if months_to_floor is not None and months_to_floor < params.horizon_months:
                warnings.append(
                    f"Without cleaning, efficiency reaches the {constants.min_efficiency_pct:g}% floor "
                    f"after {months_to_floor} months"
                )
                recommendations.append("Enable cleaning to compare recovered energy against cleaning cost")
        elif not months_to_floor:
            issues.append("Cleaning is enabled but soiling never lowers efficiency, "
                          "so every cleaning is paid for without recovering energy")
            recommendations.append("Disable cleaning or set a positive dirt degradation and efficiency range")
        else:
            from ..degradation.cleaning_cost import projected_cleanings, total_cleanings

            if params.cleaning_interval_months > months_to_floor:
                idle = params.cleaning_interval_months - months_to_floor
                warnings.append(f"Panels sit at the efficiency floor for {idle} months before each cleaning")
                recommendations.append(f"Clean at least every {months_to_floor} months to avoid the floor")

            projected = projected_cleanings(params)
            realized = total_cleanings(params)
            if not math.isclose(projected, realized):
                warnings.append(
                    f"Bulk pricing assumes {projected:.2f} cleanings but {realized} are performed"
                )

        return {
            "feasible": len(issues) == 0,
            "issues": issues,
            "warnings": warnings,
            "recommendations": recommendations,
            "months_to_efficiency_floor": months_to_floor
        }
