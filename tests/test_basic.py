#!/usr/bin/env python3
"""
Basic Tests
===========

Simple integration tests to verify the cleaning simulator is working
correctly.

Usage:
    python -m pytest tests/test_basic.py -v
"""

import json
import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


def test_default_parameters():
    """Test default simulation parameters"""
    from solar_cleaning.config import SimulationParameters

    params = SimulationParameters()

    assert params.cleaning_enabled is True
    assert params.cleaning_interval_months == 6
    assert params.horizon_months == 120
    assert params.constants.max_efficiency_pct == 100
    assert params.constants.min_efficiency_pct == 70
    assert params.constants.monthly_dirt_degradation_pct == 2
    assert params.constants.yearly_panel_degradation_pct == 0.7
    assert params.constants.base_cost_per_cleaning == 100
    assert params.constants.panel_rated_power_watts == 575
    assert params.constants.average_daily_peak_hours == 5


def test_parameters_are_immutable():
    """Parameters cannot be changed after validation"""
    from pydantic import ValidationError
    from solar_cleaning.config import SimulationParameters

    params = SimulationParameters()
    with pytest.raises(ValidationError):
        params.horizon_months = 24


@pytest.mark.parametrize("interval", [0, 13, -1])
def test_interval_out_of_range_rejected(interval):
    """Cleaning interval must be within 1..12"""
    from pydantic import ValidationError
    from solar_cleaning.config import SimulationParameters

    with pytest.raises(ValidationError):
        SimulationParameters(cleaning_interval_months=interval)


@pytest.mark.parametrize("horizon", [0, 6, 100, 252])
def test_horizon_rejected(horizon):
    """Horizon must be within 12..240 and a multiple of 12"""
    from pydantic import ValidationError
    from solar_cleaning.config import SimulationParameters

    with pytest.raises(ValidationError):
        SimulationParameters(horizon_months=horizon)


def test_horizon_bounds_accepted():
    """Both ends of the horizon range are valid"""
    from solar_cleaning.config import SimulationParameters

    assert SimulationParameters(horizon_months=12).horizon_months == 12
    assert SimulationParameters(horizon_months=240).horizon_years == 20


def test_inverted_efficiency_bounds_rejected():
    """Minimum efficiency cannot exceed maximum"""
    from pydantic import ValidationError
    from solar_cleaning.config import PhysicalConstants

    with pytest.raises(ValidationError):
        PhysicalConstants(min_efficiency_pct=90, max_efficiency_pct=80)


def test_panel_variants():
    """Both panel presets produce valid constants"""
    from solar_cleaning.config import PanelVariant, PhysicalConstants

    assert PhysicalConstants.for_variant(PanelVariant.STANDARD_400W).panel_rated_power_watts == 400
    assert PhysicalConstants.for_variant(575).panel_rated_power_watts == 575


def test_parameters_from_form():
    """Form values arrive as strings"""
    from solar_cleaning.config import parameters_from_form

    params = parameters_from_form({
        'cleaning_enabled': 'on',
        'cleaning_interval_months': '3',
        'horizon_months': '60',
        'panel_rated_power_watts': '400'
    })

    assert params.cleaning_enabled is True
    assert params.cleaning_interval_months == 3
    assert params.horizon_months == 60
    assert params.constants.panel_rated_power_watts == 400

    assert parameters_from_form({'cleaning_enabled': 'off'}).cleaning_enabled is False
    assert parameters_from_form({}).horizon_months == 120


def test_parameters_from_form_rejects_bad_values():
    """Invalid form values raise before any simulation"""
    from pydantic import ValidationError
    from solar_cleaning.config import parameters_from_form

    with pytest.raises(ValidationError):
        parameters_from_form({'horizon_months': '100'})
    with pytest.raises(ValidationError):
        parameters_from_form({'cleaning_interval_months': 'often'})


def test_scenario_templates():
    """Test scenario template system"""
    from solar_cleaning.config import ScenarioConfig

    config = ScenarioConfig()
    templates = config.list_templates()

    assert "Commercial_575W" in templates
    assert "Residential_400W" in templates
    assert "No_Cleaning_Baseline" in templates

    residential = config.create_from_template("Residential_400W")
    assert residential.parameters.constants.panel_rated_power_watts == 400

    baseline = config.create_from_template("No_Cleaning_Baseline")
    assert baseline.parameters.cleaning_enabled is False


def test_template_overrides_are_merged():
    """Overrides replace only the keys they name"""
    from solar_cleaning.config import ScenarioConfig

    config = ScenarioConfig()
    scenario = config.create_from_template(
        "Residential_400W",
        scenario_name="Quarterly",
        parameters={"cleaning_interval_months": 3}
    )

    assert scenario.scenario_name == "Quarterly"
    assert scenario.parameters.cleaning_interval_months == 3
    assert scenario.parameters.constants.panel_rated_power_watts == 400

    # The template itself is untouched
    assert config.create_from_template("Residential_400W").parameters.cleaning_interval_months == 6


def test_unknown_template():
    """Unknown templates are rejected"""
    from solar_cleaning.config import ScenarioConfig

    with pytest.raises(ValueError):
        ScenarioConfig().create_from_template("Lunar_Base")


def test_save_and_load_yaml(tmp_path):
    """A saved scenario loads back with the same parameters"""
    from solar_cleaning.config import ScenarioConfig

    manager = ScenarioConfig()
    original = manager.create_from_template("Monthly_Cleaning")
    path = tmp_path / "scenario.yaml"
    manager.save_config(original, str(path), format="yaml")

    loaded = manager.load_config(str(path))
    assert loaded.scenario_name == original.scenario_name
    assert loaded.parameters == original.parameters


def test_load_json(tmp_path):
    """JSON scenario files fill in default constants"""
    from solar_cleaning.config import ScenarioConfig

    path = tmp_path / "scenario.json"
    path.write_text(json.dumps({
        "scenario_name": "Rooftop",
        "parameters": {"cleaning_interval_months": 4, "horizon_months": 48}
    }))

    loaded = ScenarioConfig().load_config(str(path))
    assert loaded.parameters.cleaning_interval_months == 4
    assert loaded.parameters.constants.panel_rated_power_watts == 575


def test_load_errors(tmp_path):
    """Missing and invalid files are reported"""
    from solar_cleaning.config import ScenarioConfig

    manager = ScenarioConfig()
    with pytest.raises(FileNotFoundError):
        manager.load_config(str(tmp_path / "missing.json"))

    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"scenario_name": "Bad", "parameters": {"horizon_months": 13}}))
    with pytest.raises(ValueError):
        manager.load_config(str(bad))


def test_schedule_feasibility():
    """Feasibility warnings describe wasted schedules"""
    from solar_cleaning.config import ScenarioConfig

    manager = ScenarioConfig()

    semiannual = manager.validate_schedule_feasibility(manager.create_from_template("Commercial_575W"))
    assert semiannual["feasible"] is True
    assert semiannual["warnings"] == []
    assert semiannual["months_to_efficiency_floor"] == 15

    baseline = manager.validate_schedule_feasibility(manager.create_from_template("No_Cleaning_Baseline"))
    assert any("floor" in w for w in baseline["warnings"])

    seven = manager.create_from_template("Commercial_575W", parameters={"cleaning_interval_months": 7})
    result = manager.validate_schedule_feasibility(seven)
    assert any("17.14" in w and "17 are performed" in w for w in result["warnings"])


def test_compare_configs():
    """Only differing fields are reported"""
    from solar_cleaning.config import ScenarioConfig

    manager = ScenarioConfig()
    differences = manager.compare_configs(
        manager.create_from_template("Commercial_575W"),
        manager.create_from_template("Residential_400W")
    )

    assert list(differences) == ["panel_rated_power_watts"]
    assert differences["panel_rated_power_watts"] == {"config1": 575, "config2": 400}


def test_cleaning_without_soiling_is_infeasible():
    """Paying for cleanings that recover nothing is reported as an issue"""
    from solar_cleaning.config import ScenarioConfig

    manager = ScenarioConfig()
    clean_air = manager.create_from_template(
        "Commercial_575W", parameters={"constants": {"monthly_dirt_degradation_pct": 0}}
    )
    result = manager.validate_schedule_feasibility(clean_air)
    assert result["feasible"] is False
    assert len(result["issues"]) == 1

    flat = manager.create_from_template(
        "Commercial_575W", parameters={"constants": {"min_efficiency_pct": 100}}
    )
    assert manager.validate_schedule_feasibility(flat)["feasible"] is False

    # Without cleaning nothing is paid for
    idle = manager.create_from_template(
        "No_Cleaning_Baseline", parameters={"constants": {"monthly_dirt_degradation_pct": 0}}
    )
    assert manager.validate_schedule_feasibility(idle)["feasible"] is True


def test_apply_overrides():
    """Overrides produce a new validated configuration"""
    from pydantic import ValidationError
    from solar_cleaning.config import ScenarioConfig

    manager = ScenarioConfig()
    base = manager.create_from_template("Residential_400W")
    updated = manager.apply_overrides(base, parameters={"cleaning_interval_months": 2})

    assert updated.parameters.cleaning_interval_months == 2
    assert updated.parameters.constants.panel_rated_power_watts == 400
    assert base.parameters.cleaning_interval_months == 6

    with pytest.raises(ValidationError):
        manager.apply_overrides(base, parameters={"horizon_months": 30})
