"""
Lifetime Degradation Model Module

This module steps a single panel through its service life one month at a
time. Two loss mechanisms are combined multiplicatively:

- soiling, which lowers efficiency by a fixed amount each month down to a
  floor and is fully recovered by a cleaning;
- aging, an irreversible linear loss that depends on elapsed months only.

The simulation is a pure function of its parameters: the same parameters
always produce the same records, and nothing is kept between runs.

References:
- "Soiling of photovoltaic modules" - Sarver, Al-Qaraghuli, Kazmerski
- "Photovoltaic Degradation Rates - An Analytical Review" - Jordan & Kurtz (NREL)
"""

import logging
import math
from dataclasses import dataclass, asdict
from typing import List, Dict, Any

import numpy as np

from ..config.scenario_config import SimulationParameters
from .cleaning_cost import (
    compute_bulk_discount,
    cost_per_cleaning,
    projected_cleanings,
    total_cleanings,
)
from .power_calculator import PowerCalculator


logger = logging.getLogger(__name__)


def _round_half_up(value: float, digits: int = 0) -> float:
    """Round halves away from zero for non-negative values (0.125 -> 0.13)"""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


@dataclass(frozen=True)
class MonthRecord:
    """Panel state at the end of one simulated month"""
    month: int
    year_fraction: float               # month / 12, one decimal place
    dirt_efficiency_pct: float         # Soiling efficiency (%)
    effective_efficiency_pct: float    # Soiling efficiency after aging (%)
    panel_degradation_pct: float       # Cumulative aging loss (%)
    cumulative_cost: int               # Cleaning spend so far
    monthly_energy_kwh: float
    cumulative_energy_kwh: float
    cleaning_performed: bool
    cost_per_cleaning: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class SimulationSummary:
    """Headline statistics derived from a complete record sequence"""
    final_cumulative_cost: int
    final_cumulative_energy_kwh: float
    average_effective_efficiency_pct: float
    average_monthly_energy_kwh: float
    final_panel_degradation_pct: float

    # Cleaning schedule
    total_cleanings: int               # floor(horizon / interval)
    bulk_discount: float               # Discount at total_cleanings
    projected_cleanings: float         # Fractional count used for pricing
    cost_per_cleaning: float
    cleanings_performed: int           # Records flagged as cleaned

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def simulate(params: SimulationParameters) -> List[MonthRecord]:
    """
    Simulate monthly efficiency, energy and cleaning cost

    The cleaning unit price is fixed before the loop from the projected
    number of cleanings over the whole horizon. Each month then:

    1. recomputes the aging fraction from elapsed months;
    2. cleans if the interval has elapsed, restoring full efficiency and
       paying for the cleaning before energy is counted;
    3. adds 30 days of energy at the current efficiency;
    4. records the state;
    5. lets dirt accumulate for the next month.

    Args:
        params: Validated simulation parameters

    Returns:
        One record per month for months 0..horizon_months inclusive
    """
    if not isinstance(params, SimulationParameters):
        raise TypeError(f"Expected SimulationParameters, got {type(params).__name__}")

    constants = params.constants
    power_calc = PowerCalculator.from_constants(constants)
    monthly_panel_degradation_pct = constants.yearly_panel_degradation_pct / 12

    unit_cost = cost_per_cleaning(params)
    displayed_unit_cost = int(_round_half_up(unit_cost))

    current_efficiency = constants.max_efficiency_pct
    months_since_last_cleaning = 0
    total_energy = 0.0
    total_cost = 0.0

    records: List[MonthRecord] = []

    for month in range(params.horizon_months + 1):
        cumulative_panel_degradation = month * monthly_panel_degradation_pct / 100

        cleaned = False
        if params.cleaning_enabled and months_since_last_cleaning >= params.cleaning_interval_months:
            current_efficiency = constants.max_efficiency_pct
            months_since_last_cleaning = 0
            total_cost += unit_cost
            cleaned = True

        monthly_energy = power_calc.calculate_monthly_energy_kwh(
            current_efficiency, cumulative_panel_degradation
        )
        total_energy += monthly_energy

        records.append(MonthRecord(
            month=month,
            year_fraction=_round_half_up(month / 12, 1),
            dirt_efficiency_pct=current_efficiency,
            effective_efficiency_pct=current_efficiency * (1 - cumulative_panel_degradation),
            panel_degradation_pct=cumulative_panel_degradation * 100,
            cumulative_cost=int(_round_half_up(total_cost)),
            monthly_energy_kwh=_round_half_up(monthly_energy, 2),
            cumulative_energy_kwh=_round_half_up(total_energy, 2),
            cleaning_performed=cleaned,
            cost_per_cleaning=displayed_unit_cost
        ))

        current_efficiency = max(
            constants.min_efficiency_pct,
            current_efficiency - constants.monthly_dirt_degradation_pct
        )
        months_since_last_cleaning += 1

    logger.debug(
        f"Simulated {len(records)} months "
        f"(cleaning={'every %d months' % params.cleaning_interval_months if params.cleaning_enabled else 'off'})"
    )
    return records


def summarize(records: List[MonthRecord], params: SimulationParameters) -> SimulationSummary:
    """
    Derive headline statistics from a record sequence

    ``total_cleanings`` is the whole number of intervals in the horizon while
    the unit price was set from the fractional projection; both are reported
    so the difference stays visible.

    Args:
        records: Output of :func:`simulate` for ``params``
        params: Parameters the records were produced with

    Returns:
        Simulation summary
    """
    if not records:
        raise ValueError("No records available for analysis")

    final = records[-1]
    cleanings = total_cleanings(params)

    return SimulationSummary(
        final_cumulative_cost=final.cumulative_cost,
        final_cumulative_energy_kwh=final.cumulative_energy_kwh,
        average_effective_efficiency_pct=float(np.mean([r.effective_efficiency_pct for r in records])),
        average_monthly_energy_kwh=float(np.mean([r.monthly_energy_kwh for r in records])),
        final_panel_degradation_pct=final.panel_degradation_pct,
        total_cleanings=cleanings,
        bulk_discount=compute_bulk_discount(cleanings),
        projected_cleanings=projected_cleanings(params),
        cost_per_cleaning=cost_per_cleaning(params),
        cleanings_performed=sum(1 for r in records if r.cleaning_performed)
    )
