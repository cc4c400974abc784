"""
Degradation Module

This module provides the monthly simulation of soiling, aging, energy yield
and cleaning cost for a single solar panel.
"""

from .power_calculator import PowerCalculator, daily_energy_kwh
from .cleaning_cost import compute_bulk_discount, cost_per_cleaning, projected_cleanings, total_cleanings
from .lifetime_model import MonthRecord, SimulationSummary, simulate, summarize

__all__ = [
    "PowerCalculator",
    "daily_energy_kwh",
    "compute_bulk_discount",
    "cost_per_cleaning",
    "projected_cleanings",
    "total_cleanings",
    "MonthRecord",
    "SimulationSummary",
    "simulate",
    "summarize",
]
