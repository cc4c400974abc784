"""
Solar Panel Cleaning Simulator
==============================

A calculator that projects solar panel energy output, efficiency decay and
cleaning cost over a configurable horizon.

Main Components:
- Monthly soiling and aging simulation
- Bulk-discounted cleaning cost model
- Interactive visualization
- Data export
- Single-page web calculator

Usage:
    >>> from solar_cleaning.config import SimulationParameters
    >>> from solar_cleaning.degradation import simulate, summarize
    >>> params = SimulationParameters(cleaning_interval_months=6, horizon_months=120)
    >>> records = simulate(params)
    >>> summarize(records, params).final_cumulative_cost
    1339
"""

__version__ = "1.0.0"
