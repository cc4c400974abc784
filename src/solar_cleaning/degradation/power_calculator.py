"""
Power Calculator Module

This module converts panel efficiency into daily and monthly energy yield.
Efficiency is the product of the recoverable soiling efficiency and the
irreversible aging factor; yield assumes a fixed number of peak sun hours
per day at rated power.

References:
- "Photovoltaic Systems Engineering" - Messenger & Ventre
- IEC 61724 performance ratio conventions
"""

from typing import Optional

from ..config.scenario_config import PhysicalConstants


DAYS_PER_MONTH = 30


def daily_energy_kwh(efficiency_pct: float,
                     cumulative_panel_degradation: float,
                     rated_power_watts: float,
                     peak_sun_hours: float) -> float:
    """
    Daily energy yield of one panel

    Args:
        efficiency_pct: Soiling efficiency (%)
        cumulative_panel_degradation: Aging loss as a fraction (0-1)
        rated_power_watts: Panel rated power (W)
        peak_sun_hours: Peak sun hours per day

    Returns:
        Energy in kWh
    """
    actual_efficiency = efficiency_pct * (1 - cumulative_panel_degradation)
    return rated_power_watts * (actual_efficiency / 100) * peak_sun_hours / 1000


class PowerCalculator:
    """
    Energy yield calculator bound to one panel's rated power and site sun hours.
    """

    def __init__(self, rated_power_watts: float, peak_sun_hours: float,
                 days_per_month: int = DAYS_PER_MONTH):
        """
        Initialize power calculator

        Args:
            rated_power_watts: Panel rated power (W)
            peak_sun_hours: Average daily peak sun hours
            days_per_month: Days counted in a simulated month
        """
        if rated_power_watts <= 0:
            raise ValueError("Rated power must be positive")
        if peak_sun_hours <= 0:
            raise ValueError("Peak sun hours must be positive")

        self.rated_power_watts = rated_power_watts
        self.peak_sun_hours = peak_sun_hours
        self.days_per_month = days_per_month

    @classmethod
    def from_constants(cls, constants: Optional[PhysicalConstants] = None) -> "PowerCalculator":
        constants = constants or PhysicalConstants()
        return cls(constants.panel_rated_power_watts, constants.average_daily_peak_hours)

    def calculate_daily_energy_kwh(self, efficiency_pct: float,
                                   cumulative_panel_degradation: float) -> float:
        """Daily yield in kWh at the given soiling efficiency and aging fraction"""
        return daily_energy_kwh(efficiency_pct, cumulative_panel_degradation,
                                self.rated_power_watts, self.peak_sun_hours)

    def calculate_monthly_energy_kwh(self, efficiency_pct: float,
                                     cumulative_panel_degradation: float) -> float:
        """Monthly yield in kWh, assuming constant conditions over the month"""
        daily = self.calculate_daily_energy_kwh(efficiency_pct, cumulative_panel_degradation)
        return daily * self.days_per_month

    def peak_monthly_energy_kwh(self) -> float:
        """Yield of a clean, unaged panel over one month"""
        return self.calculate_monthly_energy_kwh(100.0, 0.0)
