"""
Cleaning cost model.

Cleanings are bought up front for the whole horizon. The more cleanings a
schedule buys, the lower the unit price: the discount grows linearly from the
second cleaning and saturates at 40% from the 24th cleaning on.
"""

import math

from ..config.scenario_config import SimulationParameters


MAX_BULK_DISCOUNT = 0.4
DISCOUNT_SATURATION_CLEANINGS = 24


def compute_bulk_discount(number_of_cleanings: float) -> float:
    """
    Discount fraction for buying ``number_of_cleanings`` cleanings

    The count may be fractional (a horizon that is not a whole number of
    intervals). Counts of one or fewer get no discount.
    """
    if number_of_cleanings <= 1:
        return 0.0
    discount = (number_of_cleanings - 1) * (MAX_BULK_DISCOUNT / (DISCOUNT_SATURATION_CLEANINGS - 1))
    return min(MAX_BULK_DISCOUNT, max(0.0, discount))


def projected_cleanings(params: SimulationParameters) -> float:
    """Cleanings per year times years in the horizon; used for pricing only"""
    if not params.cleaning_enabled:
        return 0.0
    cleanings_per_year = 12 / params.cleaning_interval_months
    return params.horizon_years * cleanings_per_year


def total_cleanings(params: SimulationParameters) -> int:
    """Whole cleanings that fit in the horizon; the count reported to the user"""
    if not params.cleaning_enabled:
        return 0
    return math.floor(params.horizon_months / params.cleaning_interval_months)


def cost_per_cleaning(params: SimulationParameters) -> float:
    """Unit price of a cleaning after the bulk discount on the projected count"""
    discount = compute_bulk_discount(projected_cleanings(params))
    return params.constants.base_cost_per_cleaning * (1 - discount)
