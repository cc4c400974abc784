#!/usr/bin/env python3
"""
Scenario Comparison Example

This example compares cleaning intervals for the same panel to show the
trade-off between recovered energy and cleaning spend.
"""

import sys
from pathlib import Path

# Add the src directory to Python path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from solar_cleaning.config import SimulationParameters
from solar_cleaning.main import SolarCleaningModel
import logging

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main():
    """Main comparison example function"""
    print("=" * 60)
    print("Solar Panel Cleaning Simulator - Scenario Comparison Example")
    print("=" * 60)

    model = SolarCleaningModel()

    scenarios = {
        "Monthly": SimulationParameters(cleaning_interval_months=1),
        "Quarterly": SimulationParameters(cleaning_interval_months=3),
        "Semiannual": SimulationParameters(cleaning_interval_months=6),
        "Annual": SimulationParameters(cleaning_interval_months=12),
        "Never": SimulationParameters(cleaning_enabled=False),
    }

    print("\n1. Running scenarios...")
    comparison = model.compare_scenarios(scenarios)

    print("\n2. Scenario Comparison Results:")
    print("-" * 72)
    print(f"{'Scenario':<12} {'Cleanings':<10} {'Discount (%)':<13} {'Cost ($)':<10} {'Energy (kWh)':<13} {'kWh per $':<10}")
    print("-" * 72)

    for name, summary in comparison['summaries'].items():
        cost = summary.final_cumulative_cost
        per_dollar = f"{summary.final_cumulative_energy_kwh / cost:.1f}" if cost else "-"
        print(f"{name:<12} {summary.total_cleanings:<10} {summary.bulk_discount * 100:<13.1f} "
              f"{cost:<10} {summary.final_cumulative_energy_kwh:<13.1f} {per_dollar:<10}")

    baseline = comparison['summaries']["Never"].final_cumulative_energy_kwh
    print("\n3. Energy recovered over the uncleaned baseline:")
    for name, summary in comparison['summaries'].items():
        if name == "Never":
            continue
        gained = summary.final_cumulative_energy_kwh - baseline
        print(f"   {name}: {gained:.1f} kWh for ${summary.final_cumulative_cost}")

    output_dir = Path("comparison_results")
    output_dir.mkdir(exist_ok=True)
    model.plotter.export_plot(comparison['comparison_plot'], str(output_dir / "scenario_comparison.html"))
    print(f"\n4. Comparison plot saved to {output_dir / 'scenario_comparison.html'}")


if __name__ == "__main__":
    main()
