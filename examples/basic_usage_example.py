#!/usr/bin/env python3
"""
Basic Usage Example for the Solar Panel Cleaning Simulator

This example runs a commercial 575 W panel on a semiannual cleaning
schedule for ten years and exports the results.
"""

import sys
from pathlib import Path

# Add the src directory to Python path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from solar_cleaning.main import SolarCleaningModel
import logging

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main():
    """Main example function"""
    print("=" * 60)
    print("Solar Panel Cleaning Simulator - Basic Usage Example")
    print("=" * 60)

    # Create model instance
    print("\n1. Creating cleaning model...")
    model = SolarCleaningModel()

    # Show available templates
    print("\n2. Available scenario templates:")
    for template in model.list_available_templates():
        print(f"   - {template}")

    # Create scenario from template
    print("\n3. Creating commercial scenario...")
    success = model.create_scenario_from_template(
        "Commercial_575W",
        scenario_name="Example_Rooftop",
        description="Example rooftop array cleaned every four months",
        parameters={"cleaning_interval_months": 4}
    )

    if not success:
        print("Failed to create scenario")
        return

    # Validate configuration
    print("\n4. Validating configuration...")
    validation = model.validate_configuration()
    print(f"Configuration valid: {validation['feasible']}")

    if validation['warnings']:
        print("Warnings:")
        for warning in validation['warnings']:
            print(f"   - {warning}")

    if validation['recommendations']:
        print("Recommendations:")
        for rec in validation['recommendations']:
            print(f"   - {rec}")

    # Get configuration info
    print("\n5. Configuration summary:")
    config_info = model.get_configuration_info()
    for key, value in config_info.items():
        print(f"   {key}: {value}")

    # Run simulation
    print("\n6. Running simulation...")
    model.run_simulation()

    # Get summary
    print("\n7. Simulation Results Summary:")
    summary = model.get_summary()
    print(f"   Total cleanings: {summary['cleaning']['total_cleanings']}")
    print(f"   Bulk discount: {summary['cleaning']['bulk_discount_percent']:.1f}%")
    print(f"   Total cost: ${summary['cleaning']['total_cost']}")
    print(f"   Final panel degradation: {summary['degradation']['final_panel_degradation_percent']:.2f}%")
    print(f"   Average effective efficiency: {summary['degradation']['average_effective_efficiency_percent']:.2f}%")
    print(f"   Total energy: {summary['energy']['total_kWh']:.2f} kWh")

    # Generate plots
    print("\n8. Generating visualizations...")
    output_dir = Path("example_results")
    output_dir.mkdir(exist_ok=True)

    plots = model.plot_results(save_path=str(output_dir))
    print(f"   Generated {len(plots)} plots in {output_dir}")
    for plot_type in plots.keys():
        print(f"      - {plot_type}.html")

    # Export results
    print("\n9. Exporting results...")
    if model.export_results(str(output_dir), formats=["excel", "csv"]):
        print(f"   Results exported to {output_dir}")
    else:
        print("   Export failed")

    print("\n" + "=" * 60)
    print("Example completed successfully!")
    print(f"Check the '{output_dir}' directory for results and plots.")
    print("=" * 60)


if __name__ == "__main__":
    main()
