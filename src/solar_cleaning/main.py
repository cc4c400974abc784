"""
Solar Panel Cleaning Simulator - Main Interface

This module provides the main interface for the cleaning simulator. It ties
together scenario configuration, the monthly simulation, plotting and export.

Usage:
    from solar_cleaning.main import SolarCleaningModel

    model = SolarCleaningModel()
    model.create_scenario_from_template('Commercial_575W')
    results = model.run_simulation()
    model.plot_results(save_path='results/')
    model.export_results('results/')
"""

import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Any

from . import __version__
from .config.scenario_config import ScenarioConfig, SimulationConfig, SimulationParameters
from .degradation.lifetime_model import MonthRecord, simulate, summarize
from .visualization.data_export import DataExporter, ReportGenerator
from .visualization.interactive_plots import InteractivePlots


# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def _file_stem(name: str) -> str:
    """Scenario name reduced to characters safe in a file name"""
    return re.sub(r"[^A-Za-z0-9._-]+", "_", name).strip("._") or "scenario"


class SolarCleaningModel:
    """
    Main interface for cleaning schedule analysis.

    Features:
    - Scenario loading from files or templates
    - Monthly simulation and summary statistics
    - Interactive visualizations
    - Data export
    - Side-by-side comparison of chosen scenarios
    """

    def __init__(self, config: Optional[SimulationConfig] = None,
                 log_level: str = "INFO"):
        """
        Initialize the model

        Args:
            config: Scenario configuration
            log_level: Logging level
        """
        logger.setLevel(getattr(logging, log_level.upper()))

        self.config = config
        self.scenario_manager = ScenarioConfig()
        self.plotter = InteractivePlots()
        self.report_generator = ReportGenerator()

        # Results storage
        self.results: Dict[str, Any] = {}
        self.simulation_time: Optional[float] = None

        # Status tracking
        self.is_initialized = config is not None
        self.is_simulation_complete = False

    def load_scenario(self, filepath: str) -> bool:
        """
        Load simulation scenario from file

        Args:
            filepath: Path to configuration file

        Returns:
            True if successful
        """
        try:
            logger.info(f"Loading scenario from {filepath}")
            self.config = self.scenario_manager.load_config(filepath)
            self._reset_results()
            logger.info("Scenario loaded successfully")
            return True

        except Exception as e:
            logger.error(f"Failed to load scenario: {e}")
            return False

    def create_scenario_from_template(self, template_name: str, **kwargs) -> bool:
        """
        Create scenario from predefined template

        Args:
            template_name: Name of template
            **kwargs: Configuration overrides

        Returns:
            True if successful
        """
        try:
            logger.info(f"Creating scenario from template: {template_name}")
            self.config = self.scenario_manager.create_from_template(template_name, **kwargs)
            self._reset_results()
            logger.info("Scenario created successfully")
            return True

        except Exception as e:
            logger.error(f"Failed to create scenario: {e}")
            return False

    def set_parameters(self, params: SimulationParameters, scenario_name: str = "Custom") -> None:
        """Replace the current scenario with explicit parameters"""
        self.config = SimulationConfig(scenario_name=scenario_name, parameters=params)
        self._reset_results()

    def _reset_results(self):
        self.results = {}
        self.simulation_time = None
        self.is_initialized = True
        self.is_simulation_complete = False

    @property
    def parameters(self) -> SimulationParameters:
        if not self.config:
            raise ValueError("No configuration loaded")
        return self.config.parameters

    def run_simulation(self) -> Dict[str, Any]:
        """
        Run the monthly simulation for the current scenario

        Returns:
            Simulation results
        """
        if not self.is_initialized:
            raise ValueError("Model not initialized. Load a scenario first.")

        logger.info(f"Running simulation for {self.config.scenario_name}...")
        start_time = datetime.now()

        params = self.parameters
        records = simulate(params)
        summary = summarize(records, params)

        end_time = datetime.now()
        self.simulation_time = (end_time - start_time).total_seconds()

        self.results = {
            'records': records,
            'summary': summary,
            'simulation_metadata': {
                'config': self.config.model_dump(mode="json"),
                'simulation_time_seconds': self.simulation_time,
                'start_time': start_time.isoformat(),
                'end_time': end_time.isoformat(),
                'total_data_points': len(records)
            }
        }

        self.is_simulation_complete = True
        logger.info(f"Simulated {len(records)} months in {self.simulation_time:.4f} seconds")
        return self.results

    def _require_results(self):
        if not self.is_simulation_complete:
            raise ValueError("No simulation results available. Run simulation first.")

    def plot_results(self, plot_types: Optional[List[str]] = None,
                     save_path: Optional[str] = None) -> Dict[str, Any]:
        """
        Generate visualization plots

        Args:
            plot_types: Types of plots to generate
            save_path: Optional directory to save HTML plots

        Returns:
            Dictionary of plot figures
        """
        self._require_results()

        if plot_types is None:
            plot_types = ["efficiency", "energy"]
            if self.parameters.cleaning_enabled:
                plot_types.append("cost")

        records = self.results['records']
        name = self.config.scenario_name
        builders = {
            "efficiency": lambda: self.plotter.plot_efficiency_over_time(
                records, title=f"{name} - Efficiency Over Time"),
            "energy": lambda: self.plotter.plot_energy_production(
                records, title=f"{name} - Energy Production"),
            "cost": lambda: self.plotter.plot_cumulative_cost(
                records, title=f"{name} - Cumulative Cost"),
            "dashboard": lambda: self.plotter.create_dashboard(
                records, include_cost=self.parameters.cleaning_enabled, title=name),
        }

        unknown = [p for p in plot_types if p not in builders]
        if unknown:
            raise ValueError(f"Unknown plot types: {', '.join(unknown)}")

        logger.info("Generating plots...")
        if save_path:
            Path(save_path).mkdir(parents=True, exist_ok=True)

        plots = {}
        for plot_type in plot_types:
            fig = builders[plot_type]()
            plots[plot_type] = fig
            if save_path:
                self.plotter.export_plot(fig, str(Path(save_path) / f"{plot_type}.html"))

        logger.info(f"Generated {len(plots)} plots")
        return plots

    def export_results(self, output_dir: str, formats: Optional[List[str]] = None) -> bool:
        """
        Export simulation results

        Args:
            output_dir: Output directory path
            formats: Export formats ("csv", "json", "excel")

        Returns:
            True if successful
        """
        self._require_results()

        if formats is None:
            formats = ["csv", "json"]

        logger.info(f"Exporting results to {output_dir}...")
        output_path = Path(output_dir)
        exporter = DataExporter(output_path)

        records = self.results['records']
        summary = self.results['summary']
        params = self.parameters
        name = _file_stem(self.config.scenario_name)
        base_name = f"{name}_analysis"

        try:
            if "csv" in formats:
                exporter.export_csv(records, summary, name, filename=f"{base_name}.csv")
            if "json" in formats:
                exporter.export_json(records, summary, params, name, filename=f"{base_name}.json")
            if "excel" in formats:
                exporter.export_excel(records, summary, params, name, filename=f"{base_name}.xlsx")

            self.scenario_manager.save_config(self.config, str(output_path / f"{name}_config.json"))

            report = self.report_generator.generate_text_summary(summary, params, self.config.scenario_name)
            (output_path / f"{name}_report.txt").write_text(report, encoding='utf-8')

            logger.info(f"Results exported to {output_dir}")
            return True

        except Exception as e:
            logger.error(f"Export failed: {e}")
            return False

    def get_summary(self) -> Dict[str, Any]:
        """
        Get simulation summary

        Returns:
            Summary dictionary
        """
        if not self.is_simulation_complete:
            return {"status": "No simulation completed"}

        params = self.parameters
        summary = self.results['summary']

        return {
            'scenario': {
                'name': self.config.scenario_name,
                'description': self.config.description,
                'horizon_months': params.horizon_months,
                'cleaning_enabled': params.cleaning_enabled,
                'cleaning_interval_months': params.cleaning_interval_months
            },
            'cleaning': {
                'total_cleanings': summary.total_cleanings,
                'bulk_discount_percent': summary.bulk_discount * 100,
                'cost_per_cleaning': summary.cost_per_cleaning,
                'total_cost': summary.final_cumulative_cost
            },
            'degradation': {
                'final_panel_degradation_percent': summary.final_panel_degradation_pct,
                'average_effective_efficiency_percent': summary.average_effective_efficiency_pct
            },
            'energy': {
                'average_monthly_kWh': summary.average_monthly_energy_kwh,
                'total_kWh': summary.final_cumulative_energy_kwh
            },
            'simulation': {
                'time_seconds': self.simulation_time,
                'data_points': len(self.results['records']),
                'completion_time': datetime.now().isoformat()
            }
        }

    def compare_scenarios(self, scenarios: Dict[str, SimulationParameters]) -> Dict[str, Any]:
        """
        Compare scenarios chosen by the caller

        Each scenario is simulated independently; the model's current
        scenario and results are left untouched.

        Args:
            scenarios: Dictionary of scenario name to parameters

        Returns:
            Per-scenario records and summaries plus a comparison plot
        """
        logger.info(f"Comparing {len(scenarios)} scenarios...")

        runs: Dict[str, List[MonthRecord]] = {}
        summaries = {}
        for scenario_name, params in scenarios.items():
            records = simulate(params)
            runs[scenario_name] = records
            summaries[scenario_name] = summarize(records, params)

        return {
            'records': runs,
            'summaries': summaries,
            'comparison_plot': self.plotter.compare_scenarios(runs)
        }

    def validate_configuration(self) -> Dict[str, Any]:
        """
        Validate current configuration

        Returns:
            Validation results
        """
        if not self.config:
            return {"feasible": False, "issues": ["No configuration loaded"], "warnings": [],
                    "recommendations": []}

        return self.scenario_manager.validate_schedule_feasibility(self.config)

    def list_available_templates(self) -> List[str]:
        """List available scenario templates"""
        return self.scenario_manager.list_templates()

    def get_configuration_info(self) -> Dict[str, Any]:
        """
        Get current configuration information

        Returns:
            Configuration summary
        """
        if not self.config:
            return {"status": "No configuration loaded"}

        return self.scenario_manager.generate_config_summary(self.config)


def main(argv: Optional[List[str]] = None):
    """Command line interface for the cleaning simulator"""
    import argparse

    parser = argparse.ArgumentParser(description="Solar Panel Cleaning Simulator")
    parser.add_argument("config", nargs="?", help="Configuration file path")
    parser.add_argument("--output", "-o", help="Output directory", default="results")
    parser.add_argument("--plots", action="store_true", help="Generate plots")
    parser.add_argument("--template", help="Create scenario from template")
    parser.add_argument("--list-templates", action="store_true", help="List available templates")
    parser.add_argument("--interval", type=int, help="Months between cleanings (1-12)")
    parser.add_argument("--horizon", type=int, help="Simulated months (12-240, multiple of 12)")
    parser.add_argument("--power", type=float, help="Panel rated power in W")
    parser.add_argument("--no-cleaning", action="store_true", help="Disable cleaning")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    args = parser.parse_args(argv)

    model = SolarCleaningModel()

    if args.list_templates:
        print("Available templates:")
        for template in model.list_available_templates():
            print(f"  - {template}")
        return 0

    overrides: Dict[str, Any] = {}
    if args.interval is not None:
        overrides['cleaning_interval_months'] = args.interval
    if args.horizon is not None:
        overrides['horizon_months'] = args.horizon
    if args.no_cleaning:
        overrides['cleaning_enabled'] = False
    if args.power is not None:
        overrides['constants'] = {'panel_rated_power_watts': args.power}

    if args.config:
        success = model.load_scenario(args.config)
        if success and overrides:
            try:
                model.config = model.scenario_manager.apply_overrides(model.config, parameters=overrides)
            except ValueError as e:
                logger.error(f"Invalid parameter override: {e}")
                success = False
    else:
        success = model.create_scenario_from_template(args.template or "Commercial_575W",
                                                      parameters=overrides)

    if not success:
        print("Failed to load configuration")
        return 1

    validation = model.validate_configuration()
    for issue in validation['issues']:
        print(f"Issue: {issue}")
    for warning in validation['warnings']:
        print(f"Warning: {warning}")

    print("Running simulation...")
    model.run_simulation()

    if args.plots:
        print("Generating plots...")
        model.plot_results(save_path=args.output)

    print("Exporting results...")
    if not model.export_results(args.output):
        return 1

    summary = model.results['summary']
    print()
    print(model.report_generator.generate_text_summary(summary, model.parameters, model.config.scenario_name))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
