"""
Data Export
===========

Handles export of simulation results in various formats.

This module converts monthly records to pandas DataFrames and writes
CSV, JSON and Excel files, and renders the headline statistics as text.

Classes:
    DataExporter: Main data export class
    ReportGenerator: Summary text generation
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Union

import pandas as pd

from ..config.scenario_config import SimulationParameters
from ..degradation.lifetime_model import MonthRecord, SimulationSummary


logger = logging.getLogger(__name__)

# Record field -> export column
COLUMN_LABELS = {
    'month': 'Month',
    'year_fraction': 'Year',
    'dirt_efficiency_pct': 'Dirt Efficiency (%)',
    'effective_efficiency_pct': 'Effective Efficiency (%)',
    'panel_degradation_pct': 'Panel Degradation (%)',
    'cumulative_cost': 'Total Cost ($)',
    'monthly_energy_kwh': 'Monthly Energy (kWh)',
    'cumulative_energy_kwh': 'Total Energy (kWh)',
    'cleaning_performed': 'Cleaning Performed',
    'cost_per_cleaning': 'Cost per Cleaning ($)'
}


def records_to_dataframe(records: List[MonthRecord], labels: bool = False) -> pd.DataFrame:
    """
    Convert records to a DataFrame, one row per month

    Args:
        records: Simulated months
        labels: Use human-readable column headers instead of field names

    Returns:
        DataFrame with one column per record field
    """
    df = pd.DataFrame([r.to_dict() for r in records], columns=list(COLUMN_LABELS))
    if labels:
        df = df.rename(columns=COLUMN_LABELS)
    return df


class DataExporter:
    """Main data export class"""

    def __init__(self, export_dir: Union[str, Path] = "exports"):
        """
        Initialize data exporter

        Args:
            export_dir: Directory receiving exported files
        """
        self.export_dir = Path(export_dir)
        self.export_dir.mkdir(parents=True, exist_ok=True)

    def _default_filename(self, simulation_id: str, suffix: str) -> str:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        return f"simulation_{simulation_id[:8]}_{timestamp}.{suffix}"

    def export_csv(self, records: List[MonthRecord], summary: SimulationSummary,
                   simulation_id: str, filename: Optional[str] = None) -> str:
        """
        Export records to CSV, with the summary in a companion file

        Args:
            records: Simulated months
            summary: Headline statistics
            simulation_id: Simulation identifier
            filename: Optional custom filename

        Returns:
            Path to exported file
        """
        if filename is None:
            filename = self._default_filename(simulation_id, "csv")

        filepath = self.export_dir / filename
        records_to_dataframe(records, labels=True).to_csv(filepath, index=False)

        summary_filepath = self.export_dir / f"summary_{filename}"
        self._export_summary_csv(summary, summary_filepath)

        logger.info(f"Exported {len(records)} months to {filepath}")
        return str(filepath)

    def export_json(self, records: List[MonthRecord], summary: SimulationSummary,
                    params: SimulationParameters, simulation_id: str,
                    filename: Optional[str] = None) -> str:
        """
        Export parameters, records and summary to one JSON document

        Args:
            records: Simulated months
            summary: Headline statistics
            params: Parameters of the run
            simulation_id: Simulation identifier
            filename: Optional custom filename

        Returns:
            Path to exported file
        """
        if filename is None:
            filename = self._default_filename(simulation_id, "json")

        filepath = self.export_dir / filename

        export_data = {
            'metadata': {
                'simulation_id': simulation_id,
                'export_timestamp': datetime.now().isoformat(),
                'data_format_version': '1.0'
            },
            'parameters': params.model_dump(mode="json"),
            'summary': summary.to_dict(),
            'records': [r.to_dict() for r in records]
        }

        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(export_data, f, indent=2)

        logger.info(f"Exported {len(records)} months to {filepath}")
        return str(filepath)

    def export_excel(self, records: List[MonthRecord], summary: SimulationSummary,
                     params: SimulationParameters, simulation_id: str,
                     filename: Optional[str] = None) -> str:
        """
        Export results to Excel format with multiple sheets

        Args:
            records: Simulated months
            summary: Headline statistics
            params: Parameters of the run
            simulation_id: Simulation identifier
            filename: Optional custom filename

        Returns:
            Path to exported file
        """
        if filename is None:
            filename = self._default_filename(simulation_id, "xlsx")

        filepath = self.export_dir / filename

        with pd.ExcelWriter(filepath, engine='openpyxl') as writer:
            records_to_dataframe(records, labels=True).to_excel(writer, sheet_name='Time Series', index=False)
            self._summary_frame(summary).to_excel(writer, sheet_name='Summary', index=False)

            flat_params = params.model_dump()
            flat_params.update(flat_params.pop('constants'))
            params_df = pd.DataFrame(list(flat_params.items()), columns=['Parameter', 'Value'])
            params_df.to_excel(writer, sheet_name='Parameters', index=False)

        logger.info(f"Exported {len(records)} months to {filepath}")
        return str(filepath)

    def _summary_frame(self, summary: SimulationSummary) -> pd.DataFrame:
        summary_data = {
            'Metric': [
                'Total Cost ($)',
                'Total Energy (kWh)',
                'Average Effective Efficiency (%)',
                'Average Monthly Energy (kWh)',
                'Total Panel Degradation (%)',
                'Total Cleanings',
                'Bulk Discount (%)',
                'Projected Cleanings (pricing)',
                'Cost per Cleaning ($)'
            ],
            'Value': [
                summary.final_cumulative_cost,
                summary.final_cumulative_energy_kwh,
                summary.average_effective_efficiency_pct,
                summary.average_monthly_energy_kwh,
                summary.final_panel_degradation_pct,
                summary.total_cleanings,
                summary.bulk_discount * 100,
                summary.projected_cleanings,
                summary.cost_per_cleaning
            ]
        }
        return pd.DataFrame(summary_data)

    def _export_summary_csv(self, summary: SimulationSummary, filepath: Path):
        """Export summary statistics to CSV"""
        self._summary_frame(summary).to_csv(filepath, index=False)


class ReportGenerator:
    """Renders headline statistics the way the calculator page shows them"""

    def summary_cards(self, summary: SimulationSummary,
                      params: SimulationParameters) -> Dict[str, List[str]]:
        """
        Summary statistics grouped into the three calculator cards

        Args:
            summary: Headline statistics
            params: Parameters of the run

        Returns:
            Mapping of card title to its display lines
        """
        constants = params.constants

        cleaning = [f"Mode: {'Active' if params.cleaning_enabled else 'No Cleaning'}"]
        if params.cleaning_enabled:
            cleaning += [
                f"Total cleanings: {summary.total_cleanings}",
                f"Bulk discount: {summary.bulk_discount * 100:.1f}%",
                f"Total cost: ${summary.final_cumulative_cost}"
            ]

        return {
            'Cleaning Status': cleaning,
            'Degradation Stats': [
                f"Dirt degradation: {constants.monthly_dirt_degradation_pct:g}%/month",
                f"Panel degradation: {constants.yearly_panel_degradation_pct:g}%/year",
                f"Total panel loss: {summary.final_panel_degradation_pct:.1f}%",
                f"Avg effective eff.: {summary.average_effective_efficiency_pct:.1f}%"
            ],
            'Energy Production': [
                f"Panel rating: {constants.panel_rated_power_watts:g}W",
                f"Daily peak hours: {constants.average_daily_peak_hours:g}",
                f"Avg monthly: {summary.average_monthly_energy_kwh:.1f} kWh",
                f"Total: {summary.final_cumulative_energy_kwh:.1f} kWh"
            ]
        }

    def generate_text_summary(self, summary: SimulationSummary,
                              params: SimulationParameters,
                              scenario_name: str = "Simulation") -> str:
        """Plain-text report of the summary cards"""
        lines = [
            f"{scenario_name}",
            "=" * len(scenario_name),
            f"Horizon: {params.horizon_years:.1f} years ({params.horizon_months} months)",
            ""
        ]
        for title, card_lines in self.summary_cards(summary, params).items():
            lines.append(title)
            lines.extend(f"  {line}" for line in card_lines)
            lines.append("")

        return "\n".join(lines).rstrip() + "\n"
