"""
Visualization Module

This module provides tools for creating interactive visualizations
and exporting simulation results.
"""

from .interactive_plots import InteractivePlots
from .data_export import DataExporter, ReportGenerator, records_to_dataframe

__all__ = ["InteractivePlots", "DataExporter", "ReportGenerator", "records_to_dataframe"]
