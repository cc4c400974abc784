"""
Tests for the model interface, command line, plotting and export.
"""

import json
import sys
from pathlib import Path

import pandas as pd
import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from solar_cleaning.config import SimulationParameters
from solar_cleaning.degradation import simulate, summarize
from solar_cleaning.main import SolarCleaningModel, main
from solar_cleaning.visualization import DataExporter, InteractivePlots, ReportGenerator, records_to_dataframe


class TestSolarCleaningModel:
    """Test the high-level model interface"""

    def test_template_workflow(self, tmp_path):
        model = SolarCleaningModel()
        assert model.create_scenario_from_template("Commercial_575W")

        results = model.run_simulation()
        assert len(results['records']) == 121
        assert results['summary'].final_cumulative_cost == 1339

        summary = model.get_summary()
        assert summary['cleaning']['total_cleanings'] == 20
        assert summary['energy']['total_kWh'] == results['records'][-1].cumulative_energy_kwh

        assert model.export_results(str(tmp_path), formats=["csv", "json"])
        assert (tmp_path / "Commercial_575W_analysis.csv").exists()
        assert (tmp_path / "summary_Commercial_575W_analysis.csv").exists()
        assert (tmp_path / "Commercial_575W_analysis.json").exists()
        assert (tmp_path / "Commercial_575W_config.json").exists()
        assert "Total cost: $1339" in (tmp_path / "Commercial_575W_report.txt").read_text()

    def test_unknown_template_reports_failure(self):
        model = SolarCleaningModel()
        assert model.create_scenario_from_template("Lunar_Base") is False
        with pytest.raises(ValueError):
            model.run_simulation()

    def test_invalid_override_reports_failure(self):
        model = SolarCleaningModel()
        assert model.create_scenario_from_template(
            "Commercial_575W", parameters={"horizon_months": 100}
        ) is False

    def test_load_missing_scenario(self, tmp_path):
        model = SolarCleaningModel()
        assert model.load_scenario(str(tmp_path / "missing.yaml")) is False

    def test_results_required(self):
        model = SolarCleaningModel()
        model.set_parameters(SimulationParameters(horizon_months=12))
        assert model.get_summary() == {"status": "No simulation completed"}
        with pytest.raises(ValueError):
            model.plot_results()

    def test_plot_results(self, tmp_path):
        model = SolarCleaningModel()
        model.set_parameters(SimulationParameters(cleaning_enabled=False, horizon_months=24))
        model.run_simulation()

        plots = model.plot_results(save_path=str(tmp_path))
        assert set(plots) == {"efficiency", "energy"}
        assert (tmp_path / "efficiency.html").exists()

        with pytest.raises(ValueError):
            model.plot_results(plot_types=["histogram"])

    def test_compare_scenarios(self):
        model = SolarCleaningModel()
        comparison = model.compare_scenarios({
            "Quarterly": SimulationParameters(cleaning_interval_months=3, horizon_months=60),
            "Never": SimulationParameters(cleaning_enabled=False, horizon_months=60),
        })

        assert set(comparison['records']) == {"Quarterly", "Never"}
        assert comparison['summaries']["Never"].final_cumulative_cost == 0
        assert len(comparison['comparison_plot'].data) > 0
        assert model.config is None

    def test_export_sanitizes_scenario_name(self, tmp_path):
        model = SolarCleaningModel()
        model.set_parameters(SimulationParameters(horizon_months=12), scenario_name="roof/east wing")
        model.run_simulation()

        assert model.export_results(str(tmp_path / "out"), formats=["csv"])
        assert (tmp_path / "out" / "roof_east_wing_analysis.csv").exists()
        assert (tmp_path / "out" / "roof_east_wing_config.json").exists()
        assert "roof/east wing" in (tmp_path / "out" / "roof_east_wing_report.txt").read_text()
        assert not (tmp_path / "roof").exists()

    def test_validate_without_config(self):
        assert SolarCleaningModel().validate_configuration()['feasible'] is False


class TestCommandLine:
    """Test the command line interface"""

    def test_list_templates(self, capsys):
        assert main(["--list-templates"]) == 0
        assert "Residential_400W" in capsys.readouterr().out

    def test_template_run(self, tmp_path, capsys):
        assert main(["--template", "Residential_400W", "--interval", "3", "-o", str(tmp_path)]) == 0
        out = capsys.readouterr().out
        assert "Panel rating: 400W" in out
        assert "Total cleanings: 40" in out
        assert (tmp_path / "Residential_400W_analysis.csv").exists()

    def test_config_file_with_override(self, tmp_path, capsys):
        config = tmp_path / "scenario.json"
        config.write_text(json.dumps({"scenario_name": "Rooftop", "parameters": {"horizon_months": 24}}))
        out_dir = tmp_path / "out"

        assert main([str(config), "--no-cleaning", "-o", str(out_dir)]) == 0
        assert "Mode: No Cleaning" in capsys.readouterr().out

    def test_invalid_horizon(self, tmp_path):
        assert main(["--horizon", "100", "-o", str(tmp_path)]) == 1


class TestExport:
    """Test data export and text reports"""

    @pytest.fixture
    def run(self):
        params = SimulationParameters(cleaning_interval_months=6, horizon_months=24)
        records = simulate(params)
        return params, records, summarize(records, params)

    def test_dataframe(self, run):
        _, records, _ = run
        df = records_to_dataframe(records)
        assert len(df) == 25
        assert df['cleaning_performed'].sum() == 4
        assert list(records_to_dataframe(records, labels=True).columns)[:2] == ['Month', 'Year']

    def test_excel_sheets(self, run, tmp_path):
        params, records, summary = run
        path = DataExporter(tmp_path).export_excel(records, summary, params, "abc123", filename="run.xlsx")
        sheets = pd.read_excel(path, sheet_name=None)
        assert set(sheets) == {'Time Series', 'Summary', 'Parameters'}
        assert len(sheets['Time Series']) == 25

    def test_summary_cards(self, run):
        params, _, summary = run
        cards = ReportGenerator().summary_cards(summary, params)
        assert list(cards) == ['Cleaning Status', 'Degradation Stats', 'Energy Production']
        assert "Total cleanings: 4" in cards['Cleaning Status']
        assert "Dirt degradation: 2%/month" in cards['Degradation Stats']
        assert "Panel degradation: 0.7%/year" in cards['Degradation Stats']

    def test_cards_without_cleaning(self):
        params = SimulationParameters(cleaning_enabled=False, horizon_months=12)
        summary = summarize(simulate(params), params)
        cards = ReportGenerator().summary_cards(summary, params)
        assert cards['Cleaning Status'] == ["Mode: No Cleaning"]


class TestPlots:
    """Test chart construction"""

    def test_efficiency_chart(self):
        records = simulate(SimulationParameters(horizon_months=12))
        fig = InteractivePlots().plot_efficiency_over_time(records)
        assert [trace.name for trace in fig.data] == ['Dirt Efficiency', 'Effective Efficiency', 'Panel Degradation']
        assert list(fig.data[0].x) == [r.month / 12 for r in records]
        assert [point[1] for point in fig.data[0].customdata] == [r.year_fraction for r in records]
        assert tuple(fig.layout.yaxis.range) == (0, 100)

    def test_each_month_has_its_own_position(self):
        records = simulate(SimulationParameters(horizon_months=24))
        plots = InteractivePlots()
        for fig in (plots.plot_efficiency_over_time(records), plots.plot_energy_production(records),
                    plots.plot_cumulative_cost(records)):
            x = list(fig.data[0].x)
            assert len(set(x)) == len(records)
            assert x == sorted(x)

    def test_cost_chart_marks_cleanings(self):
        records = simulate(SimulationParameters(cleaning_interval_months=3, horizon_months=12))
        fig = InteractivePlots().plot_cumulative_cost(records)
        assert len(fig.data) == 2
        assert list(fig.data[1].customdata) == [3, 6, 9, 12]

    def test_dashboard(self):
        records = simulate(SimulationParameters(horizon_months=12))
        assert len(InteractivePlots().create_dashboard(records, include_cost=False).data) == 5

    def test_empty_records(self):
        assert len(InteractivePlots().plot_energy_production([]).data) == 0

    def test_unsupported_export(self, tmp_path):
        plots = InteractivePlots()
        with pytest.raises(ValueError):
            plots.export_plot(plots.plot_energy_production([]), str(tmp_path / "x.bmp"), format="bmp")
