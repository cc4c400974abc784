"""
Interactive Plots Module

This module creates interactive visualizations of a cleaning simulation
using Plotly: efficiency over time, energy production, cumulative cleaning
cost, and side-by-side comparison of user-chosen scenarios.

References:
- Plotly Python documentation
"""

from typing import List, Dict

import pandas as pd

try:
    import plotly.graph_objects as go
    import plotly.express as px
    from plotly.subplots import make_subplots
except ImportError:
    raise ImportError("Plotly required for interactive visualizations. Install with: pip install plotly")

from ..degradation.lifetime_model import MonthRecord


class InteractivePlots:
    """
    Interactive visualization toolkit for cleaning simulations.

    Features:
    - Efficiency and aging trends
    - Monthly and cumulative energy
    - Cumulative cleaning cost
    - Multi-scenario comparison
    - Export capabilities
    """

    def __init__(self, theme: str = "plotly_white"):
        """
        Initialize interactive plots

        Args:
            theme: Plotly theme for styling
        """
        self.theme = theme
        self.color_palette = px.colors.qualitative.Set1
        self.series_colors = {
            'dirt_efficiency_pct': '#2563eb',
            'effective_efficiency_pct': '#dc2626',
            'panel_degradation_pct': '#16a34a',
            'monthly_energy_kwh': '#16a34a',
            'cumulative_energy_kwh': '#dc2626',
            'cumulative_cost': '#dc2626'
        }

    def _line(self, records: List[MonthRecord], field: str, name: str,
              unit: str, precision: int = 1) -> go.Scatter:
        return go.Scatter(
            x=[r.month / 12 for r in records],
            y=[getattr(r, field) for r in records],
            customdata=[[r.month, r.year_fraction] for r in records],
            mode='lines',
            name=name,
            line=dict(color=self.series_colors.get(field), width=2),
            hovertemplate=('Year: %{customdata[1]}<br>Month: %{customdata[0]}<br>'
                           f'{name}: %{{y:.{precision}f}} {unit}<extra></extra>')
        )

    def plot_efficiency_over_time(self, records: List[MonthRecord],
                                  title: str = "Efficiency Over Time") -> go.Figure:
        """
        Plot soiling efficiency, effective efficiency and panel aging

        Args:
            records: Simulated months
            title: Plot title

        Returns:
            Plotly figure object
        """
        if not records:
            return go.Figure()

        fig = go.Figure()
        fig.add_trace(self._line(records, 'dirt_efficiency_pct', 'Dirt Efficiency', '%'))
        fig.add_trace(self._line(records, 'effective_efficiency_pct', 'Effective Efficiency', '%'))
        fig.add_trace(self._line(records, 'panel_degradation_pct', 'Panel Degradation', '%', precision=2))

        fig.update_layout(
            title=title,
            xaxis_title="Years",
            yaxis_title="Efficiency (%)",
            yaxis_range=[0, 100],
            template=self.theme,
            height=400,
            hovermode='x unified'
        )

        return fig

    def plot_energy_production(self, records: List[MonthRecord],
                               title: str = "Energy Production") -> go.Figure:
        """
        Plot monthly and cumulative energy

        Args:
            records: Simulated months
            title: Plot title

        Returns:
            Plotly figure object
        """
        if not records:
            return go.Figure()

        fig = go.Figure()
        fig.add_trace(self._line(records, 'monthly_energy_kwh', 'Monthly Energy', 'kWh', precision=2))
        fig.add_trace(self._line(records, 'cumulative_energy_kwh', 'Cumulative Energy', 'kWh', precision=2))

        fig.update_layout(
            title=title,
            xaxis_title="Years",
            yaxis_title="Energy (kWh)",
            template=self.theme,
            height=400,
            hovermode='x unified'
        )

        return fig

    def plot_cumulative_cost(self, records: List[MonthRecord],
                             title: str = "Cumulative Cost") -> go.Figure:
        """
        Plot cumulative cleaning spend with markers on cleaning months

        Args:
            records: Simulated months
            title: Plot title

        Returns:
            Plotly figure object
        """
        if not records:
            return go.Figure()

        fig = go.Figure()
        fig.add_trace(self._line(records, 'cumulative_cost', 'Total Cost', '$', precision=0))

        cleanings = [r for r in records if r.cleaning_performed]
        if cleanings:
            fig.add_trace(
                go.Scatter(
                    x=[r.month / 12 for r in cleanings],
                    y=[r.cumulative_cost for r in cleanings],
                    mode='markers',
                    name='Cleaning performed',
                    marker=dict(color='#2563eb', size=6),
                    hovertemplate='Cleaning at month %{customdata}<extra></extra>',
                    customdata=[r.month for r in cleanings]
                )
            )

        fig.update_layout(
            title=title,
            xaxis_title="Years",
            yaxis_title="Total Cost ($)",
            template=self.theme,
            height=400,
            showlegend=False
        )

        return fig

    def compare_scenarios(self, scenarios: Dict[str, List[MonthRecord]],
                          title: str = "Scenario Comparison") -> go.Figure:
        """
        Compare scenarios chosen by the user

        Args:
            scenarios: Dictionary mapping scenario name to its records
            title: Plot title

        Returns:
            Plotly figure object
        """
        fig = make_subplots(
            rows=2, cols=2,
            subplot_titles=(
                'Effective Efficiency', 'Cumulative Energy',
                'Cumulative Cost', 'Energy per Cost'
            ),
            vertical_spacing=0.12
        )

        colors = self.color_palette
        metrics = []

        for i, (scenario_name, records) in enumerate(scenarios.items()):
            if not records:
                continue
            color = colors[i % len(colors)]
            years = [r.month / 12 for r in records]

            fig.add_trace(
                go.Scatter(x=years, y=[r.effective_efficiency_pct for r in records],
                           mode='lines', name=scenario_name, legendgroup=scenario_name,
                           line=dict(color=color, width=2)),
                row=1, col=1
            )
            fig.add_trace(
                go.Scatter(x=years, y=[r.cumulative_energy_kwh for r in records],
                           mode='lines', name=scenario_name, legendgroup=scenario_name,
                           showlegend=False, line=dict(color=color, width=2)),
                row=1, col=2
            )
            fig.add_trace(
                go.Scatter(x=years, y=[r.cumulative_cost for r in records],
                           mode='lines', name=scenario_name, legendgroup=scenario_name,
                           showlegend=False, line=dict(color=color, width=2, dash='dot')),
                row=2, col=1
            )

            final = records[-1]
            metrics.append({
                'Scenario': scenario_name,
                'Energy (kWh)': final.cumulative_energy_kwh,
                'Cost ($)': final.cumulative_cost,
                'kWh per $': (final.cumulative_energy_kwh / final.cumulative_cost
                              if final.cumulative_cost else None)
            })

        if metrics:
            metrics_df = pd.DataFrame(metrics)
            fig.add_trace(
                go.Bar(
                    x=metrics_df['Scenario'],
                    y=metrics_df['kWh per $'],
                    marker_color=colors[:len(metrics_df)],
                    showlegend=False,
                    hovertemplate='Scenario: %{x}<br>%{y:.1f} kWh per $<extra></extra>'
                ),
                row=2, col=2
            )

        fig.update_layout(
            title=title,
            height=800,
            template=self.theme,
            showlegend=True
        )

        fig.update_xaxes(title_text="Years", row=1, col=1)
        fig.update_xaxes(title_text="Years", row=1, col=2)
        fig.update_xaxes(title_text="Years", row=2, col=1)
        fig.update_yaxes(title_text="Efficiency (%)", row=1, col=1)
        fig.update_yaxes(title_text="Energy (kWh)", row=1, col=2)
        fig.update_yaxes(title_text="Cost ($)", row=2, col=1)
        fig.update_yaxes(title_text="kWh per $", row=2, col=2)

        return fig

    def create_dashboard(self, records: List[MonthRecord], include_cost: bool = True,
                         title: str = "Solar Panel Performance Analysis") -> go.Figure:
        """
        Stack the efficiency, energy and cost charts in one figure

        Args:
            records: Simulated months
            include_cost: Add the cumulative cost panel
            title: Dashboard title

        Returns:
            Plotly figure object with stacked subplots
        """
        panels = [self.plot_efficiency_over_time(records), self.plot_energy_production(records)]
        subplot_titles = ['Efficiency Over Time', 'Energy Production']
        y_titles = ['Efficiency (%)', 'Energy (kWh)']
        if include_cost:
            panels.append(self.plot_cumulative_cost(records))
            subplot_titles.append('Cumulative Cost')
            y_titles.append('Total Cost ($)')

        fig = make_subplots(
            rows=len(panels), cols=1,
            subplot_titles=subplot_titles,
            vertical_spacing=0.08,
            shared_xaxes=True
        )

        for row, panel in enumerate(panels, start=1):
            for trace in panel.data:
                fig.add_trace(trace, row=row, col=1)
            fig.update_yaxes(title_text=y_titles[row - 1], row=row, col=1)

        fig.update_yaxes(range=[0, 100], row=1, col=1)
        fig.update_xaxes(title_text="Years", row=len(panels), col=1)
        fig.update_layout(
            title=title,
            height=350 * len(panels),
            template=self.theme
        )

        return fig

    def export_plot(self, fig: go.Figure, filename: str,
                    format: str = "html", width: int = 1200, height: int = 800):
        """
        Export plot to various formats

        Static formats need the ``kaleido`` package.

        Args:
            fig: Plotly figure to export
            filename: Output filename
            format: Export format ("html", "png", "svg", "pdf")
            width: Image width in pixels
            height: Image height in pixels
        """
        if format.lower() == "html":
            fig.write_html(filename, include_plotlyjs='cdn')
        elif format.lower() in ("png", "svg", "pdf"):
            fig.write_image(filename, width=width, height=height, format=format.lower())
        else:
            raise ValueError(f"Unsupported export format: {format}")

    def to_html_fragment(self, fig: go.Figure, include_plotlyjs: bool = False) -> str:
        """Render a figure as an embeddable <div>"""
        return fig.to_html(full_html=False, include_plotlyjs='cdn' if include_plotlyjs else False)
