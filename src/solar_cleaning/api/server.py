"""
API Server
==========

Flask server for the solar panel cleaning calculator.

Serves the single-page calculator and a small JSON API. Every request runs
the simulation inline; nothing is stored between requests.

Routes:
    GET /                         - Calculator page
    GET /api/health               - Health check
    GET /api/templates            - List scenario templates
    GET /api/templates/{name}     - Template details
    POST /api/simulate            - Run a simulation
    POST /api/export/data         - Download records as csv/json/excel
"""

import io
import logging
import tempfile
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Tuple

from flask import Flask, request, jsonify, send_file, render_template
from flask_cors import CORS
from pydantic import ValidationError

from .. import __version__
from ..config.scenario_config import (
    PanelVariant,
    ScenarioConfig,
    SimulationParameters,
    parameters_from_form,
)
from ..degradation.lifetime_model import simulate, summarize
from ..visualization.data_export import DataExporter, ReportGenerator
from ..visualization.interactive_plots import InteractivePlots


logger = logging.getLogger(__name__)

app = Flask(__name__)
CORS(app)  # Enable CORS for external frontends

scenario_config = ScenarioConfig()
plotter = InteractivePlots()
report_generator = ReportGenerator()


def _validation_message(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        location = ".".join(str(loc) for loc in err.get('loc', ()))
        parts.append(f"{location}: {err['msg']}" if location else err['msg'])
    return "; ".join(parts)


def _run(params: SimulationParameters) -> Tuple[list, Any]:
    records = simulate(params)
    return records, summarize(records, params)


@app.route('/', methods=['GET'])
def index():
    """Render the calculator page"""
    args = request.args
    error = None
    status = 200
    context: Dict[str, Any] = {}

    # Unchecked checkboxes are absent from the query string, so a submitted
    # form without cleaning_enabled means cleaning is off
    form = dict(args.items())
    if args.get('submitted') and 'cleaning_enabled' not in args:
        form['cleaning_enabled'] = 'off'

    try:
        params = parameters_from_form(form)
    except ValidationError as e:
        error = _validation_message(e)
        status = 400
        params = None
        logger.info(f"Rejected calculator input: {error}")

    if params is not None:
        records, summary = _run(params)
        charts = [
            ('Efficiency Over Time', plotter.plot_efficiency_over_time(records, title="")),
            ('Energy Production', plotter.plot_energy_production(records, title=""))
        ]
        if params.cleaning_enabled:
            charts.append(('Cumulative Cost', plotter.plot_cumulative_cost(records, title="")))

        context.update(
            cards=report_generator.summary_cards(summary, params),
            charts=[
                (title, plotter.to_html_fragment(fig, include_plotlyjs=(i == 0)))
                for i, (title, fig) in enumerate(charts)
            ]
        )

    shown = params or SimulationParameters()
    return render_template(
        'index.html',
        params=shown,
        form=form,
        error=error,
        variants=[variant.value for variant in PanelVariant],
        **context
    ), status


@app.route('/api/health', methods=['GET'])
def health_check():
    """Health check endpoint"""
    return jsonify({
        'status': 'healthy',
        'timestamp': datetime.now().isoformat(),
        'version': __version__
    })


@app.route('/api/templates', methods=['GET'])
def get_templates():
    """Get all scenario templates"""
    try:
        templates = []
        for name in scenario_config.list_templates():
            config = scenario_config.create_from_template(name)
            templates.append({
                'id': name,
                'name': config.scenario_name,
                'description': config.description,
                'summary': scenario_config.generate_config_summary(config)
            })

        return jsonify({
            'success': True,
            'templates': templates
        })

    except Exception as e:
        logger.exception("Failed to list templates")
        return jsonify({
            'success': False,
            'error': str(e)
        }), 500


@app.route('/api/templates/<template_name>', methods=['GET'])
def get_template_details(template_name: str):
    """Get the parameters of a specific template"""
    if template_name not in scenario_config.list_templates():
        return jsonify({
            'success': False,
            'error': f'Template not found: {template_name}'
        }), 404

    try:
        config = scenario_config.create_from_template(template_name)
        return jsonify({
            'success': True,
            'template': {
                'name': config.scenario_name,
                'description': config.description,
                'parameters': config.parameters.model_dump(mode="json"),
                'feasibility': scenario_config.validate_schedule_feasibility(config)
            }
        })

    except Exception as e:
        logger.exception(f"Failed to build template {template_name}")
        return jsonify({
            'success': False,
            'error': str(e)
        }), 500


def _parameters_from_request() -> SimulationParameters:
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        raise ValueError("Request body must be a JSON object")
    if 'template' in data:
        config = scenario_config.create_from_template(data['template'], parameters=data.get('parameters', {}))
        return config.parameters
    if 'parameters' in data:
        return SimulationParameters.model_validate(data['parameters'])
    # Bare parameter objects may carry request options alongside
    return SimulationParameters.model_validate({k: v for k, v in data.items() if k != 'format'})


@app.route('/api/simulate', methods=['POST'])
def run_simulation():
    """
    Run a simulation

    The body is either a parameters object, ``{"parameters": {...}}``, or
    ``{"template": name, "parameters": {overrides}}``.
    """
    try:
        params = _parameters_from_request()
    except ValidationError as e:
        return jsonify({
            'success': False,
            'error': _validation_message(e)
        }), 400
    except ValueError as e:
        return jsonify({
            'success': False,
            'error': str(e)
        }), 400

    try:
        records, summary = _run(params)
        return jsonify({
            'success': True,
            'simulation_id': str(uuid.uuid4()),
            'parameters': params.model_dump(mode="json"),
            'summary': summary.to_dict(),
            'records': [r.to_dict() for r in records]
        })

    except Exception as e:
        logger.exception("Simulation failed")
        return jsonify({
            'success': False,
            'error': str(e)
        }), 500


@app.route('/api/export/data', methods=['POST'])
def export_data():
    """Run a simulation and download its records"""
    data = request.get_json(silent=True) or {}
    export_format = data.get('format', 'csv') if isinstance(data, dict) else 'csv'
    if export_format not in ('csv', 'json', 'excel'):
        return jsonify({
            'success': False,
            'error': f'Unsupported export format: {export_format}'
        }), 400

    try:
        params = _parameters_from_request()
    except ValidationError as e:
        return jsonify({
            'success': False,
            'error': _validation_message(e)
        }), 400
    except ValueError as e:
        return jsonify({
            'success': False,
            'error': str(e)
        }), 400

    try:
        records, summary = _run(params)
        simulation_id = str(uuid.uuid4())

        # Files only live for the request; the response is served from memory
        with tempfile.TemporaryDirectory(prefix="solar_cleaning_") as export_dir:
            exporter = DataExporter(export_dir)

            if export_format == 'csv':
                file_path = exporter.export_csv(records, summary, simulation_id)
                extension = 'csv'
            elif export_format == 'json':
                file_path = exporter.export_json(records, summary, params, simulation_id)
                extension = 'json'
            else:
                file_path = exporter.export_excel(records, summary, params, simulation_id)
                extension = 'xlsx'

            payload = io.BytesIO(Path(file_path).read_bytes())

        return send_file(
            payload,
            as_attachment=True,
            download_name=f'simulation_results_{simulation_id[:8]}.{extension}'
        )

    except Exception as e:
        logger.exception("Export failed")
        return jsonify({
            'success': False,
            'error': str(e)
        }), 500


def create_app():
    """Create and configure Flask app"""
    return app


def run_server(host='127.0.0.1', port=5000, debug=False):
    """Run the calculator server"""
    logging.basicConfig(level=logging.INFO)
    app.run(host=host, port=port, debug=debug)


if __name__ == '__main__':
    run_server(debug=True)
