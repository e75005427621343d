"""HTTP routes for the Flask API."""

import logging
from http import HTTPStatus
from typing import Any, Dict, List

from flask import Blueprint, Response, current_app, jsonify, request
from pydantic import ValidationError

from growth_sim.core.calculator import calculate
from growth_sim.core.export import (
    CSV_BOM,
    CSV_MIMETYPE,
    build_comparison_rows,
    comparison_to_csv,
    simulation_to_csv,
)
from growth_sim.core.formatting import (
    format_currency,
    format_percentage,
    format_period_label,
)
from growth_sim.core.health import get_ping_response
from growth_sim.domain import simulations as store
from growth_sim.domain.simulations import SimulationNotFoundError
from growth_sim.schemas.calculation import CalculationRequest, CalculationResult
from growth_sim.schemas.simulation import (
    AppSettings,
    DisplayResult,
    DisplayRow,
    Simulation,
    SimulationCreate,
    SimulationUpdate,
)

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


def _db_path() -> str:
    return current_app.config["DATABASE_PATH"]


def _default_settings() -> AppSettings:
    return AppSettings(
        locale=current_app.config["DEFAULT_LOCALE"],
        currency=current_app.config["DEFAULT_CURRENCY"],
    )


def _json_body() -> Any:
    return request.get_json(force=True, silent=False)


def _csv_response(body: str, filename: str) -> Response:
    response = current_app.response_class(CSV_BOM + body, mimetype=CSV_MIMETYPE)
    response.headers["Content-Disposition"] = f'attachment; filename="{filename}"'
    return response


def _requested_ids() -> List[str]:
    ids: List[str] = []
    for raw in request.args.getlist("ids"):
        ids.extend(part.strip() for part in raw.split(",") if part.strip())
    return ids


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    logger.info("rejected payload with %d error(s)", exc.error_count())
    detail = exc.errors(include_url=False, include_context=False)
    return jsonify({"detail": detail}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(SimulationNotFoundError)
def _handle_not_found(exc: SimulationNotFoundError):
    return jsonify({"detail": str(exc)}), HTTPStatus.NOT_FOUND


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    return jsonify(get_ping_response().model_dump())


@api_bp.post("/calculate")
def calculation() -> Any:
    """Run a projection and remember it as the last calculation."""
    params = CalculationRequest.model_validate(_json_body())
    result = calculate(params)
    store.record_last_calculation(_db_path(), params, result)
    return jsonify(result.model_dump())


@api_bp.get("/calculate/latest")
def latest_calculation() -> Any:
    last = store.fetch_last_calculation(_db_path())
    if last is None:
        return jsonify({"params": None, "result": None, "savedAt": None})
    return jsonify(last.model_dump(mode="json"))


def _display(result: CalculationResult, settings: AppSettings) -> DisplayResult:
    def money(value: float) -> str:
        return format_currency(value, settings.locale, settings.currency)

    return DisplayResult(
        finalAmount=money(result.finalAmount),
        totalPrincipal=money(result.totalPrincipal),
        totalProfit=money(result.totalProfit),
        profitRate=format_percentage(result.profitRate),
        rows=[
            DisplayRow(
                label=format_period_label(entry.year),
                principal=money(entry.principal),
                profit=money(entry.profit),
                total=money(entry.total),
            )
            for entry in result.yearlyBreakdown
        ],
    )


@api_bp.post("/calculate/display")
def calculation_display() -> Any:
    """Projection rendered with the stored locale and currency."""
    params = CalculationRequest.model_validate(_json_body())
    settings = store.fetch_settings(_db_path(), _default_settings())
    return jsonify(_display(calculate(params), settings).model_dump())


@api_bp.post("/export/csv")
def export_calculation() -> Any:
    """CSV for a result that has not been saved as a simulation."""
    params = CalculationRequest.model_validate(_json_body())
    simulation = Simulation(
        id="temp",
        name="Calculation result",
        createdAt=store.current_time(),
        updatedAt=store.current_time(),
        parameters=params,
        results=calculate(params),
    )
    return _csv_response(simulation_to_csv(simulation), "investment_simulation_temp.csv")


@api_bp.get("/form-data")
def get_form_data() -> Any:
    return jsonify({"formData": store.fetch_form_data(_db_path())})


@api_bp.put("/form-data")
def put_form_data() -> Any:
    payload = _json_body()
    if not isinstance(payload, dict):
        return jsonify({"detail": "form data must be a JSON object"}), HTTPStatus.UNPROCESSABLE_ENTITY
    store.save_form_data(_db_path(), payload)
    return jsonify({"formData": payload})


@api_bp.get("/settings")
def get_settings() -> Any:
    return jsonify(store.fetch_settings(_db_path(), _default_settings()).model_dump())


@api_bp.put("/settings")
def put_settings() -> Any:
    settings = AppSettings.model_validate(_json_body())
    return jsonify(store.save_settings(_db_path(), settings).model_dump())


@api_bp.get("/simulations")
def list_simulations() -> Any:
    return jsonify([sim.model_dump(mode="json") for sim in store.list_simulations(_db_path())])


@api_bp.post("/simulations")
def create_simulation() -> Any:
    payload = SimulationCreate.model_validate(_json_body())
    simulation = store.save_simulation(_db_path(), payload.parameters, name=payload.name)
    return jsonify(simulation.model_dump(mode="json")), HTTPStatus.CREATED


@api_bp.get("/simulations/compare")
def compare_simulations() -> Any:
    ids = _requested_ids()
    if not ids:
        return jsonify({"detail": "at least one id is required"}), HTTPStatus.BAD_REQUEST
    simulations = store.compare_simulations(_db_path(), ids)
    rows = build_comparison_rows(simulations)
    body: Dict[str, Any] = {
        "simulations": [{"id": sim.id, "name": sim.name} for sim in simulations],
        "rows": [row.model_dump() for row in rows],
    }
    return jsonify(body)


@api_bp.get("/simulations/compare/export")
def export_comparison() -> Any:
    ids = _requested_ids()
    if not ids:
        return jsonify({"detail": "at least one id is required"}), HTTPStatus.BAD_REQUEST
    simulations = store.compare_simulations(_db_path(), ids)
    filename = f"investment_comparison_{store.current_time():%Y%m%d%H%M%S}.csv"
    return _csv_response(comparison_to_csv(simulations), filename)


@api_bp.get("/simulations/<simulation_id>")
def get_simulation(simulation_id: str) -> Any:
    return jsonify(store.get_simulation(_db_path(), simulation_id).model_dump(mode="json"))


@api_bp.patch("/simulations/<simulation_id>")
def update_simulation(simulation_id: str) -> Any:
    payload = SimulationUpdate.model_validate(_json_body())
    simulation = store.update_simulation(
        _db_path(), simulation_id, name=payload.name, parameters=payload.parameters
    )
    return jsonify(simulation.model_dump(mode="json"))


@api_bp.delete("/simulations/<simulation_id>")
def delete_simulation(simulation_id: str) -> Any:
    store.delete_simulation(_db_path(), simulation_id)
    return "", HTTPStatus.NO_CONTENT


@api_bp.get("/simulations/<simulation_id>/export")
def export_simulation(simulation_id: str) -> Any:
    simulation = store.get_simulation(_db_path(), simulation_id)
    return _csv_response(simulation_to_csv(simulation), f"investment_simulation_{simulation.id}.csv")


@api_bp.get("/storage")
def export_storage() -> Any:
    return jsonify(store.export_storage(_db_path()).model_dump(mode="json"))


@api_bp.delete("/storage")
def clear_storage() -> Any:
    store.clear_offline_data(_db_path())
    return "", HTTPStatus.NO_CONTENT
