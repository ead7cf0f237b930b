"""HTTP routes for the Flask API."""

from http import HTTPStatus
from typing import Any

from flask import Blueprint, current_app, jsonify, request
from loguru import logger
from pydantic import ValidationError
from werkzeug.exceptions import BadRequest

from backend import __version__
from backend.core.simulator import simulate
from backend.core.solver import derive_breakdown, solve
from backend.schemas.calculator import (
    DEFAULT_REQUEST,
    CalculationResponse,
    CalculatorRequest,
    WealthChartRequest,
    WealthChartResponse,
    WealthPoint,
)
from backend.schemas.health import HealthResponse

api_bp = Blueprint("api", __name__)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    logger.warning(f"Rejected {request.path} payload: {exc.error_count()} validation error(s)")
    return (
        jsonify({"detail": exc.errors(include_url=False, include_context=False)}),
        HTTPStatus.UNPROCESSABLE_ENTITY,
    )


@api_bp.errorhandler(BadRequest)
def _handle_bad_request(exc: BadRequest):
    logger.warning(f"Malformed request body on {request.path}: {exc.description}")
    return jsonify({"detail": exc.description}), HTTPStatus.BAD_REQUEST


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    settings = current_app.config["SETTINGS"]
    response = HealthResponse(status="ok", service=settings.service_name, version=__version__)
    return jsonify(response.model_dump())


@api_bp.get("/calc/defaults")
def defaults() -> Any:
    """Example form values for a first visit."""
    return jsonify(DEFAULT_REQUEST.model_dump())


@api_bp.post("/calc/die-with-zero")
def die_with_zero() -> Any:
    """Earnings needed before retirement to end life with zero savings, plus the chart."""
    raw_payload = request.get_json(force=True, silent=False)
    payload = CalculatorRequest.model_validate(raw_payload)
    inputs = payload.to_inputs()

    results = solve(inputs)
    response = CalculationResponse.from_results(results, derive_breakdown(inputs))
    logger.info(
        f"Solved plan: age {inputs.exact_current_age:.2f} -> {inputs.retirementAge} -> "
        f"{inputs.lifeExpectancy}, achievable={results.isAchievable}"
    )
    return jsonify(response.model_dump())


@api_bp.post("/calc/wealth-chart")
def wealth_chart() -> Any:
    """Wealth chart for a savings rate picked by the caller instead of the solved one."""
    raw_payload = request.get_json(force=True, silent=False)
    payload = WealthChartRequest.model_validate(raw_payload)
    inputs = payload.inputs.to_inputs()

    chart = simulate(inputs, payload.monthlySavings, inputs.exact_current_age)
    response = WealthChartResponse(wealthChart=[WealthPoint.from_yearly(point) for point in chart])
    logger.info(f"Charted {len(chart)} years at {payload.monthlySavings:.2f} saved per month")
    return jsonify(response.model_dump())
