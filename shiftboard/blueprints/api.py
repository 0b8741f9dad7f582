"""JSON REST API for shifts."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, current_app, jsonify, request, url_for
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from shiftboard.errors import NotFound, ValidationFailed
from shiftboard.store import ShiftStore, shift_to_dict


bp = Blueprint("api", __name__, url_prefix="/api")


def _shift_params() -> dict[str, Any] | None:
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        return None
    shift_params = body.get("shift")
    if not isinstance(shift_params, dict):
        return None
    return shift_params


def _missing_params_response():
    return jsonify(error="param is missing or the value is empty: shift"), 400


@bp.after_request
def add_cors_headers(response):
    response.headers["Access-Control-Allow-Origin"] = current_app.config.get("CORS_ORIGINS", "*")
    response.headers["Access-Control-Allow-Methods"] = "GET, POST, PUT, PATCH, DELETE, OPTIONS"
    response.headers["Access-Control-Allow-Headers"] = "Content-Type"
    return response


@bp.errorhandler(NotFound)
def handle_not_found(exc: NotFound):
    return jsonify(error="Shift not found"), 404


@bp.errorhandler(ValidationFailed)
def handle_validation_failed(exc: ValidationFailed):
    return jsonify(errors=exc.errors), 422


@bp.errorhandler(SQLAlchemyError)
def handle_database_error(exc: SQLAlchemyError):
    current_app.logger.warning("Shift API database operation failed.", exc_info=True)
    return jsonify(error="Database error"), 500


@bp.errorhandler(HTTPException)
def handle_http_error(exc: HTTPException):
    return jsonify(error=exc.description or exc.name), exc.code


@bp.get("/shifts")
def shifts_index():
    return jsonify([shift_to_dict(shift) for shift in ShiftStore().list()])


@bp.get("/shifts/<int:shift_id>")
def shifts_show(shift_id: int):
    return jsonify(shift_to_dict(ShiftStore().get(shift_id)))


@bp.post("/shifts")
def shifts_create():
    shift_params = _shift_params()
    if shift_params is None:
        return _missing_params_response()

    shift = ShiftStore().create(shift_params)
    response = jsonify(shift_to_dict(shift))
    response.status_code = 201
    response.headers["Location"] = url_for("api.shifts_show", shift_id=shift.id)
    return response


@bp.route("/shifts/<int:shift_id>", methods=["PUT", "PATCH"])
def shifts_update(shift_id: int):
    store = ShiftStore()
    # Unknown ids answer 404 before the body is inspected.
    store.get(shift_id)
    shift_params = _shift_params()
    if shift_params is None:
        return _missing_params_response()

    shift = store.update(shift_id, shift_params)
    return jsonify(shift_to_dict(shift))


@bp.delete("/shifts/<int:shift_id>")
def shifts_destroy(shift_id: int):
    ShiftStore().delete(shift_id)
    return "", 204
