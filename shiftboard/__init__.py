"""Flask application factory."""

from __future__ import annotations

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from shiftboard.blueprints.api import bp as api_bp
from shiftboard.blueprints.main import bp as main_bp
from shiftboard.blueprints.ui import bp as ui_bp
from shiftboard.client.state import format_datetime, status_badge
from shiftboard.config import Config
from shiftboard.extensions import csrf, db


def create_app(config_object: type[Config] = Config) -> Flask:
    app = Flask(__name__, instance_relative_config=False)
    app.config.from_object(config_object)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    db.init_app(app)
    csrf.init_app(app)

    # Ensure model metadata is loaded for migrations and tests.
    from shiftboard import models as _models  # noqa: F401

    app.register_blueprint(main_bp)
    app.register_blueprint(api_bp)
    app.register_blueprint(ui_bp)
    csrf.exempt(api_bp)

    app.add_template_filter(status_badge, "status_badge")
    app.add_template_filter(format_datetime, "format_datetime")

    @app.errorhandler(HTTPException)
    def render_api_routing_error(exc: HTTPException):
        # Routing failures never reach blueprint handlers.
        if request.path.startswith("/api/") and exc.code is not None and exc.code >= 400:
            return jsonify(error=exc.description or exc.name), exc.code
        return exc

    return app
