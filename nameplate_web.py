"""HTTP surface for nameplate order exports."""

from __future__ import annotations

import logging
import os
from typing import Callable

from dotenv import load_dotenv
from flask import Flask, jsonify, request
from werkzeug.wrappers import Response

from nameplate_config import load_settings
from nameplate_errors import ConfigurationError, UploadError, ValidationError
from nameplate_export.preview import build_preview
from nameplate_service import ExportContext, build_context, process_order
from order_data import parse_order

logger = logging.getLogger(__name__)

__all__ = ["create_app", "create_app_from_env", "run_web_app"]

ContextLoader = Callable[[], ExportContext]


def create_app(context_loader: ContextLoader) -> Flask:
    """Create the Flask app.

    ``context_loader`` is called per export request so that missing
    configuration is reported as a server error instead of crashing startup.
    """

    app = Flask(__name__)
    app.config["SECRET_KEY"] = os.getenv(
        "FLASK_SECRET_KEY", "nameplate-labels")

    def _error(message: str, status: int) -> tuple[Response, int]:
        return jsonify({"error": message}), status

    @app.route("/healthz", methods=["GET"])
    def healthz() -> Response:  # pyright: ignore[reportUnusedFunction]
        return jsonify({"status": "ok"})

    @app.route("/api/nameplates/export", methods=["POST"])
    # pyright: ignore[reportUnusedFunction]
    def export_order() -> tuple[Response, int]:
        payload = request.get_json(silent=True)
        secondary_format = request.args.get("format") or None

        try:
            context = context_loader()
        except ConfigurationError as exc:
            logger.error(f"[Web] Configuration error: {exc}")
            return _error(str(exc), 500)

        try:
            result = process_order(payload, context, secondary_format)
        except ValidationError as exc:
            return _error(str(exc), 400)
        except UploadError as exc:
            return _error(f"Failed to store generated files: {exc}", 500)

        return jsonify(result.to_dict()), 200

    @app.route("/api/nameplates/preview", methods=["POST"])
    # pyright: ignore[reportUnusedFunction]
    def preview_order() -> Response | tuple[Response, int]:
        try:
            order = parse_order(request.get_json(silent=True))
        except ValidationError as exc:
            return _error(str(exc), 400)
        return Response(build_preview(order), mimetype="text/html")

    return app


def create_app_from_env() -> Flask:
    """Create the app using settings from the environment (and ``.env``)."""

    load_dotenv()
    return create_app(lambda: build_context(load_settings()))


def run_web_app(host: str = "127.0.0.1", port: int = 5000, debug: bool = False) -> None:
    app = create_app_from_env()
    app.run(host=host, port=port, debug=debug)
