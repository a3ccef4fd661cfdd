# SPDX-License-Identifier: Apache-2.0
# This file was created or modified with the assistance of an AI (Large Language Model).
"""Flask WebUI and JSON API over the rackview layout engine."""

from __future__ import annotations

import logging
import os
import threading
from typing import Any

from flask import (
    Flask,
    Response,
    flash,
    jsonify,
    redirect,
    render_template,
    request,
    session,
    url_for,
)
from pydantic import ValidationError
from yaml import YAMLError

from models import Device, Rack, RackFile
from services.errors import RackLayoutError
from services.export import layout_dict, occupancy_csv
from services.importer import load_rack_file
from services.occupancy import rack_fingerprint
from services.placement import can_place
from services.render_svg import render_rack_svg, render_utilization_svg
from services.utilization import utilization

logger = logging.getLogger(__name__)

LAYOUT_CACHE_SIZE = 128
NOT_AN_OBJECT = {"error": "validation_error", "message": "request body must be a JSON object"}


def _error_payload(exc: Exception) -> dict[str, Any]:
    if isinstance(exc, ValidationError):
        return {
            "error": "validation_error",
            "message": f"{exc.error_count()} error(s): {exc.errors()[0]['msg']}",
        }
    return {"error": type(exc).__name__, "message": str(exc)}


def create_app() -> Flask:
    app = Flask(__name__)
    app.secret_key = os.environ.get("SECRET_KEY", "dev-secret")
    app.config["MAX_CONTENT_LENGTH"] = 1024 * 1024
    logging.basicConfig(level=os.environ.get("RACKVIEW_LOG_LEVEL", "INFO").upper())

    layout_cache: dict[tuple[str, str, str], dict[str, Any]] = {}
    layout_lock = threading.Lock()

    def cached_layout(rack: Rack) -> dict[str, Any]:
        # layout_dict embeds the rack id and name
        key = (rack.id, rack.name, rack_fingerprint(rack))
        with layout_lock:
            if key not in layout_cache:
                if len(layout_cache) >= LAYOUT_CACHE_SIZE:
                    layout_cache.pop(next(iter(layout_cache)))
                layout_cache[key] = layout_dict(rack)
            return layout_cache[key]

    def json_object() -> dict[str, Any] | None:
        payload = request.get_json(silent=True)
        if payload is None:
            return {}
        return payload if isinstance(payload, dict) else None

    def current_rack_file() -> RackFile | None:
        raw = session.get("rack_yaml")
        if not raw:
            return None
        return load_rack_file(raw)

    @app.get("/")
    def index() -> Response:
        return redirect(url_for("upload"))

    @app.route("/upload", methods=["GET", "POST"])
    def upload() -> str | Response:
        if request.method == "POST":
            file = request.files.get("rack_yaml")
            if not file or not file.filename:
                flash("Please select a rack file")
                return redirect(url_for("upload"))
            raw = file.read().decode("utf-8")
            try:
                rack_file = load_rack_file(raw)
            except YAMLError as exc:
                flash(f"YAML parse error: {exc}")
                return redirect(url_for("upload"))
            except ValidationError as exc:
                flash(f"Validation error: {exc.error_count()} error(s): {exc.errors()[0]['msg']}")
                return redirect(url_for("upload"))
            except RackLayoutError as exc:
                flash(f"Placement error: {exc}")
                return redirect(url_for("upload"))
            logger.info("Loaded rack file with %d rack(s)", len(rack_file.racks))
            session["rack_yaml"] = raw
            return redirect(url_for("racks"))
        return render_template("upload.html")

    @app.get("/racks")
    def racks() -> str | Response:
        rack_file = current_rack_file()
        if rack_file is None:
            flash("No rack file loaded")
            return redirect(url_for("upload"))
        settings = rack_file.settings
        views = [
            {
                "rack": rack,
                "svg": render_rack_svg(rack, settings.render),
                "utilization_svg": render_utilization_svg(
                    utilization(rack, settings.thresholds)
                ),
                "layout": cached_layout(rack),
            }
            for rack in rack_file.racks
        ]
        return render_template("racks.html", views=views)

    @app.get("/racks/<rack_id>/elevation.svg")
    def rack_svg(rack_id: str) -> Response:
        rack_file = current_rack_file()
        rack = rack_file.get_rack(rack_id) if rack_file else None
        if rack is None:
            return Response("not found", status=404)
        return Response(
            render_rack_svg(rack, rack_file.settings.render),  # type: ignore[union-attr]
            mimetype="image/svg+xml",
        )

    @app.get("/racks/<rack_id>/occupancy.csv")
    def export_occupancy(rack_id: str) -> Response:
        rack_file = current_rack_file()
        rack = rack_file.get_rack(rack_id) if rack_file else None
        if rack is None:
            return Response("not found", status=404)
        return Response(
            occupancy_csv(rack),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={rack_id}_occupancy.csv"},
        )

    @app.post("/api/layout")
    def api_layout() -> tuple[Response, int] | Response:
        payload = json_object()
        if payload is None:
            return jsonify(NOT_AN_OBJECT), 400
        try:
            rack = Rack.model_validate(payload.get("rack"))
        except ValidationError as exc:
            return jsonify(_error_payload(exc)), 400
        return jsonify(cached_layout(rack))

    @app.post("/api/can-place")
    def api_can_place() -> tuple[Response, int] | Response:
        payload = json_object()
        if payload is None:
            return jsonify(NOT_AN_OBJECT), 400
        try:
            rack = Rack.model_validate(payload.get("rack"))
            candidate = Device.model_validate(payload.get("candidate"))
        except ValidationError as exc:
            return jsonify(_error_payload(exc)), 400
        result = can_place(rack, candidate, payload.get("excluding_device_id"))
        return jsonify(
            {
                "ok": result.ok,
                "conflicts": result.conflicts,
                "conflicting_devices": [d.name for d in result.conflicting_devices],
                "out_of_bounds": result.out_of_bounds,
                "warnings": result.warnings,
                "error": _error_payload(result.error) if result.error else None,
            }
        )

    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5000, debug=True)
