from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import error_response, json_body, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/check-in/sync", methods=["POST"], endpoint="checkin_sync")
    @login_required
    def checkin_sync():
        try:
            actions = json_body().get("actions")
            if actions is not None and not isinstance(actions, list):
                return jsonify({"error": "actions must be a list"}), 400
            report = container.sync_service.sync(actions or [])
        except Exception as e:
            return error_response(e)
        return jsonify(report.to_dict()), 200
