from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import error_response, json_body, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/check-in/validate", methods=["POST"], endpoint="checkin_validate")
    @login_required
    def checkin_validate():
        try:
            body = json_body()
            result = container.kiosk_service.validate_code(body.get("code"))
        except Exception as e:
            return error_response(e)
        return jsonify(result.to_dict()), 200

    @app.route("/api/check-in/action", methods=["POST"], endpoint="checkin_action")
    @login_required
    def checkin_action():
        try:
            body = json_body()
            result = container.kiosk_service.perform_action(
                body.get("code"),
                body.get("action"),
                timestamp=body.get("timestamp"),
                signature=body.get("signature"),
                event_id=body.get("eventId"),
            )
        except Exception as e:
            return error_response(e)
        return jsonify(result.to_dict()), 201

    @app.route("/api/check-in/shift-summary", methods=["GET"], endpoint="checkin_shift_summary")
    @login_required
    def checkin_shift_summary():
        try:
            summary = container.kiosk_service.shift_summary(request.args.get("workerId", ""))
        except Exception as e:
            return error_response(e)
        return jsonify(summary.to_dict()), 200
