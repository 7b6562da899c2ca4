from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.datetime_utils import to_iso
from ..common.http import current_role, error_response, json_body, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/events/<event_id>/timesheet", methods=["PATCH"], endpoint="edit_event_timesheet")
    @login_required
    def edit_event_timesheet(event_id: str):
        try:
            body = json_body()
            spans = body.get("spans") or {}
            if not isinstance(spans, dict):
                return jsonify({"error": "spans must be an object"}), 400
            result = container.shift_edit_service.edit_shift(
                current_role=current_role(),
                actor_id=str(session["user_id"]),
                event_id=event_id,
                worker_id=str(body.get("workerId") or ""),
                spans=spans,
            )
        except Exception as e:
            return error_response(e)

        return jsonify({
            "success": True,
            "workerId": result.worker_id,
            "deleted": result.deleted,
            "inserted": result.inserted,
            "timezone": result.offset_abbreviation,
            "checkpoints": [
                {"field": cp.field.name, "action": cp.field.action.value, "timestamp": to_iso(cp.instant)}
                for cp in result.checkpoints
            ],
        }), 200
