from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import error_response, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/events/<event_id>/timesheet", methods=["GET"], endpoint="event_timesheet")
    @login_required
    def event_timesheet(event_id: str):
        try:
            report = container.timesheet_service.build_event_timesheet(event_id)
        except Exception as e:
            return error_response(e)
        return jsonify({"workers": report.workers, "summary": report.summary}), 200

    @app.route("/api/events/<event_id>/monitor", methods=["GET"], endpoint="event_monitor")
    @login_required
    def event_monitor(event_id: str):
        try:
            rows = container.timesheet_service.build_live_monitor(event_id)
        except Exception as e:
            return error_response(e)
        return jsonify({"eventId": event_id, "workers": rows}), 200
