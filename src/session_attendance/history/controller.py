from __future__ import annotations

from flask import Flask, g, jsonify

from ..common.guards import Guards
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    guards = Guards(container.auth_service)

    @app.route("/api/student/attendance-history", methods=["GET"], endpoint="attendance_history")
    @guards.role_required(Role.STUDENT)
    def attendance_history():
        history = container.history_aggregator.get_history(g.current_user.user_id)
        return jsonify([h.to_dict() for h in history])
