from __future__ import annotations

from flask import Flask, g, jsonify

from ..common.guards import Guards
from ..common.http import json_body
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    guards = Guards(container.auth_service)

    @app.route("/api/student/mark-attendance", methods=["POST"], endpoint="mark_attendance")
    @guards.role_required(Role.STUDENT)
    def mark_attendance():
        data = json_body()
        result = container.attendance_ledger.mark_attendance(
            session_code=data.get("sessionId"),
            student=g.current_user,
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
        )
        return jsonify(result.to_dict()), 201

    @app.route("/api/teacher/session-attendance/<code>", methods=["GET"], endpoint="session_attendance")
    @guards.role_required(Role.TEACHER)
    def session_attendance(code: str):
        records = container.attendance_ledger.list_for_session(code=code, teacher_id=g.current_user.user_id)
        return jsonify([r.to_dict() for r in records])
