from __future__ import annotations

from flask import Flask, g, jsonify

from ..common.guards import Guards
from ..common.http import json_body
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    guards = Guards(container.auth_service)
    teacher_required = guards.role_required(Role.TEACHER)

    @app.route("/api/teacher/start-session", methods=["POST"], endpoint="start_session")
    @teacher_required
    def start_session():
        data = json_body()
        session = container.session_registry.start_session(
            teacher_id=g.current_user.user_id,
            subject=data.get("subject"),
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
        )
        return jsonify(session.to_dict()), 201

    @app.route("/api/teacher/end-session", methods=["POST"], endpoint="end_session")
    @teacher_required
    def end_session():
        session = container.session_registry.end_session(
            teacher_id=g.current_user.user_id,
            code=json_body().get("sessionId"),
        )
        return jsonify(session.to_dict())
