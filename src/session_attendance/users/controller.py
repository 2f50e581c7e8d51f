from __future__ import annotations

from flask import Flask, g, jsonify

from ..common.guards import Guards
from ..common.http import json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    guards = Guards(container.auth_service)

    @app.route("/api/register", methods=["POST"], endpoint="register")
    def register_user():
        data = json_body()
        user, token = container.auth_service.register(
            email=data.get("email"),
            password=data.get("password"),
            role=data.get("role"),
            name=data.get("name"),
            roll_number=data.get("rollNumber"),
            college=data.get("college"),
            department=data.get("department"),
            class_name=data.get("class"),
            address=data.get("address"),
            profile_image=data.get("profileImage"),
        )
        return jsonify({"user": user.to_public_dict(), "token": token}), 201

    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        user, token = container.auth_service.login(data.get("email"), data.get("password"))
        return jsonify({"user": user.to_public_dict(), "token": token})

    @app.route("/api/me", methods=["GET"], endpoint="me")
    @guards.login_required
    def me():
        return jsonify(g.current_user.to_public_dict())
