from __future__ import annotations

from flask import Flask, g, jsonify

from ..common.guards import Guards
from ..common.http import json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    guards = Guards(container.auth_service)

    @app.route("/api/notes", methods=["POST"], endpoint="create_note")
    @guards.login_required
    def create_note():
        note = container.note_service.create(user_id=g.current_user.user_id, content=json_body().get("content"))
        return jsonify(note.to_dict()), 201

    @app.route("/api/notes", methods=["GET"], endpoint="list_notes")
    @guards.login_required
    def list_notes():
        notes = container.note_service.list_for_user(g.current_user.user_id)
        return jsonify([n.to_dict() for n in notes])
