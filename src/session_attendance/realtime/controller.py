from __future__ import annotations

from flask import Flask, Response

from ..container import Container
from ..sessions.codes import normalize_session_code


def register(app: Flask, container: Container) -> None:
    notifier = container.notifier

    @app.route("/api/realtime/sessions/<code>", methods=["GET"], endpoint="realtime_session_stream")
    def realtime_session_stream(code: str):
        """Server-Sent Events stream of ``attendance_marked`` events for one session.

        Any client may watch any code.
        """
        sub = notifier.subscribe(normalize_session_code(code))
        keepalive = float(app.config.get("SSE_KEEPALIVE_SECONDS", 15))

        def stream():
            yield "retry: 3000\n\n"
            while True:
                event = sub.next_event(timeout=keepalive)
                yield event.to_sse() if event else ": keepalive\n\n"

        response = Response(stream(), mimetype="text/event-stream")
        response.headers["Cache-Control"] = "no-cache"
        response.headers["X-Accel-Buffering"] = "no"
        # Tied to the connection: runs when the client goes away.
        response.call_on_close(lambda: notifier.unsubscribe(sub))
        return response
