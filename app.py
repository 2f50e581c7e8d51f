"""WSGI entry point: ``flask --app app run`` or ``gunicorn app:app``."""

import os

from session_attendance.main import create_app

app = create_app()


if __name__ == "__main__":
    # threaded: each realtime stream holds a worker for its lifetime
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), threaded=True)
