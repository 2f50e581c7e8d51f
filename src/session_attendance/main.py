from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .attendance.controller import register as register_attendance
from .common.errors import register_error_handlers
from .common.log import configure_logging
from .config import get_settings_module
from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .history.controller import register as register_history
from .notes.controller import register as register_notes
from .realtime.controller import register as register_realtime
from .sessions.controller import register as register_sessions
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None, *, settings_module: Optional[str] = None) -> Flask:
    """Build the Flask app.

    When ``container`` is given (tests, scripts) no database is touched here.
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["SSE_KEEPALIVE_SECONDS"] = float(getattr(settings, "SSE_KEEPALIVE_SECONDS", 15))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

        container = build_container(
            db_config=db_config,
            secret_key=app.secret_key,
            token_max_age_seconds=int(getattr(settings, "TOKEN_MAX_AGE_SECONDS")),
            subscriber_queue_size=int(getattr(settings, "SUBSCRIBER_QUEUE_SIZE")),
        )

    app.extensions["session_attendance"] = container
    register_error_handlers(app)

    @app.route("/", methods=["GET"], endpoint="index")
    def index():
        return "Attendance API Running"

    register_users(app, container)
    register_notes(app, container)
    register_sessions(app, container)
    register_attendance(app, container)
    register_history(app, container)
    register_realtime(app, container)

    return app
