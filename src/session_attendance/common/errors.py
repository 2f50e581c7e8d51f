from __future__ import annotations

import logging

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from ..core.exceptions import DomainError, StorageError

logger = logging.getLogger(__name__)


def register_error_handlers(app: Flask) -> None:
    """Translate exceptions into ``{"error": ...}`` bodies at the request boundary."""

    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        if isinstance(e, StorageError):
            logger.error("storage failure: %s", e, exc_info=e.__cause__ or e)
            return jsonify({"error": "Internal server error"}), 500
        return jsonify({"error": str(e)}), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return jsonify({"error": e.description or e.name}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("unhandled error")
        return jsonify({"error": "Internal server error"}), 500
