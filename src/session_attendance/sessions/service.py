from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from ..common.datetime_utils import now_utc
from ..common.geo import GeoPoint
from ..common.validators import require_latitude, require_longitude, require_non_empty
from ..core.constants import MAX_CODE_ATTEMPTS
from ..core.exceptions import NotFoundError, StorageError, ValidationError
from .codes import generate_session_code, normalize_session_code
from .model import Session
from .repository import SessionRepository

logger = logging.getLogger(__name__)


class SessionRegistry:
    """Use cases: open and close attendance-taking sessions."""

    def __init__(
        self,
        sessions: SessionRepository,
        *,
        code_factory: Callable[[], str] = generate_session_code,
        max_code_attempts: int = MAX_CODE_ATTEMPTS,
    ):
        self._sessions = sessions
        self._code_factory = code_factory
        self._max_code_attempts = int(max_code_attempts)

    def start_session(self, *, teacher_id: int, subject, latitude, longitude, now: datetime | None = None) -> Session:
        subject = require_non_empty(subject, "Subject")
        location = GeoPoint(latitude=require_latitude(latitude), longitude=require_longitude(longitude))
        start_time = now or now_utc()

        for attempt in range(1, self._max_code_attempts + 1):
            session = Session(
                code=self._code_factory(),
                teacher_id=int(teacher_id),
                subject=subject,
                location=location,
                start_time=start_time,
            )
            if self._sessions.create(session):
                logger.info("session %s started by teacher_id=%s (%s)", session.code, teacher_id, subject)
                return session
            logger.warning("session code %s already taken (attempt %d)", session.code, attempt)

        raise StorageError("Could not allocate a session code")

    def end_session(self, *, teacher_id: int, code, now: datetime | None = None) -> Session:
        code = normalize_session_code(code)
        if not code:
            raise ValidationError("Session code is required")

        # Wrong owner and already-ended both collapse to NotFound.
        session = self._sessions.end(code=code, teacher_id=int(teacher_id), end_time=now or now_utc())
        if not session:
            raise NotFoundError("Session not found")

        logger.info("session %s ended by teacher_id=%s", code, teacher_id)
        return session

    def get_active_session(self, code) -> Session:
        code = normalize_session_code(code)
        session = self._sessions.get_active(code) if code else None
        if not session:
            raise NotFoundError("Session not found")
        return session

    def get_owned_session(self, *, code, teacher_id: int) -> Session:
        code = normalize_session_code(code)
        session = self._sessions.get_by_code(code) if code else None
        if not session or session.teacher_id != int(teacher_id):
            raise NotFoundError("Session not found")
        return session
