from __future__ import annotations

import logging
from datetime import datetime
from typing import Protocol, Sequence

from ..common.datetime_utils import now_utc
from ..common.geo import GeoPoint
from ..common.validators import require_latitude, require_longitude
from ..core.exceptions import AlreadyMarkedError, NotFoundError, SessionNotActiveError
from ..sessions.codes import normalize_session_code
from ..sessions.service import SessionRegistry
from ..users.model import User
from .model import AttendanceRecord, MarkAttendanceResult
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

ATTENDANCE_MARKED_EVENT = "attendance_marked"


class EventPublisher(Protocol):
    def publish(self, session_code: str, event: str, payload: dict) -> int:
        raise NotImplementedError


class AttendanceLedger:
    """Use cases: check a student in (once per session) and list check-ins."""

    def __init__(self, attendance: AttendanceRepository, registry: SessionRegistry, publisher: EventPublisher):
        self._attendance = attendance
        self._registry = registry
        self._publisher = publisher

    def mark_attendance(self, *, session_code, student: User, latitude, longitude, now: datetime | None = None) -> MarkAttendanceResult:
        code = normalize_session_code(session_code)

        try:
            session = self._registry.get_active_session(code)
        except NotFoundError:
            raise SessionNotActiveError("Session not active")

        location = GeoPoint(latitude=require_latitude(latitude), longitude=require_longitude(longitude))

        if self._attendance.get_for_session_and_student(session.code, student.user_id):
            logger.info("duplicate check-in rejected for %s student_id=%s", session.code, student.user_id)
            raise AlreadyMarkedError("Already marked")

        record = AttendanceRecord(
            session_code=session.code,
            student_id=student.user_id,
            student_name=student.name,
            roll_number=student.roll_number,
            profile_image=student.profile_image,
            location=location,
            timestamp=now or now_utc(),
        )
        if not self._attendance.create(record):
            # A concurrent request for the same pair won the insert.
            logger.info("duplicate check-in rejected for %s student_id=%s", session.code, student.user_id)
            raise AlreadyMarkedError("Already marked")

        logger.info("attendance marked for %s student_id=%s", session.code, student.user_id)
        self._notify(record)
        return MarkAttendanceResult(record=record, subject=session.subject)

    def _notify(self, record: AttendanceRecord) -> None:
        # Fire-and-forget: a failed broadcast never undoes the stored record.
        try:
            self._publisher.publish(record.session_code, ATTENDANCE_MARKED_EVENT, record.to_dict())
        except Exception:
            logger.exception("failed to publish %s for %s", ATTENDANCE_MARKED_EVENT, record.session_code)

    def list_for_session(self, *, code, teacher_id: int) -> Sequence[AttendanceRecord]:
        session = self._registry.get_owned_session(code=code, teacher_id=teacher_id)
        return self._attendance.list_for_session(session.code)
