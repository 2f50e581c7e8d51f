from __future__ import annotations

from typing import List

from ..attendance.repository import AttendanceRepository
from ..core.enums import AttendanceStatus
from ..sessions.repository import SessionRepository
from .model import HistoryEntry


class HistoryAggregator:
    """Builds a student's present/absent report across completed sessions.

    Sessions still in progress are left out entirely, even when the student
    has already checked in to one.
    """

    def __init__(self, sessions: SessionRepository, attendance: AttendanceRepository):
        self._sessions = sessions
        self._attendance = attendance

    def get_history(self, student_id: int) -> List[HistoryEntry]:
        sessions = sorted(self._sessions.list_ended(), key=lambda s: s.start_time, reverse=True)
        by_code = {r.session_code: r for r in self._attendance.list_for_student(student_id)}

        history = []
        for s in sessions:
            record = by_code.get(s.code)
            history.append(
                HistoryEntry(
                    session_code=s.code,
                    subject=s.subject,
                    date=record.timestamp if record else s.start_time,
                    status=AttendanceStatus.PRESENT if record else AttendanceStatus.ABSENT,
                    location=s.location,
                )
            )
        return history
