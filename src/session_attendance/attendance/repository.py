from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_session_and_student(self, session_code: str, student_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create(self, record: AttendanceRecord) -> bool:
        """Atomic conditional insert.

        Returns False (and writes nothing) when a record for the same
        (session_code, student_id) pair already exists.
        """
        raise NotImplementedError

    def list_for_session(self, session_code: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_student(self, student_id: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
