from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import to_iso
from ..common.geo import GeoPoint


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: proof that a student checked in to a session.

    Name, roll number and profile image are snapshots taken at check-in and
    are never refreshed from later profile edits.
    """

    session_code: str
    student_id: int
    student_name: str
    roll_number: Optional[str]
    profile_image: Optional[str]
    location: GeoPoint
    timestamp: datetime

    def to_dict(self) -> dict:
        return {
            "sessionId": self.session_code,
            "studentId": self.student_id,
            "studentName": self.student_name,
            "rollNumber": self.roll_number,
            "location": self.location.to_dict(),
            "timestamp": to_iso(self.timestamp),
            "profileImage": self.profile_image,
        }


@dataclass(frozen=True)
class MarkAttendanceResult:
    """Response contract of a successful check-in."""

    record: AttendanceRecord
    subject: str

    def to_dict(self) -> dict:
        return {
            "success": True,
            "message": "Attendance marked",
            "sessionId": self.record.session_code,
            "subject": self.subject,
            "date": to_iso(self.record.timestamp),
            "attendance": self.record.to_dict(),
        }
