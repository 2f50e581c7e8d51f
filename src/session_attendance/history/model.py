from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..common.datetime_utils import to_iso
from ..common.geo import GeoPoint
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class HistoryEntry:
    """Read-model: one student's status against one completed session."""

    session_code: str
    subject: str
    date: datetime
    status: AttendanceStatus
    location: GeoPoint

    def to_dict(self) -> dict:
        return {
            "sessionCode": self.session_code,
            "subject": self.subject,
            "date": to_iso(self.date),
            "status": self.status.value,
            "location": self.location.to_dict(),
        }
