from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import to_iso
from ..common.geo import GeoPoint


@dataclass(frozen=True)
class Session:
    """Domain entity: an attendance-taking window opened by a teacher.

    State machine: active -> ended (terminal).
    """

    code: str
    teacher_id: int
    subject: str
    location: GeoPoint
    start_time: datetime
    end_time: Optional[datetime] = None
    active: bool = True

    def to_dict(self) -> dict:
        return {
            "sessionId": self.code,
            "teacherId": self.teacher_id,
            "subject": self.subject,
            "location": self.location.to_dict(),
            "startTime": to_iso(self.start_time),
            "endTime": to_iso(self.end_time),
            "active": self.active,
        }
