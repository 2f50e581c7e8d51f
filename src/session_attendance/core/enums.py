from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for route authorization."""

    STUDENT = "student"
    TEACHER = "teacher"


class AttendanceStatus(str, Enum):
    """Status of a student against one completed session."""

    PRESENT = "Present"
    ABSENT = "Absent"
