from __future__ import annotations

import threading
from dataclasses import replace
from datetime import datetime, timezone
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from session_attendance.attendance.model import AttendanceRecord
from session_attendance.container import assemble_container
from session_attendance.core.enums import Role
from session_attendance.main import create_app
from session_attendance.notes.model import Note
from session_attendance.sessions.model import Session
from session_attendance.users.model import NewUser, User


class InMemoryUsers:
    def __init__(self):
        self._lock = threading.Lock()
        self._by_id: dict[int, User] = {}
        self._id = 0

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._by_id.get(int(user_id))

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self._by_id.values() if u.email == email), None)

    def create_user(self, new_user: NewUser, *, created_at: datetime) -> Optional[User]:
        with self._lock:
            if self.get_by_email(new_user.email):
                return None
            self._id += 1
            user = User(user_id=self._id, created_at=created_at, **new_user.__dict__)
            self._by_id[user.user_id] = user
            return user

    def replace(self, user: User) -> None:
        self._by_id[user.user_id] = user


class InMemorySessions:
    """Models the UNIQUE index on session_code."""

    def __init__(self):
        self._lock = threading.Lock()
        self._by_code: dict[str, Session] = {}

    def create(self, session: Session) -> bool:
        with self._lock:
            if session.code in self._by_code:
                return False
            self._by_code[session.code] = session
            return True

    def get_by_code(self, code: str) -> Optional[Session]:
        return self._by_code.get(code)

    def get_active(self, code: str) -> Optional[Session]:
        s = self._by_code.get(code)
        return s if s and s.active else None

    def end(self, *, code: str, teacher_id: int, end_time: datetime) -> Optional[Session]:
        with self._lock:
            s = self._by_code.get(code)
            if not s or not s.active or s.teacher_id != teacher_id:
                return None
            ended = replace(s, active=False, end_time=end_time)
            self._by_code[code] = ended
            return ended

    def list_ended(self):
        items = [s for s in self._by_code.values() if not s.active]
        items.sort(key=lambda s: s.start_time, reverse=True)
        return items


class InMemoryAttendance:
    """Models the UNIQUE (session_code, student_id) index."""

    def __init__(self):
        self._lock = threading.Lock()
        self._by_pair: dict[tuple[str, int], AttendanceRecord] = {}

    def get_for_session_and_student(self, session_code: str, student_id: int) -> Optional[AttendanceRecord]:
        return self._by_pair.get((session_code, student_id))

    def create(self, record: AttendanceRecord) -> bool:
        with self._lock:
            key = (record.session_code, record.student_id)
            if key in self._by_pair:
                return False
            self._by_pair[key] = record
            return True

    def list_for_session(self, session_code: str):
        items = [r for r in self._by_pair.values() if r.session_code == session_code]
        items.sort(key=lambda r: r.timestamp)
        return items

    def list_for_student(self, student_id: int):
        items = [r for r in self._by_pair.values() if r.student_id == student_id]
        items.sort(key=lambda r: r.timestamp, reverse=True)
        return items

    def count(self) -> int:
        return len(self._by_pair)


class InMemoryNotes:
    def __init__(self):
        self._notes: list[Note] = []

    def create(self, *, user_id: int, content: str, created_at: datetime) -> Note:
        note = Note(note_id=len(self._notes) + 1, user_id=user_id, content=content, created_at=created_at)
        self._notes.append(note)
        return note

    def list_for_user(self, user_id: int):
        items = [n for n in self._notes if n.user_id == user_id]
        items.sort(key=lambda n: (n.created_at, n.note_id), reverse=True)
        return items


class RecordingPublisher:
    def __init__(self, *, fail: bool = False):
        self.events: list[tuple[str, str, dict]] = []
        self._fail = fail

    def publish(self, session_code: str, event: str, payload: dict) -> int:
        if self._fail:
            raise RuntimeError("broker down")
        self.events.append((session_code, event, payload))
        return 1


def make_user(user_id: int, role: Role, *, name: str = "A", roll_number: Optional[str] = None) -> User:
    return User(
        user_id=user_id,
        email=f"user{user_id}@example.edu",
        password_hash=generate_password_hash("secret1"),
        role=role,
        name=name,
        roll_number=roll_number,
        profile_image=f"https://img.example.edu/{user_id}.png",
    )


@pytest.fixture
def fixed_now():
    return datetime(2026, 2, 2, 8, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
def users_repo():
    return InMemoryUsers()


@pytest.fixture
def sessions_repo():
    return InMemorySessions()


@pytest.fixture
def attendance_repo():
    return InMemoryAttendance()


@pytest.fixture
def notes_repo():
    return InMemoryNotes()


@pytest.fixture
def teacher():
    return make_user(1, Role.TEACHER, name="Teacher T")


@pytest.fixture
def student():
    return make_user(2, Role.STUDENT, name="Student S", roll_number="R-02")


@pytest.fixture
def container(users_repo, sessions_repo, attendance_repo, notes_repo):
    return assemble_container(
        users_repo=users_repo,
        sessions_repo=sessions_repo,
        attendance_repo=attendance_repo,
        notes_repo=notes_repo,
        secret_key="test-secret",
        token_max_age_seconds=3600,
        subscriber_queue_size=10,
    )


@pytest.fixture
def app(container):
    return create_app(container, settings_module="session_attendance.config.testing")


@pytest.fixture
def client(app):
    return app.test_client()
