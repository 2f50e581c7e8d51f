from __future__ import annotations

from datetime import timedelta

import pytest

from session_attendance.core.exceptions import NotFoundError, StorageError, ValidationError
from session_attendance.sessions.codes import generate_session_code
from session_attendance.sessions.service import SessionRegistry


def test_generated_code_is_six_uppercase_alphanumerics():
    for _ in range(50):
        code = generate_session_code()
        assert len(code) == 6
        assert code.isalnum()
        assert code == code.upper()


def test_start_session_is_active_with_start_time(sessions_repo, fixed_now):
    registry = SessionRegistry(sessions_repo, code_factory=lambda: "AB12CD")

    s = registry.start_session(teacher_id=1, subject="Physics", latitude=12.97, longitude=77.59, now=fixed_now)

    assert s.code == "AB12CD"
    assert s.active is True
    assert s.start_time == fixed_now
    assert s.end_time is None
    assert sessions_repo.get_active("AB12CD") == s


def test_start_session_retries_on_code_collision(sessions_repo, fixed_now):
    codes = iter(["AAAAAA", "AAAAAA", "BBBBBB"])
    registry = SessionRegistry(sessions_repo, code_factory=lambda: next(codes))

    first = registry.start_session(teacher_id=1, subject="Math", latitude=0, longitude=0, now=fixed_now)
    second = registry.start_session(teacher_id=2, subject="Art", latitude=0, longitude=0, now=fixed_now)

    assert first.code == "AAAAAA"
    assert second.code == "BBBBBB"
    assert second.teacher_id == 2


def test_start_session_gives_up_after_max_attempts(sessions_repo, fixed_now):
    registry = SessionRegistry(sessions_repo, code_factory=lambda: "SAME00", max_code_attempts=3)
    registry.start_session(teacher_id=1, subject="Math", latitude=0, longitude=0, now=fixed_now)

    with pytest.raises(StorageError):
        registry.start_session(teacher_id=1, subject="Math", latitude=0, longitude=0, now=fixed_now)


@pytest.mark.parametrize(
    "subject,lat,lon",
    [
        ("", 1.0, 1.0),
        ("Math", 91, 0),
        ("Math", 0, -181),
        ("Math", "north", 0),
        ("Math", None, 0),
        ("Math", True, 0),
    ],
)
def test_start_session_rejects_bad_input(sessions_repo, subject, lat, lon):
    registry = SessionRegistry(sessions_repo)
    with pytest.raises(ValidationError):
        registry.start_session(teacher_id=1, subject=subject, latitude=lat, longitude=lon)


def test_end_session_twice_keeps_first_end_time(sessions_repo, fixed_now):
    registry = SessionRegistry(sessions_repo, code_factory=lambda: "AB12CD")
    registry.start_session(teacher_id=1, subject="Physics", latitude=0, longitude=0, now=fixed_now)

    first_end = fixed_now + timedelta(hours=1)
    ended = registry.end_session(teacher_id=1, code="AB12CD", now=first_end)
    assert ended.active is False
    assert ended.end_time == first_end

    with pytest.raises(NotFoundError):
        registry.end_session(teacher_id=1, code="AB12CD", now=first_end + timedelta(hours=1))

    assert sessions_repo.get_by_code("AB12CD").end_time == first_end


def test_end_session_by_other_teacher_is_not_found(sessions_repo, fixed_now):
    registry = SessionRegistry(sessions_repo, code_factory=lambda: "AB12CD")
    registry.start_session(teacher_id=1, subject="Physics", latitude=0, longitude=0, now=fixed_now)

    with pytest.raises(NotFoundError):
        registry.end_session(teacher_id=99, code="AB12CD")

    assert sessions_repo.get_active("AB12CD") is not None


def test_get_active_session_normalizes_code(sessions_repo, fixed_now):
    registry = SessionRegistry(sessions_repo, code_factory=lambda: "AB12CD")
    registry.start_session(teacher_id=1, subject="Physics", latitude=0, longitude=0, now=fixed_now)

    assert registry.get_active_session("  ab12cd ").code == "AB12CD"

    registry.end_session(teacher_id=1, code="AB12CD")
    with pytest.raises(NotFoundError):
        registry.get_active_session("AB12CD")


def test_get_owned_session_hides_other_teachers_sessions(sessions_repo, fixed_now):
    registry = SessionRegistry(sessions_repo, code_factory=lambda: "AB12CD")
    registry.start_session(teacher_id=1, subject="Physics", latitude=0, longitude=0, now=fixed_now)

    assert registry.get_owned_session(code="AB12CD", teacher_id=1).subject == "Physics"
    with pytest.raises(NotFoundError):
        registry.get_owned_session(code="AB12CD", teacher_id=2)
