from __future__ import annotations

from datetime import datetime, timezone

import mysql.connector
import pytest
from mysql.connector import errorcode

from session_attendance.attendance.model import AttendanceRecord
from session_attendance.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from session_attendance.common.geo import GeoPoint
from session_attendance.core.exceptions import StorageError
from session_attendance.database.mysql_base import DuplicateKeyError, db_cursor
from session_attendance.sessions.model import Session
from session_attendance.sessions.mysql_session_repository import MySQLSessionRepository


class FakeCursor:
    def __init__(self, error=None):
        self._error = error
        self.executed = []
        self.closed = False

    def execute(self, sql, params=None):
        self.executed.append((sql, params))
        if self._error is not None:
            raise self._error

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self, error=None):
        self.cursor_obj = FakeCursor(error)
        self.commits = 0
        self.rollbacks = 0
        self.closed = False

    def cursor(self, dictionary=True):
        return self.cursor_obj

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1

    def close(self):
        self.closed = True


class FakeConnFactory:
    def __init__(self, error=None, connect_error=None):
        self._error = error
        self._connect_error = connect_error
        self.connections = []

    def connect(self):
        if self._connect_error is not None:
            raise self._connect_error
        conn = FakeConnection(self._error)
        self.connections.append(conn)
        return conn


def _duplicate():
    return mysql.connector.IntegrityError(msg="Duplicate entry", errno=errorcode.ER_DUP_ENTRY)


NOW = datetime(2026, 2, 2, 8, 30, tzinfo=timezone.utc)


def _record():
    return AttendanceRecord(
        session_code="AB12CD",
        student_id=2,
        student_name="Student S",
        roll_number="R-02",
        profile_image=None,
        location=GeoPoint(latitude=12.9, longitude=77.5),
        timestamp=NOW,
    )


def _session():
    return Session(code="AB12CD", teacher_id=1, subject="Physics", location=GeoPoint(12.9, 77.5), start_time=NOW)


def test_attendance_insert_commits_and_reports_success():
    factory = FakeConnFactory()

    assert MySQLAttendanceRepository(factory).create(_record()) is True

    conn = factory.connections[0]
    assert conn.commits == 1 and conn.rollbacks == 0
    assert conn.closed and conn.cursor_obj.closed
    _, params = conn.cursor_obj.executed[0]
    assert params[:2] == ("AB12CD", 2)
    assert params[-1].tzinfo is None


def test_attendance_duplicate_key_is_reported_as_false():
    factory = FakeConnFactory(error=_duplicate())

    assert MySQLAttendanceRepository(factory).create(_record()) is False

    conn = factory.connections[0]
    assert conn.rollbacks == 1 and conn.commits == 0
    assert conn.closed


def test_session_duplicate_code_is_reported_as_false():
    factory = FakeConnFactory(error=_duplicate())

    assert MySQLSessionRepository(factory).create(_session()) is False
    assert factory.connections[0].rollbacks == 1


def test_other_driver_errors_are_storage_errors():
    factory = FakeConnFactory(error=mysql.connector.OperationalError(msg="Lost connection", errno=2013))

    with pytest.raises(StorageError) as exc:
        MySQLAttendanceRepository(factory).create(_record())

    assert not isinstance(exc.value, DuplicateKeyError)
    assert str(exc.value) == "Database operation failed"
    assert factory.connections[0].rollbacks == 1


def test_unreachable_database_is_storage_error():
    factory = FakeConnFactory(connect_error=mysql.connector.InterfaceError(msg="Can't connect", errno=2003))

    with pytest.raises(StorageError, match="Database unavailable"):
        with db_cursor(factory):
            pass


def test_non_driver_error_rolls_back_and_propagates():
    factory = FakeConnFactory()

    with pytest.raises(KeyError):
        with db_cursor(factory) as (_, cur):
            cur.execute("SELECT 1")
            raise KeyError("row")

    conn = factory.connections[0]
    assert conn.rollbacks == 1 and conn.commits == 0 and conn.closed
