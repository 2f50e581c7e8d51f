from __future__ import annotations

from typing import Optional, Sequence

from ..common.datetime_utils import from_db, to_db
from ..common.geo import GeoPoint
from ..database.connection import DatabaseConnection
from ..database.mysql_base import DuplicateKeyError, as_float, db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "session_code, student_id, student_name, roll_number, profile_image, latitude, longitude, marked_at"


def _to_record(row: dict) -> AttendanceRecord:
    return AttendanceRecord(
        session_code=row["session_code"],
        student_id=int(row["student_id"]),
        student_name=row["student_name"],
        roll_number=row.get("roll_number"),
        profile_image=row.get("profile_image"),
        location=GeoPoint(latitude=as_float(row["latitude"]), longitude=as_float(row["longitude"])),
        timestamp=from_db(row["marked_at"]),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_session_and_student(self, session_code: str, student_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE session_code=%s AND student_id=%s",
                (session_code, int(student_id)),
            )
            row = fetchone(cur)
            return _to_record(row) if row else None

    def create(self, record: AttendanceRecord) -> bool:
        # uq_attendance_session_student makes this check-and-insert atomic.
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(session_code, student_id, student_name, roll_number,
                                                   profile_image, latitude, longitude, marked_at)
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        record.session_code,
                        record.student_id,
                        record.student_name,
                        record.roll_number,
                        record.profile_image,
                        record.location.latitude,
                        record.location.longitude,
                        to_db(record.timestamp),
                    ),
                )
        except DuplicateKeyError:
            return False
        return True

    def list_for_session(self, session_code: str) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE session_code=%s ORDER BY marked_at",
                (session_code,),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_student(self, student_id: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE student_id=%s ORDER BY marked_at DESC",
                (int(student_id),),
            )
            return [_to_record(r) for r in fetchall(cur)]
