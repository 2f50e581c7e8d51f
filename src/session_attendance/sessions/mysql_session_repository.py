from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import from_db, to_db
from ..common.geo import GeoPoint
from ..database.connection import DatabaseConnection
from ..database.mysql_base import DuplicateKeyError, as_float, db_cursor, fetchall, fetchone
from .model import Session
from .repository import SessionRepository

_COLUMNS = "session_code, teacher_id, subject, latitude, longitude, start_time, end_time, active"


def _to_session(row: dict) -> Session:
    return Session(
        code=row["session_code"],
        teacher_id=int(row["teacher_id"]),
        subject=row["subject"],
        location=GeoPoint(latitude=as_float(row["latitude"]), longitude=as_float(row["longitude"])),
        start_time=from_db(row["start_time"]),
        end_time=from_db(row.get("end_time")),
        active=bool(row["active"]),
    )


class MySQLSessionRepository(SessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, session: Session) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO sessions(session_code, teacher_id, subject, latitude, longitude, start_time, active)
                    VALUES(%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        session.code,
                        session.teacher_id,
                        session.subject,
                        session.location.latitude,
                        session.location.longitude,
                        to_db(session.start_time),
                        1 if session.active else 0,
                    ),
                )
        except DuplicateKeyError:
            return False
        return True

    def get_by_code(self, code: str) -> Optional[Session]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM sessions WHERE session_code=%s", (code,))
            row = fetchone(cur)
            return _to_session(row) if row else None

    def get_active(self, code: str) -> Optional[Session]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM sessions WHERE session_code=%s AND active=1", (code,))
            row = fetchone(cur)
            return _to_session(row) if row else None

    def end(self, *, code: str, teacher_id: int, end_time: datetime) -> Optional[Session]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE sessions
                SET active=0, end_time=%s
                WHERE session_code=%s AND teacher_id=%s AND active=1
                """,
                (to_db(end_time), code, int(teacher_id)),
            )
            if cur.rowcount == 0:
                return None
            cur.execute(f"SELECT {_COLUMNS} FROM sessions WHERE session_code=%s", (code,))
            return _to_session(fetchone(cur))

    def list_ended(self) -> Sequence[Session]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM sessions WHERE active=0 ORDER BY start_time DESC")
            return [_to_session(r) for r in fetchall(cur)]
