from __future__ import annotations

from datetime import datetime
from typing import Sequence

from ..common.datetime_utils import from_db, to_db
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Note
from .repository import NoteRepository


class MySQLNoteRepository(NoteRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, user_id: int, content: str, created_at: datetime) -> Note:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO notes(user_id, content, created_at) VALUES(%s,%s,%s)",
                (int(user_id), content, to_db(created_at)),
            )
            note_id = int(cur.lastrowid)
        return Note(note_id=note_id, user_id=int(user_id), content=content, created_at=created_at)

    def list_for_user(self, user_id: int) -> Sequence[Note]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT note_id, user_id, content, created_at
                FROM notes
                WHERE user_id=%s
                ORDER BY created_at DESC, note_id DESC
                """,
                (int(user_id),),
            )
            return [
                Note(
                    note_id=int(r["note_id"]),
                    user_id=int(r["user_id"]),
                    content=r["content"],
                    created_at=from_db(r["created_at"]),
                )
                for r in fetchall(cur)
            ]
