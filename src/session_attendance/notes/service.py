from __future__ import annotations

from datetime import datetime
from typing import Sequence

from ..common.datetime_utils import now_utc
from ..common.validators import require_non_empty
from .model import Note
from .repository import NoteRepository


class NoteService:
    def __init__(self, notes: NoteRepository):
        self._notes = notes

    def create(self, *, user_id: int, content, now: datetime | None = None) -> Note:
        content = require_non_empty(content, "Content")
        return self._notes.create(user_id=int(user_id), content=content, created_at=now or now_utc())

    def list_for_user(self, user_id: int) -> Sequence[Note]:
        return self._notes.list_for_user(int(user_id))
