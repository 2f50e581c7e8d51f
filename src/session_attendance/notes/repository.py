from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from .model import Note


class NoteRepository(Protocol):
    def create(self, *, user_id: int, content: str, created_at: datetime) -> Note:
        raise NotImplementedError

    def list_for_user(self, user_id: int) -> Sequence[Note]:
        """Notes owned by ``user_id``, newest first."""
        raise NotImplementedError
