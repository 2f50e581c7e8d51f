from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..common.datetime_utils import to_iso


@dataclass(frozen=True)
class Note:
    note_id: int
    user_id: int
    content: str
    created_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.note_id,
            "userId": self.user_id,
            "content": self.content,
            "createdAt": to_iso(self.created_at),
        }
