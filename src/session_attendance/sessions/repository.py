from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import Session


class SessionRepository(Protocol):
    def create(self, session: Session) -> bool:
        """Insert ``session``; returns False when its code is already taken."""
        raise NotImplementedError

    def get_by_code(self, code: str) -> Optional[Session]:
        raise NotImplementedError

    def get_active(self, code: str) -> Optional[Session]:
        raise NotImplementedError

    def end(self, *, code: str, teacher_id: int, end_time: datetime) -> Optional[Session]:
        """Atomically flip an active session owned by ``teacher_id`` to ended.

        Returns the updated session, or None when no such active session exists.
        """
        raise NotImplementedError

    def list_ended(self) -> Sequence[Session]:
        """Ended sessions, most recent start time first."""
        raise NotImplementedError
