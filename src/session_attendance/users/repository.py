from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from .model import NewUser, User


class UserRepository(Protocol):
    """Repository interface for users (the Identity Store).

    Note (DIP): the service layer depends on this interface, not on a concrete DB.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(self, new_user: NewUser, *, created_at: datetime) -> Optional[User]:
        """Insert a user; returns ``None`` when the email is already taken."""
        raise NotImplementedError
