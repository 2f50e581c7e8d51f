from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import to_iso
from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a registered student or teacher.

    Plain data object (no DB access code).
    """

    user_id: int
    email: str
    password_hash: str
    role: Role
    name: str
    roll_number: Optional[str] = None
    college: Optional[str] = None
    department: Optional[str] = None
    class_name: Optional[str] = None
    address: Optional[str] = None
    profile_image: Optional[str] = None
    created_at: Optional[datetime] = None

    def to_public_dict(self) -> dict:
        """Profile as returned by the API; the password hash never leaves the server."""
        return {
            "id": self.user_id,
            "email": self.email,
            "role": self.role.value,
            "name": self.name,
            "rollNumber": self.roll_number,
            "college": self.college,
            "department": self.department,
            "class": self.class_name,
            "address": self.address,
            "profileImage": self.profile_image,
            "createdAt": to_iso(self.created_at),
        }


@dataclass(frozen=True)
class NewUser:
    email: str
    password_hash: str
    role: Role
    name: str
    roll_number: Optional[str] = None
    college: Optional[str] = None
    department: Optional[str] = None
    class_name: Optional[str] = None
    address: Optional[str] = None
    profile_image: Optional[str] = None
