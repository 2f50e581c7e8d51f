from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..common.datetime_utils import from_db, to_db
from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import DuplicateKeyError, db_cursor, fetchone
from .model import NewUser, User
from .repository import UserRepository

_COLUMNS = """
    user_id, email, password_hash, role, name, roll_number, college,
    department, class_name, address, profile_image, created_at
"""


def _to_user(row: dict) -> User:
    return User(
        user_id=int(row["user_id"]),
        email=row["email"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        name=row["name"],
        roll_number=row.get("roll_number"),
        college=row.get("college"),
        department=row.get("department"),
        class_name=row.get("class_name"),
        address=row.get("address"),
        profile_image=row.get("profile_image"),
        created_at=from_db(row.get("created_at")),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (int(user_id),))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE email=%s", (email,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def create_user(self, new_user: NewUser, *, created_at: datetime) -> Optional[User]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO users(email, password_hash, role, name, roll_number, college,
                                      department, class_name, address, profile_image, created_at)
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        new_user.email,
                        new_user.password_hash,
                        new_user.role.value,
                        new_user.name,
                        new_user.roll_number,
                        new_user.college,
                        new_user.department,
                        new_user.class_name,
                        new_user.address,
                        new_user.profile_image,
                        to_db(created_at),
                    ),
                )
                user_id = int(cur.lastrowid)
        except DuplicateKeyError:
            return None

        return User(
            user_id=user_id,
            email=new_user.email,
            password_hash=new_user.password_hash,
            role=new_user.role,
            name=new_user.name,
            roll_number=new_user.roll_number,
            college=new_user.college,
            department=new_user.department,
            class_name=new_user.class_name,
            address=new_user.address,
            profile_image=new_user.profile_image,
            created_at=created_at,
        )
