from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Tuple

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.datetime_utils import now_utc
from ..common.validators import optional_str, require_email, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, InvalidCredentialsError, ValidationError
from .model import NewUser, User
from .repository import UserRepository
from .tokens import TokenService

logger = logging.getLogger(__name__)


class AuthService:
    """Use cases: register, login, and resolve a bearer token to a user."""

    def __init__(self, users: UserRepository, tokens: TokenService):
        self._users = users
        self._tokens = tokens

    def register(
        self,
        *,
        email: str,
        password: str,
        role: str,
        name: str,
        roll_number: Optional[str] = None,
        college: Optional[str] = None,
        department: Optional[str] = None,
        class_name: Optional[str] = None,
        address: Optional[str] = None,
        profile_image: Optional[str] = None,
        now: datetime | None = None,
    ) -> Tuple[User, str]:
        email = require_email(email)
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
        name = require_non_empty(name, "Name")
        try:
            user_role = Role(role)
        except ValueError:
            raise ValidationError("Role must be 'student' or 'teacher'")

        if self._users.get_by_email(email):
            raise ValidationError("Email already used")

        new_user = NewUser(
            email=email,
            password_hash=generate_password_hash(password),
            role=user_role,
            name=name,
            roll_number=optional_str(roll_number),
            college=optional_str(college),
            department=optional_str(department),
            class_name=optional_str(class_name),
            address=optional_str(address),
            profile_image=optional_str(profile_image),
        )
        user = self._users.create_user(new_user, created_at=now or now_utc())
        if user is None:
            # Lost a race with a concurrent registration for the same email.
            raise ValidationError("Email already used")

        logger.info("registered %s user_id=%s", user.role.value, user.user_id)
        return user, self._tokens.issue(user.user_id)

    def login(self, email: str, password: str) -> Tuple[User, str]:
        if not isinstance(email, str) or not isinstance(password, str):
            raise InvalidCredentialsError("Invalid credentials")

        user = self._users.get_by_email(email.strip().lower())
        if not user:
            raise InvalidCredentialsError("Invalid credentials")

        try:
            ok = check_password_hash(user.password_hash, password)
        except ValueError:
            # e.g. placeholder or corrupted hashes
            ok = False

        if not ok:
            raise InvalidCredentialsError("Invalid credentials")

        return user, self._tokens.issue(user.user_id)

    def authenticate_token(self, token: str) -> User:
        user_id = self._tokens.resolve(token)
        user = self._users.get_by_id(user_id)
        if not user:
            raise AuthenticationError("Please authenticate.")
        return user
