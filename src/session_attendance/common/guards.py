from __future__ import annotations

from functools import wraps

from flask import g, request

from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError


def bearer_token() -> str:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer":
        return ""
    return token.strip()


class Guards:
    """Route decorators resolving ``Authorization: Bearer`` into ``g.current_user``."""

    def __init__(self, auth_service):
        self._auth = auth_service

    def login_required(self, view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            token = bearer_token()
            if not token:
                raise AuthenticationError("Please authenticate.")
            g.current_user = self._auth.authenticate_token(token)
            return view(*args, **kwargs)

        return wrapper

    def role_required(self, role: Role):
        def decorator(view):
            @wraps(view)
            def checked(*args, **kwargs):
                if g.current_user.role != role:
                    raise AuthorizationError(f"Only {role.value}s can do this")
                return view(*args, **kwargs)

            return self.login_required(checked)

        return decorator
