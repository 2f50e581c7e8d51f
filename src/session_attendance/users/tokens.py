from __future__ import annotations

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from ..core.exceptions import AuthenticationError


class TokenService:
    """Issues and resolves opaque bearer tokens.

    Tokens are signed (not encrypted) ``{"uid": <user id>}`` payloads with an
    embedded timestamp, checked against ``max_age_seconds`` on every request.
    """

    SALT = "access-token"

    def __init__(self, secret_key: str, *, max_age_seconds: int):
        self._serializer = URLSafeTimedSerializer(secret_key, salt=self.SALT)
        self._max_age = int(max_age_seconds)

    def issue(self, user_id: int) -> str:
        return self._serializer.dumps({"uid": int(user_id)})

    def resolve(self, token: str) -> int:
        if not token:
            raise AuthenticationError("Please authenticate.")
        try:
            payload = self._serializer.loads(token, max_age=self._max_age)
        except SignatureExpired:
            raise AuthenticationError("Token expired")
        except BadSignature:
            raise AuthenticationError("Please authenticate.")

        uid = payload.get("uid") if isinstance(payload, dict) else None
        if not isinstance(uid, int):
            raise AuthenticationError("Please authenticate.")
        return uid
