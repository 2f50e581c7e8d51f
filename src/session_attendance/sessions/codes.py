from __future__ import annotations

import secrets

from ..core.constants import SESSION_CODE_ALPHABET, SESSION_CODE_LENGTH


def generate_session_code(length: int = SESSION_CODE_LENGTH) -> str:
    """Short human-typeable code, e.g. ``AB12CD``."""
    return "".join(secrets.choice(SESSION_CODE_ALPHABET) for _ in range(length))


def normalize_session_code(value) -> str:
    if not isinstance(value, str):
        return ""
    return value.strip().upper()
