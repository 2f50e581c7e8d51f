import os


def get_settings_module() -> str:
    # APP_ENV picks the settings module; defaults to development.
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "session_attendance.config.production"

    if env in {"test", "testing"}:
        return "session_attendance.config.testing"

    return "session_attendance.config.development"
