from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceLedger
from .core.constants import DEFAULT_SUBSCRIBER_QUEUE_SIZE, DEFAULT_TOKEN_MAX_AGE_SECONDS
from .database.connection import DBConfig, DatabaseConnection
from .history.service import HistoryAggregator
from .notes.mysql_note_repository import MySQLNoteRepository
from .notes.repository import NoteRepository
from .notes.service import NoteService
from .realtime.notifier import RealtimeNotifier
from .sessions.mysql_session_repository import MySQLSessionRepository
from .sessions.repository import SessionRepository
from .sessions.service import SessionRegistry
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService
from .users.tokens import TokenService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    sessions_repo: SessionRepository
    attendance_repo: AttendanceRepository
    notes_repo: NoteRepository

    tokens: TokenService
    notifier: RealtimeNotifier

    auth_service: AuthService
    session_registry: SessionRegistry
    attendance_ledger: AttendanceLedger
    history_aggregator: HistoryAggregator
    note_service: NoteService


def assemble_container(
    *,
    users_repo: UserRepository,
    sessions_repo: SessionRepository,
    attendance_repo: AttendanceRepository,
    notes_repo: NoteRepository,
    secret_key: str,
    token_max_age_seconds: int = DEFAULT_TOKEN_MAX_AGE_SECONDS,
    subscriber_queue_size: int = DEFAULT_SUBSCRIBER_QUEUE_SIZE,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services on top of any repository implementations."""
    tokens = TokenService(secret_key, max_age_seconds=token_max_age_seconds)
    notifier = RealtimeNotifier(max_pending=subscriber_queue_size)

    session_registry = SessionRegistry(sessions_repo)

    return Container(
        conn=conn,
        users_repo=users_repo,
        sessions_repo=sessions_repo,
        attendance_repo=attendance_repo,
        notes_repo=notes_repo,
        tokens=tokens,
        notifier=notifier,
        auth_service=AuthService(users_repo, tokens),
        session_registry=session_registry,
        attendance_ledger=AttendanceLedger(attendance_repo, session_registry, notifier),
        history_aggregator=HistoryAggregator(sessions_repo, attendance_repo),
        note_service=NoteService(notes_repo),
    )


def build_container(
    *,
    db_config: dict,
    secret_key: str,
    token_max_age_seconds: int = DEFAULT_TOKEN_MAX_AGE_SECONDS,
    subscriber_queue_size: int = DEFAULT_SUBSCRIBER_QUEUE_SIZE,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return assemble_container(
        users_repo=MySQLUserRepository(conn),
        sessions_repo=MySQLSessionRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        notes_repo=MySQLNoteRepository(conn),
        secret_key=secret_key,
        token_max_age_seconds=token_max_age_seconds,
        subscriber_queue_size=subscriber_queue_size,
        conn=conn,
    )
