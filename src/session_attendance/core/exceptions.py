class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 400


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidCredentialsError(ValidationError):
    """Raised when login credentials are invalid."""


class AuthenticationError(DomainError):
    """Raised when the bearer token is missing, invalid or expired."""

    status_code = 401


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    status_code = 403


class NotFoundError(DomainError):
    """Raised when a record is absent or not owned by the caller."""

    status_code = 404


class SessionNotActiveError(NotFoundError):
    """Raised when checking in to a session that is missing or ended."""


class AlreadyMarkedError(DomainError):
    """Raised on a second check-in for the same (session, student) pair."""


class StorageError(DomainError):
    """Raised when the persistent store fails."""

    status_code = 500
