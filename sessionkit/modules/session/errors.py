"""Session error taxonomy."""

from typing import Optional


class SessionError(Exception):
    """Base class for recoverable session errors."""


class UnknownProviderError(SessionError):
    """Raised when a manager is bound to a provider name nobody registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"session: unknown provider {name!r} (forgotten import?)")


class EntropyUnavailableError(SessionError):
    """Raised when the secure random source cannot produce a session id."""


class SessionNotFoundError(SessionError):
    """Raised by providers when a session id is unknown or expired."""

    def __init__(self, session_id: str, message: Optional[str] = None):
        self.session_id = session_id
        super().__init__(message or "session not found")


class ProviderRegistrationError(RuntimeError):
    """
    Provider registry misuse (nil provider, duplicate name, late registration).

    Signals broken wiring at startup. Not a SessionError, so handlers for
    recoverable session errors never catch it.
    """
