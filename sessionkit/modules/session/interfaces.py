"""Session interfaces following Black Box Design principles."""
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Session(Protocol):
    """Key/value store scoped to one session. Implemented by backends."""

    def set(self, key: Any, value: Any) -> None:
        """Store a value under key."""
        ...

    def get(self, key: Any) -> Any:
        """
        Look up a value.

        Returns:
            The stored value, or None when the key is absent
        """
        ...

    def delete(self, key: Any) -> None:
        """Remove key from the session."""
        ...

    def session_id(self) -> str:
        """Return the identifier this session was created with."""
        ...


@runtime_checkable
class Provider(Protocol):
    """
    Protocol for session storage backends - allows swappable implementations.

    Any backend (in-memory map, file, database, cache) implementing these
    methods plugs into the Manager unchanged. Failures are signalled by
    raising; the Manager never lets them escape a lifecycle call.
    """

    def session_init(self, sid: str) -> Session:
        """Create and store a new empty session for sid."""
        ...

    def session_read(self, sid: str) -> Session:
        """
        Load the session for sid.

        Raises:
            SessionNotFoundError: Typically, when sid is unknown or expired
        """
        ...

    def session_destroy(self, sid: str) -> None:
        """Delete the session for sid."""
        ...

    def session_gc(self, max_lifetime: int) -> None:
        """Drop every session idle for longer than max_lifetime seconds."""
        ...
