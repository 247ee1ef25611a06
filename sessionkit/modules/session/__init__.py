"""
Session Module - Black Box Interface

Purpose: Manage opaque session lifecycle over cookies and header tokens
Interface: new_manager(), register(), Manager.session_start(), Manager.session_end(),
           Manager.api_session_start(), Manager.api_session_create(), Manager.api_session_end()
Hidden: Session storage (provider), id generation, transport encoding

Replaceable with any session backend (database, in-memory, distributed cache)
implementing the Provider interface.
"""

from .errors import (
    EntropyUnavailableError,
    ProviderRegistrationError,
    SessionError,
    SessionNotFoundError,
    UnknownProviderError,
)
from .factory import SessionFactory
from .identifier import SESSION_ID_BYTES, new_session_id
from .interfaces import Provider, Session
from .manager import TOKEN_HEADER, Manager, SessionResult, SessionTarget, new_manager
from .registry import ProviderRegistry, default_registry, lookup, register

__all__ = [
    "EntropyUnavailableError",
    "Manager",
    "Provider",
    "ProviderRegistrationError",
    "ProviderRegistry",
    "SESSION_ID_BYTES",
    "Session",
    "SessionError",
    "SessionFactory",
    "SessionNotFoundError",
    "SessionResult",
    "SessionTarget",
    "TOKEN_HEADER",
    "UnknownProviderError",
    "default_registry",
    "lookup",
    "new_manager",
    "new_session_id",
    "register",
]
