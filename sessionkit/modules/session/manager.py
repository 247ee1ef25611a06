"""
Session manager.

Mediates the session lifecycle for two transports over one provider:

- Cookie protocol (browsers): session_start() / session_end()
- Token protocol (API clients): api_session_start() / api_session_create() /
  api_session_end(), with the id carried in the X-Session-Token header

The manager never touches session contents; it owns identifier lifecycle and
delegates storage to the provider.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Optional, Union
from urllib.parse import quote_plus, unquote_plus

from fastapi import Request, Response

from .errors import UnknownProviderError
from .identifier import new_session_id
from .interfaces import Provider, Session
from .registry import ProviderRegistry, default_registry

logger = logging.getLogger(__name__)

TOKEN_HEADER = "X-Session-Token"


@dataclass
class SessionResult:
    """Outcome of a lifecycle call."""
    session: Optional[Session]
    session_id: Optional[str]
    error: Optional[Exception] = None
    created: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


SessionTarget = Union[Session, SessionResult, str]


def _target_id(session: SessionTarget) -> str:
    if isinstance(session, str):
        return session
    if isinstance(session, SessionResult):
        if not session.session_id:
            raise ValueError("session result carries no session id")
        return session.session_id
    return session.session_id()


class Manager:
    """
    Coordinates session lifecycle for one provider.

    A single lock serialises every lifecycle call on the instance, so id
    generation, provider dispatch and cookie mutation are atomic with respect
    to each other. A provider call that blocks stalls all other session
    operations on this manager.
    """

    def __init__(
        self,
        provider: Provider,
        cookie_name: str,
        max_lifetime: int,
        token_header: str = TOKEN_HEADER,
    ):
        """
        Initialize session manager.

        Args:
            provider: Storage backend
            cookie_name: Cookie carrying the session id for browsers
            max_lifetime: Cookie max-age and GC threshold, in seconds
            token_header: Header carrying the session id for API clients
        """
        self._provider = provider
        self._cookie_name = cookie_name
        self._max_lifetime = int(max_lifetime)
        self._token_header = token_header
        self._lock = threading.Lock()

    @property
    def provider(self) -> Provider:
        return self._provider

    @property
    def cookie_name(self) -> str:
        return self._cookie_name

    @property
    def max_lifetime(self) -> int:
        return self._max_lifetime

    @property
    def token_header(self) -> str:
        return self._token_header

    # Cookie protocol

    def session_start(self, request: Request, response: Response) -> SessionResult:
        """
        Resume the session named by the request cookie, or start a new one.

        A new session sets the cookie on response. Provider failures are
        logged and returned in the result; they are never raised.

        Raises:
            EntropyUnavailableError: If no id could be generated. No session
                is started and no cookie is set.
        """
        with self._lock:
            cookie = request.cookies.get(self._cookie_name)
            if not cookie:
                logger.debug("No session id in request cookie, creating one")
                sid = new_session_id()
                logger.debug(f"New session id is {sid}")
                result = self._init(sid)
                self._set_cookie(response, sid, self._max_lifetime)
                return result

            sid = unquote_plus(cookie)
            logger.debug(f"Got session id {sid} from request cookie {self._cookie_name}")
            return self._read(sid)

    def session_end(self, response: Response, session: SessionTarget) -> SessionResult:
        """
        Destroy session and tell the client to drop its cookie.

        session may be a Session, the SessionResult from session_start (also
        when its read failed) or a bare session id. The deletion cookie is
        sent even if the provider fails to destroy the session.
        """
        with self._lock:
            sid = _target_id(session)
            # max-age < 0 deletes the cookie now
            self._set_cookie(response, sid, -1)
            return self._destroy(sid)

    # Token protocol

    def api_session_start(self, request: Request) -> SessionResult:
        """
        Resume the session named by the token header, or create a new one.

        The token is not validated here; an unknown token is handed straight
        to the provider and its session_read policy decides the outcome.
        """
        sid = unquote_plus(request.headers.get(self._token_header, ""))
        logger.debug(f"Got session token {sid!r}")

        if not sid:
            logger.debug("No session token in request, creating one")
            return self.api_session_create()

        with self._lock:
            return self._read(sid)

    def api_session_create(self) -> SessionResult:
        """
        Create a session for an API client.

        No transport artifact is written; use issue_token() to return the id
        to the client.

        Raises:
            EntropyUnavailableError: If no id could be generated
        """
        with self._lock:
            sid = new_session_id()
            logger.debug(f"New session id is {sid}")
            return self._init(sid)

    def api_session_end(self, session: SessionTarget) -> SessionResult:
        """Destroy an API client's session, given as for session_end()."""
        with self._lock:
            return self._destroy(_target_id(session))

    def issue_token(self, response: Response, session: Session) -> None:
        """Echo the session id to the client in the token response header."""
        response.headers[self._token_header] = quote_plus(session.session_id())

    # Garbage collection hook

    def gc(self) -> None:
        """
        Sweep sessions older than max_lifetime.

        Meant to be called by an external scheduler. Provider failures are
        logged and re-raised to the caller.
        """
        with self._lock:
            logger.debug(f"Running session GC with max lifetime {self._max_lifetime}s")
            try:
                self._provider.session_gc(self._max_lifetime)
            except Exception as e:
                logger.error(f"Session GC failed: {e}")
                raise

    # Provider dispatch, called with the lock held

    def _init(self, sid: str) -> SessionResult:
        try:
            session = self._provider.session_init(sid)
        except Exception as e:
            logger.error(f"Init session for id {sid} failed: {e}")
            return SessionResult(session=None, session_id=sid, error=e, created=True)
        return SessionResult(session=session, session_id=sid, created=True)

    def _read(self, sid: str) -> SessionResult:
        try:
            session = self._provider.session_read(sid)
        except Exception as e:
            logger.error(f"Read session for id {sid} failed: {e}")
            return SessionResult(session=None, session_id=sid, error=e)
        return SessionResult(session=session, session_id=sid)

    def _destroy(self, sid: str) -> SessionResult:
        logger.debug(f"Destroy session for id {sid}")
        try:
            self._provider.session_destroy(sid)
        except Exception as e:
            logger.error(f"Destroy session for id {sid} failed: {e}")
            return SessionResult(session=None, session_id=sid, error=e)
        return SessionResult(session=None, session_id=sid)

    def _set_cookie(self, response: Response, sid: str, max_age: int) -> None:
        response.set_cookie(
            key=self._cookie_name,
            value=quote_plus(sid),
            max_age=max_age,
            path="/",
            httponly=True,
        )


def new_manager(
    provider_name: str,
    cookie_name: str,
    max_lifetime: int,
    registry: Optional[ProviderRegistry] = None,
    token_header: str = TOKEN_HEADER,
) -> Manager:
    """
    Build a Manager bound to a registered provider.

    Args:
        provider_name: Name the backend registered under
        cookie_name: Cookie carrying the session id
        max_lifetime: Session lifetime in seconds
        registry: Registry to resolve from (process-wide one if None)
        token_header: Header carrying the session id for API clients

    Returns:
        Configured Manager

    Raises:
        UnknownProviderError: If provider_name is not registered
    """
    registry = registry if registry is not None else default_registry
    logger.info(f"Creating session manager for provider {provider_name!r}")
    try:
        provider = registry.lookup(provider_name)
    except UnknownProviderError:
        logger.error(f"No session provider registered as {provider_name!r}")
        raise
    return Manager(provider, cookie_name, max_lifetime, token_header=token_header)
