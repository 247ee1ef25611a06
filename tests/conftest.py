"""
Shared pytest fixtures for sessionkit tests.

This module provides common fixtures including:
- MemoryProvider: dict-backed Provider used to exercise the Manager
- Isolated provider registries
- Starlette request/response builders
"""

import os
import sys
import time
from http.cookies import SimpleCookie
from typing import Any, Dict, List, Optional, Tuple

import pytest
from fastapi import Request, Response

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sessionkit.modules.session import Manager, ProviderRegistry, SessionNotFoundError


# =============================================================================
# In-memory Provider
# =============================================================================

class MemorySession:
    """Session state held in a plain dict."""

    def __init__(self, sid: str):
        self._sid = sid
        self._values: Dict[Any, Any] = {}
        self.last_access = time.time()

    def set(self, key, value) -> None:
        self._values[key] = value
        self.last_access = time.time()

    def get(self, key) -> Any:
        self.last_access = time.time()
        return self._values.get(key)

    def delete(self, key) -> None:
        self._values.pop(key, None)
        self.last_access = time.time()

    def session_id(self) -> str:
        return self._sid


class MemoryProvider:
    """
    Dict-backed provider that records every call.

    Tests read `calls` to check what the Manager dispatched.
    """

    def __init__(self):
        self.sessions: Dict[str, MemorySession] = {}
        self.calls: List[Tuple[str, Any]] = []

    def session_init(self, sid: str) -> MemorySession:
        self.calls.append(("init", sid))
        session = MemorySession(sid)
        self.sessions[sid] = session
        return session

    def session_read(self, sid: str) -> MemorySession:
        self.calls.append(("read", sid))
        session = self.sessions.get(sid)
        if session is None:
            raise SessionNotFoundError(sid)
        session.last_access = time.time()
        return session

    def session_destroy(self, sid: str) -> None:
        self.calls.append(("destroy", sid))
        self.sessions.pop(sid, None)

    def session_gc(self, max_lifetime: int) -> None:
        self.calls.append(("gc", max_lifetime))
        cutoff = time.time() - max_lifetime
        for sid in [s for s, session in self.sessions.items() if session.last_access < cutoff]:
            del self.sessions[sid]


class FailingProvider(MemoryProvider):
    """Provider whose selected operations raise."""

    def __init__(self, fail_on: Tuple[str, ...] = ()):
        super().__init__()
        self.fail_on = fail_on

    def _maybe_fail(self, op: str) -> None:
        if op in self.fail_on:
            raise RuntimeError(f"backend unavailable during {op}")

    def session_init(self, sid: str) -> MemorySession:
        self._maybe_fail("init")
        return super().session_init(sid)

    def session_read(self, sid: str) -> MemorySession:
        self._maybe_fail("read")
        return super().session_read(sid)

    def session_destroy(self, sid: str) -> None:
        self._maybe_fail("destroy")
        super().session_destroy(sid)

    def session_gc(self, max_lifetime: int) -> None:
        self._maybe_fail("gc")
        super().session_gc(max_lifetime)


# =============================================================================
# HTTP helpers
# =============================================================================

def make_request(
    cookies: Optional[Dict[str, str]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> Request:
    """Build a bare Starlette request carrying the given cookies and headers."""
    raw_headers = []
    if cookies:
        cookie_header = "; ".join(f"{name}={value}" for name, value in cookies.items())
        raw_headers.append((b"cookie", cookie_header.encode("latin-1")))
    for name, value in (headers or {}).items():
        raw_headers.append((name.lower().encode("latin-1"), value.encode("latin-1")))

    scope = {
        "type": "http",
        "method": "GET",
        "path": "/",
        "query_string": b"",
        "headers": raw_headers,
    }
    return Request(scope)


def response_cookies(response: Response) -> SimpleCookie:
    """Parse every Set-Cookie header on response."""
    jar = SimpleCookie()
    for header in response.headers.getlist("set-cookie"):
        jar.load(header)
    return jar


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def provider():
    """Fresh in-memory provider."""
    return MemoryProvider()


@pytest.fixture
def registry(provider):
    """Isolated registry with the in-memory provider registered as 'memory'."""
    registry = ProviderRegistry()
    registry.register("memory", provider)
    return registry


@pytest.fixture
def manager(provider):
    """Manager over the in-memory provider."""
    return Manager(provider, cookie_name="sessionid", max_lifetime=3600)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: Tests that take a long time to run"
    )
