"""
Provider registry.

Backends make themselves available by name at import time:

    from sessionkit.modules.session import register

    register("memory", MemoryProvider())

Registration happens once during startup, before any Manager looks a name up.
"""

import logging
import threading
from typing import Dict, List, Optional

from .errors import ProviderRegistrationError, UnknownProviderError
from .interfaces import Provider

logger = logging.getLogger(__name__)


class ProviderRegistry:
    """
    Append-only mapping from backend name to Provider instance.

    With seal_on_lookup (the default) the first lookup closes the registry,
    and any registration after that raises ProviderRegistrationError.
    """

    def __init__(self, seal_on_lookup: bool = True):
        self._providers: Dict[str, Provider] = {}
        self._lock = threading.Lock()
        self._sealed = False
        self.seal_on_lookup = seal_on_lookup

    def register(self, name: str, provider: Optional[Provider]) -> None:
        """
        Make a session provider available under name.

        Args:
            name: Backend name managers are built with
            provider: Provider instance

        Raises:
            ProviderRegistrationError: If provider is None or incomplete, name
                is taken, or the registry is sealed
        """
        if provider is None:
            raise ProviderRegistrationError("session: register provider is nil")

        if not isinstance(provider, Provider):
            raise ProviderRegistrationError(
                f"session: {type(provider).__name__} does not implement the Provider interface"
            )

        with self._lock:
            if self._sealed:
                raise ProviderRegistrationError(
                    f"session: register called for provider {name!r} after registry was sealed"
                )
            if name in self._providers:
                raise ProviderRegistrationError(
                    f"session: register called twice for provider {name!r}"
                )
            self._providers[name] = provider

        logger.debug(f"Registered session provider {name!r}")

    def lookup(self, name: str) -> Provider:
        """
        Resolve a registered provider.

        Raises:
            UnknownProviderError: If nothing is registered under name
        """
        provider = self._providers.get(name)
        if provider is None:
            raise UnknownProviderError(name)

        # A failed lookup leaves the registry open for the missing backend
        if self.seal_on_lookup and not self._sealed:
            self.seal()
        return provider

    def seal(self) -> None:
        """Refuse any further registration."""
        with self._lock:
            self._sealed = True

    @property
    def sealed(self) -> bool:
        return self._sealed

    def names(self) -> List[str]:
        return sorted(self._providers)

    def __contains__(self, name: object) -> bool:
        return name in self._providers

    def __len__(self) -> int:
        return len(self._providers)


# Process-wide registry used when callers do not inject their own
default_registry = ProviderRegistry()


def register(name: str, provider: Optional[Provider]) -> None:
    """Register provider in the process-wide registry."""
    default_registry.register(name, provider)


def lookup(name: str) -> Provider:
    """Resolve name from the process-wide registry."""
    return default_registry.lookup(name)
