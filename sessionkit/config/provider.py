"""Configuration provider following Black Box Design principles."""
import os
from dataclasses import dataclass
from typing import Protocol


@dataclass
class SessionConfig:
    """Session manager configuration."""
    provider_name: str
    cookie_name: str = "sessionid"
    max_lifetime: int = 3600
    token_header: str = "X-Session-Token"


class ConfigProvider(Protocol):
    """Protocol for configuration providers."""

    def get_session_config(self) -> SessionConfig:
        """Get session configuration."""
        ...


class EnvConfigProvider:
    """Environment-based configuration provider."""

    def get_session_config(self) -> SessionConfig:
        """Get session configuration from environment variables."""
        provider_name = os.getenv("SESSION_PROVIDER")
        if not provider_name:
            raise ValueError(
                "SESSION_PROVIDER environment variable is required. "
                "Set it to the name a session backend registered under (e.g. memory)."
            )

        max_lifetime_env = os.getenv("SESSION_MAX_LIFETIME", "3600")
        try:
            max_lifetime = int(max_lifetime_env)
        except ValueError:
            raise ValueError(
                f"SESSION_MAX_LIFETIME must be an integer number of seconds, got {max_lifetime_env!r}"
            ) from None
        if max_lifetime <= 0:
            raise ValueError(f"SESSION_MAX_LIFETIME must be positive, got {max_lifetime}")

        return SessionConfig(
            provider_name=provider_name,
            cookie_name=os.getenv("SESSION_COOKIE_NAME", "sessionid"),
            max_lifetime=max_lifetime,
            token_header=os.getenv("SESSION_TOKEN_HEADER", "X-Session-Token"),
        )
