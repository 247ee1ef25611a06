"""
Session Factory following Black Box Design principles.

This factory:
- Reads session settings from a configuration provider
- Resolves the storage backend from a provider registry
- Returns only the Manager facade
"""

import logging
from typing import Optional

from ...config.provider import ConfigProvider
from .manager import Manager, new_manager
from .registry import ProviderRegistry

logger = logging.getLogger(__name__)


class SessionFactory:
    """Composition root for the session layer of a hosting application."""

    @staticmethod
    def build(
        config_provider: ConfigProvider,
        registry: Optional[ProviderRegistry] = None,
    ) -> Manager:
        """
        Build a session manager from configuration.

        Backends must already be registered when this is called.

        Args:
            config_provider: Configuration provider
            registry: Provider registry (process-wide one if None)

        Returns:
            Manager bound to the configured provider

        Raises:
            UnknownProviderError: If the configured provider is not registered
        """
        config = config_provider.get_session_config()
        logger.info(
            f"Building session manager: provider={config.provider_name} "
            f"cookie={config.cookie_name} max_lifetime={config.max_lifetime}s"
        )
        return new_manager(
            config.provider_name,
            config.cookie_name,
            config.max_lifetime,
            registry=registry,
            token_header=config.token_header,
        )
