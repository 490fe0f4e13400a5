"""Registry mapping configuration tags to source control providers."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from ..errors import ConfigurationError
from .base import SourceControl
from .null import NullSourceControl
from .svn import Svn

logger = logging.getLogger(__name__)

ProviderFactory = Callable[[Dict[str, Any]], SourceControl]


def _null_factory(config: Dict[str, Any]) -> SourceControl:
    return NullSourceControl()


class SourceControlRegistry:
    """Registry for source control providers keyed by ``type`` tag."""

    def __init__(self) -> None:
        self._factories: Dict[str, ProviderFactory] = {}
        self._register_default_providers()

    def _register_default_providers(self) -> None:
        """Register built-in providers."""
        self.register("svn", Svn.from_config)
        self.register("nullsourcecontrol", _null_factory)

    def register(self, name: str, factory: ProviderFactory) -> None:
        """Register a provider factory.

        Args:
            name: Configuration tag, matched case-insensitively
            factory: Callable building a provider from its config table
        """
        if not name or not name.strip():
            raise ValueError("Provider name must be non-empty")
        if not callable(factory):
            raise ValueError("Provider factory must be callable")
        self._factories[name.lower().strip()] = factory
        logger.debug(f"Registered source control provider: {name}")

    def create(self, config: Dict[str, Any]) -> SourceControl:
        """Create the provider named by ``config["type"]``.

        Raises:
            ConfigurationError: If the type is missing or unknown
        """
        raw_type = config.get("type")
        if not raw_type or not str(raw_type).strip():
            raise ConfigurationError("source_control.type must be specified", field="source_control.type")
        provider_type = str(raw_type).lower().strip()
        factory = self._factories.get(provider_type)
        if factory is None:
            raise ConfigurationError(
                f"Unknown source control type: {raw_type}. Known types: {', '.join(self.list_types())}",
                field="source_control.type",
            )
        return factory({**config, "type": provider_type})

    def list_types(self) -> List[str]:
        """List all registered provider tags."""
        return sorted(self._factories.keys())


# Global registry instance
_default_registry = SourceControlRegistry()


def get_default_registry() -> SourceControlRegistry:
    """Get the default provider registry instance."""
    return _default_registry


def create_source_control(
    config: Dict[str, Any], registry: Optional[SourceControlRegistry] = None
) -> SourceControl:
    if registry is None:
        registry = _default_registry
    return registry.create(config)
