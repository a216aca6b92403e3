"""Layer handles and the factory registry used to wrap elevation providers."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional, Union

from .errors import ConfigurationError, MissingArgumentError
from .types import ProviderConfig

logger = logging.getLogger(__name__)

__all__ = [
    "HeightmapLayer",
    "LayerFactory",
    "register_layer_factory",
    "get_layer_factory",
    "create_layer",
]

LayerFactory = Callable[[Any], Any]


class HeightmapLayer:
    """Default layer handle wrapping a terrain or imagery provider.

    Handles are compared by identity, so two layers over the same provider are
    distinct entries in a collection.
    """

    def __init__(
        self,
        provider: Any,
        *,
        show: bool = True,
        alpha: float = 1.0,
    ) -> None:
        if provider is None:
            raise MissingArgumentError("provider is required.")
        if not 0.0 <= alpha <= 1.0:
            raise ConfigurationError(f"alpha must be between 0 and 1, got {alpha}")
        self.provider = provider
        self.show = show
        self.alpha = alpha

    @property
    def config(self) -> Optional[ProviderConfig]:
        """Provider configuration, when the provider is described by one."""
        if isinstance(self.provider, ProviderConfig):
            return self.provider
        return None

    @classmethod
    def from_config(cls, config: Union[ProviderConfig, Dict[str, Any]], **options: Any) -> "HeightmapLayer":
        """Build a layer from a provider configuration or its mapping form."""

        if not isinstance(config, ProviderConfig):
            config = ProviderConfig.model_validate(config)
        return cls(config, **options)

    def __repr__(self) -> str:
        config = self.config
        if config is not None:
            return f"HeightmapLayer({config.service_type.value} {config.url!r}, show={self.show})"
        return f"HeightmapLayer({self.provider!r}, show={self.show})"


# ----------------------------------------------------------------------
# Layer factory registry
# ----------------------------------------------------------------------

_FACTORY_REGISTRY: Dict[str, LayerFactory] = {}


def register_layer_factory(name: str):
    """Decorator for registering a callable that wraps a provider in a handle."""

    def decorator(factory: LayerFactory) -> LayerFactory:
        _FACTORY_REGISTRY[name] = factory
        return factory

    return decorator


@register_layer_factory("default")
def _default_factory(provider: Any) -> HeightmapLayer:
    if isinstance(provider, dict):
        return HeightmapLayer.from_config(provider)
    return HeightmapLayer(provider)


def get_layer_factory(name: str) -> LayerFactory:
    """Look up a registered layer factory by name."""

    try:
        return _FACTORY_REGISTRY[name]
    except KeyError as exc:
        raise ConfigurationError(f"No layer factory registered under '{name}'", cause=exc) from exc


def create_layer(provider: Any, factory: Union[str, LayerFactory, None] = None) -> Any:
    """Wrap ``provider`` in a layer handle.

    Args:
        provider: Terrain provider, provider configuration or its mapping form
        factory: Registered factory name or callable (default: ``"default"``)

    Returns:
        The handle produced by the factory
    """
    if provider is None:
        raise MissingArgumentError("provider is required.")

    if factory is None or isinstance(factory, str):
        factory = get_layer_factory(factory or "default")

    layer = factory(provider)
    if layer is None:
        raise ConfigurationError("layer factory returned no layer")
    logger.debug("Created layer %r", layer)
    return layer
