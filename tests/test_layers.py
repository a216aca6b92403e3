"""
Tests for heightmaps.layers module.
"""

import pytest

import heightmaps.layers as layers_module
from heightmaps import (
    ConfigurationError,
    HeightmapLayer,
    MissingArgumentError,
    ProviderConfig,
    ServiceTypeEnum,
    create_layer,
    get_layer_factory,
    register_layer_factory,
)


@pytest.fixture(autouse=True)
def preserve_factory_registry():
    original = dict(layers_module._FACTORY_REGISTRY)
    try:
        yield
    finally:
        layers_module._FACTORY_REGISTRY = original


def test_layers_over_the_same_provider_are_distinct(fake_provider):
    first = HeightmapLayer(fake_provider)
    second = HeightmapLayer(fake_provider)

    assert first is not second
    assert first != second
    assert first.provider is second.provider


def test_layer_requires_provider():
    with pytest.raises(MissingArgumentError):
        HeightmapLayer(None)


def test_layer_alpha_range(fake_provider):
    with pytest.raises(ConfigurationError):
        HeightmapLayer(fake_provider, alpha=1.5)


def test_layer_from_config_mapping():
    layer = HeightmapLayer.from_config(
        {"url": "http://example.com/wcs?", "service_type": "WCS", "layer": "dem"}
    )

    assert isinstance(layer.config, ProviderConfig)
    assert layer.config.url == "http://example.com/wcs"
    assert layer.config.service_type is ServiceTypeEnum.WCS
    assert "WCS" in repr(layer)


def test_layer_without_config(fake_provider):
    assert HeightmapLayer(fake_provider).config is None


def test_create_layer_uses_default_factory(fake_provider):
    layer = create_layer(fake_provider)
    assert isinstance(layer, HeightmapLayer)
    assert layer.provider is fake_provider


def test_create_layer_with_registered_factory(fake_provider):
    @register_layer_factory("hidden")
    def hidden_layer(provider):
        return HeightmapLayer(provider, show=False)

    layer = create_layer(fake_provider, "hidden")

    assert get_layer_factory("hidden") is hidden_layer
    assert layer.show is False


def test_create_layer_with_callable(fake_provider):
    sentinel = object()
    assert create_layer(fake_provider, lambda provider: sentinel) is sentinel


def test_create_layer_rejects_empty_factory_result(fake_provider):
    with pytest.raises(ConfigurationError):
        create_layer(fake_provider, lambda provider: None)


def test_create_layer_requires_provider():
    with pytest.raises(MissingArgumentError):
        create_layer(None)


def test_unknown_factory():
    with pytest.raises(ConfigurationError) as excinfo:
        get_layer_factory("nope")
    assert isinstance(excinfo.value.cause, KeyError)
