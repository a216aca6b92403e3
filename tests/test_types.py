"""
Tests for heightmaps.types module.

Tests Pydantic models and enums.
"""

import pytest
from pydantic import ValidationError

from heightmaps.types import (
    CRS,
    CollectionConfig,
    CollectionDescription,
    Format,
    HeightmapEntry,
    ProviderConfig,
    ServiceTypeEnum,
)


class TestTypes:
    """Test type definitions and models."""

    def test_crs_from_epsg(self):
        assert CRS.from_epsg(4326) is CRS.EPSG_4326
        assert CRS.from_epsg("epsg:3857") is CRS.EPSG_3857
        with pytest.raises(ValueError):
            CRS.from_epsg("WGS84")

    def test_service_types(self):
        assert [member.value for member in ServiceTypeEnum] == ["WMTS", "WCS", "WCPS", "WCTS"]

    def test_entry_label_synthesis(self):
        payload = object()
        entry = HeightmapEntry.create(4, payload)

        assert entry.label == "elevation4"
        assert entry.payload is payload
        assert entry.as_triple() == [4, "elevation4", payload]

    def test_entry_rejects_negative_slot_index(self):
        with pytest.raises(ValidationError):
            HeightmapEntry(slot_index=-1, label="elevation-1", payload=object())

    def test_entry_assignment_is_validated(self):
        entry = HeightmapEntry.create(1, object())
        with pytest.raises(ValidationError):
            entry.slot_index = -1
        assert entry.slot_index == 1

    def test_collection_config_defaults(self):
        config = CollectionConfig()
        assert config.label_prefix == "elevation"
        assert config.renumber_on_insert is False
        assert config.layer_factory == "default"

    def test_description_field_names_and_aliases(self):
        by_alias = CollectionDescription.model_validate({"id": "c", "index": 0, "heightmaps": []})
        by_name = CollectionDescription(collection_id="c", collection_index=0, heightmaps=[])
        assert by_alias.collection_id == by_name.collection_id == "c"
        assert by_alias.collection_index == 0

    def test_description_requires_identifier(self):
        with pytest.raises(ValidationError):
            CollectionDescription.model_validate({"id": "", "index": 0, "heightmaps": []})

    def test_provider_config_coerces_crs(self):
        config = ProviderConfig(
            url="http://example.com/wmts/",
            service_type=ServiceTypeEnum.WMTS,
            layer="elevation",
            crs=3857,
            output_format=Format.PNG,
        )

        assert config.url == "http://example.com/wmts"
        assert config.crs is CRS.EPSG_3857
        assert config.params == {}

    def test_provider_config_requires_layer_for_wmts(self):
        with pytest.raises(ValidationError, match="layer is required"):
            ProviderConfig(url="http://example.com/wmts", service_type="WMTS")

    def test_provider_config_wcps_without_layer(self):
        config = ProviderConfig(url="http://example.com/wcps", service_type="WCPS")
        assert config.layer is None

    def test_provider_config_rejects_empty_url(self):
        with pytest.raises(ValidationError):
            ProviderConfig(url=" / ", service_type="WCTS")
