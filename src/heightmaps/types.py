"""
Type definitions and models for heightmap collections and their providers.
"""

from typing import Any, Dict, List, Optional, Union
from enum import Enum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_LABEL_PREFIX = "elevation"


class CRS(str, Enum):
    """Common Coordinate Reference Systems."""
    EPSG_4326 = "EPSG:4326"
    EPSG_3857 = "EPSG:3857"
    EPSG_32633 = "EPSG:32633"
    EPSG_27700 = "EPSG:27700"

    @classmethod
    def from_epsg(cls, crs: Union[str, int]) -> "CRS":
        """
        Create CRS from EPSG code.

        Args:
            crs: EPSG code as string or integer
             - string: "EPSG:4326"
             - integer: 4326

        Returns:
            CRS enum
        """
        if isinstance(crs, int):
            return cls(f"EPSG:{crs}")
        if crs.upper().startswith("EPSG:"):
            return cls(crs.upper())
        raise ValueError(f"Invalid CRS format: {crs}. Expected string, integer, or CRS enum")


class Format(str, Enum):
    """Supported output formats."""
    GEOTIFF = "image/tiff"
    PNG = "image/png"
    JPEG = "image/jpeg"


class ServiceTypeEnum(str, Enum):
    """Service types a heightmap provider can be backed by."""
    WMTS = "WMTS"
    WCS = "WCS"
    WCPS = "WCPS"
    WCTS = "WCTS"


class HeightmapEntry(BaseModel):
    """One record of a heightmap collection: slot index, label and layer."""

    slot_index: int = Field(..., ge=0, description="Logical number of the layer")
    label: str = Field(..., description="Label derived from the slot index at insertion time")
    payload: Any = Field(..., description="Externally owned layer handle")

    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    @classmethod
    def create(cls, slot_index: int, payload: Any, label_prefix: str = DEFAULT_LABEL_PREFIX) -> "HeightmapEntry":
        """Build an entry whose label is synthesized from ``slot_index``."""
        return cls(slot_index=slot_index, label=f"{label_prefix}{slot_index}", payload=payload)

    def as_triple(self) -> List[Any]:
        """Flattened ``[slot_index, label, payload]`` form."""
        return [self.slot_index, self.label, self.payload]


class CollectionConfig(BaseModel):
    """Behavioural options for a heightmap collection."""

    label_prefix: str = Field(
        default=DEFAULT_LABEL_PREFIX, description="Prefix used to synthesize entry labels"
    )
    renumber_on_insert: bool = Field(
        default=False,
        description="Reset every slot index to its entry position after each insert",
    )
    layer_factory: str = Field(
        default="default", description="Name of the registered layer factory wrapping providers"
    )

    @field_validator("label_prefix")
    @classmethod
    def ensure_label_prefix(cls, value: str) -> str:
        if not value:
            raise ValueError("label_prefix must not be empty")
        return value


class CollectionDescription(BaseModel):
    """Serializable description used to build a heightmap collection."""

    collection_id: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("collection_id", "id"),
        description="Identifier of the collection",
    )
    collection_index: int = Field(
        ...,
        validation_alias=AliasChoices("collection_index", "index"),
        description="Index of the collection among the collections of a map",
    )
    heightmaps: List[Any] = Field(..., description="Initial ordered layers")
    config: CollectionConfig = Field(default_factory=CollectionConfig)

    model_config = ConfigDict(arbitrary_types_allowed=True)


class ProviderConfig(BaseModel):
    """Serializable configuration describing an elevation provider endpoint."""

    url: str = Field(..., description="Base endpoint URL for the service")
    service_type: ServiceTypeEnum = Field(..., description="Type of service backing the provider")
    layer: Optional[str] = Field(None, description="Layer, coverage or process identifier")
    version: Optional[str] = Field(None, description="Protocol version")
    crs: Optional[CRS] = Field(None, description="Preferred coordinate reference system")
    output_format: Optional[Format] = Field(None, description="Preferred data format")
    params: Dict[str, Any] = Field(
        default_factory=dict, description="Additional query parameters to include"
    )

    @field_validator("url")
    @classmethod
    def normalize_url(cls, url: str) -> str:
        url = url.strip().rstrip("/?")
        if not url:
            raise ValueError("url must not be empty")
        return url

    @field_validator("crs", mode="before")
    @classmethod
    def coerce_crs(cls, crs: Any) -> Any:
        if isinstance(crs, (int, str)) and not isinstance(crs, CRS):
            return CRS.from_epsg(crs)
        return crs

    @model_validator(mode="after")
    def ensure_layer(self):
        """WMTS and WCS endpoints need a layer or coverage identifier."""
        if self.service_type in (ServiceTypeEnum.WMTS, ServiceTypeEnum.WCS) and not self.layer:
            raise ValueError(f"layer is required for {self.service_type.value} providers")
        return self
