"""heightmaps - ordered collections of elevation layers for globe viewers."""

from ._version import __version__

from .api import collection_from_config, create_collection, default_config
from .collection import ENTRY_WIDTH, HeightmapCollection
from .errors import (
    ConfigurationError,
    DuplicatePayloadError,
    EmptyCollectionError,
    HeightmapError,
    MisalignedIndexError,
    MissingArgumentError,
    NegativeIndexError,
    OutOfRangeError,
)
from .events import Event
from .layers import HeightmapLayer, create_layer, get_layer_factory, register_layer_factory
from .types import (
    CRS,
    CollectionConfig,
    CollectionDescription,
    Format,
    HeightmapEntry,
    ProviderConfig,
    ServiceTypeEnum,
)

__all__ = [
    "__version__",
    "collection_from_config",
    "create_collection",
    "default_config",
    "ENTRY_WIDTH",
    "HeightmapCollection",
    "ConfigurationError",
    "DuplicatePayloadError",
    "EmptyCollectionError",
    "HeightmapError",
    "MisalignedIndexError",
    "MissingArgumentError",
    "NegativeIndexError",
    "OutOfRangeError",
    "Event",
    "HeightmapLayer",
    "create_layer",
    "get_layer_factory",
    "register_layer_factory",
    "CRS",
    "CollectionConfig",
    "CollectionDescription",
    "Format",
    "HeightmapEntry",
    "ProviderConfig",
    "ServiceTypeEnum",
]
