"""
High-level user-friendly API for heightmaps.

These helpers build collections without requiring knowledge of the
underlying Pydantic models.
"""

from typing import Any, Dict, Iterable, Union

from .collection import HeightmapCollection
from .types import CollectionConfig, CollectionDescription


def create_collection(
    collection_id: str,
    collection_index: int,
    heightmaps: Iterable[Any] = (),
    **config: Any,
) -> HeightmapCollection:
    """
    Create a heightmap collection.

    Args:
        collection_id: Identifier of the collection
        collection_index: Index of the collection on the map
        heightmaps: Initial ordered layers (default: none)
        **config: :class:`CollectionConfig` options such as ``label_prefix``
            or ``renumber_on_insert``

    Returns:
        HeightmapCollection object

    Raises:
        ConfigurationError: If a required value is missing or a config option is invalid
    """
    return HeightmapCollection(
        collection_id,
        collection_index,
        list(heightmaps) if heightmaps is not None else None,
        config=config or None,
    )


def collection_from_config(
    description: Union[CollectionDescription, Dict[str, Any]],
) -> HeightmapCollection:
    """
    Create a heightmap collection from a description.

    Args:
        description: ``CollectionDescription`` or mapping with ``id``/``collection_id``,
            ``index``/``collection_index``, ``heightmaps`` and optional ``config``

    Returns:
        HeightmapCollection object
    """
    return HeightmapCollection.from_description(description)


def default_config() -> CollectionConfig:
    """Return the configuration collections use when none is given."""
    return CollectionConfig()
