"""
Ordered collection of heightmap layers addressed by slot index and position.

Entries are kept as a list of :class:`~heightmaps.types.HeightmapEntry`
records. The public API still speaks in *physical positions*: entry ``k``
covers positions ``3k``, ``3k + 1`` and ``3k + 2`` of the flattened
``[slot_index, label, layer, ...]`` view exposed by
:attr:`HeightmapCollection.heightmaps`.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Tuple, Union

from pydantic import ValidationError

from .errors import (
    ConfigurationError,
    DuplicatePayloadError,
    EmptyCollectionError,
    MisalignedIndexError,
    MissingArgumentError,
    NegativeIndexError,
    OutOfRangeError,
)
from .events import Event
from .layers import create_layer
from .types import CollectionConfig, CollectionDescription, HeightmapEntry

logger = logging.getLogger(__name__)

__all__ = ["HeightmapCollection", "ENTRY_WIDTH"]

# Number of physical positions covered by one entry.
ENTRY_WIDTH = 3


class HeightmapCollection:
    """A collection of heightmap layers shown on the same map.

    Each entry associates a slot index (the logical number of the layer), a
    label synthesized from that number when the entry is created, and an
    externally owned layer handle. Slot indices of existing entries are not
    rewritten when later inserts shift them, unless the collection is
    configured with ``renumber_on_insert``.

    Args:
        collection_id: Identifier of the collection
        collection_index: Index of the collection among those of a map
        heightmaps: Initial ordered layers, numbered ``0..n-1``
        config: Optional :class:`CollectionConfig` or its mapping form

    Raises:
        ConfigurationError: If identifier, index or initial layers are absent
        DuplicatePayloadError: If the initial layers repeat a layer
    """

    def __init__(
        self,
        collection_id: str,
        collection_index: int,
        heightmaps: Optional[Iterable[Any]],
        config: Union[CollectionConfig, Dict[str, Any], None] = None,
    ) -> None:
        if not collection_id:
            raise ConfigurationError("collection_id is required.")
        if collection_index is None:
            raise ConfigurationError("collection_index is required.")
        if heightmaps is None:
            raise ConfigurationError("heightmaps is required.")

        if config is None:
            config = CollectionConfig()
        elif not isinstance(config, CollectionConfig):
            try:
                config = CollectionConfig.model_validate(config)
            except ValidationError as exc:
                raise ConfigurationError(f"Invalid collection config: {exc}", cause=exc) from exc

        self._collection_id = collection_id
        self._collection_index = collection_index
        self._config = config

        self.heightmap_added = Event()
        self.heightmap_removed = Event()

        self._entries: List[HeightmapEntry] = []
        for slot_index, layer in enumerate(heightmaps):
            if layer is None:
                raise MissingArgumentError(f"heightmaps[{slot_index}] is not a layer.")
            self._ensure_absent(layer)
            self._entries.append(self._make_entry(slot_index, layer))

        logger.debug(
            "Created heightmap collection '%s' (index %s) with %d layer(s)",
            collection_id,
            collection_index,
            len(self._entries),
        )

    @classmethod
    def from_description(
        cls, description: Union[CollectionDescription, Dict[str, Any]]
    ) -> "HeightmapCollection":
        """Build a collection from a :class:`CollectionDescription` or mapping.

        Mappings may use the short keys ``id`` and ``index``.
        """

        if not isinstance(description, CollectionDescription):
            try:
                description = CollectionDescription.model_validate(description)
            except ValidationError as exc:
                raise ConfigurationError(f"Invalid collection description: {exc}", cause=exc) from exc

        return cls(
            description.collection_id,
            description.collection_index,
            description.heightmaps,
            config=description.config,
        )

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------
    @property
    def collection_id(self) -> str:
        return self._collection_id

    @property
    def collection_index(self) -> int:
        return self._collection_index

    @property
    def config(self) -> CollectionConfig:
        return self._config

    @property
    def entries(self) -> Tuple[HeightmapEntry, ...]:
        """Copies of the entries in physical order."""
        return tuple(entry.model_copy() for entry in self._entries)

    @property
    def heightmaps(self) -> List[Any]:
        """Flattened ``[slot_index, label, layer, ...]`` copy of the entries."""
        flat: List[Any] = []
        for entry in self._entries:
            flat.extend(entry.as_triple())
        return flat

    @property
    def layers(self) -> List[Any]:
        """Layer handles in physical order."""
        return [entry.payload for entry in self._entries]

    @property
    def physical_length(self) -> int:
        """Length of the flattened view, three positions per entry."""
        return len(self._entries) * ENTRY_WIDTH

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[HeightmapEntry]:
        return iter(self.entries)

    def __contains__(self, layer: object) -> bool:
        return self._find_last(layer) is not None

    def __repr__(self) -> str:
        return (
            f"HeightmapCollection(collection_id={self._collection_id!r}, "
            f"collection_index={self._collection_index!r}, size={len(self._entries)})"
        )

    # ------------------------------------------------------------------
    # Insertion
    # ------------------------------------------------------------------
    def insert_at_position(self, layer: Any, position: int) -> HeightmapEntry:
        """Insert ``layer`` so that a new entry begins at ``position``.

        A position inside an entry is moved to an entry boundary: the second
        field of an entry inserts before that entry, the third field inserts
        before the following entry. Positions at or past the end append.
        The slot index of the new entry is its entry position; entries that
        shift keep their own slot index and label.

        Raises:
            MissingArgumentError: If ``layer`` or ``position`` is missing
            DuplicatePayloadError: If ``layer`` is already in the collection
            OutOfRangeError: If ``position`` is zero or negative on a
                non-empty collection
        """
        if position is None:
            raise MissingArgumentError("a position is required.")
        if layer is None:
            raise MissingArgumentError("a layer to add is required.")
        self._ensure_absent(layer)

        length = self.physical_length
        if position >= length:
            entry_position = len(self._entries)
        elif 0 < position < length:
            offset = position % ENTRY_WIDTH
            if offset == 2:
                start = position + 1
            else:
                start = position - offset
            entry_position = start // ENTRY_WIDTH
        else:
            raise OutOfRangeError(f"position must be between 0 and {length}, got {position}")

        entry = self._make_entry(entry_position, layer)
        self._insert(entry_position, entry)
        self.heightmap_added.raise_event(layer, position)
        return entry.model_copy()

    def insert_by_slot_index(self, layer: Any, slot_index: int) -> HeightmapEntry:
        """Insert ``layer`` under the logical number ``slot_index``.

        A slot index below the entry count inserts at that entry position.
        Otherwise the entry is appended and keeps ``slot_index`` verbatim, so
        numbering may become sparse.

        Raises:
            MissingArgumentError: If ``layer`` or ``slot_index`` is missing
            DuplicatePayloadError: If ``layer`` is already in the collection
            OutOfRangeError: If ``slot_index`` is negative
        """
        if layer is None:
            raise MissingArgumentError("a layer to add is required.")
        if slot_index is None:
            raise MissingArgumentError("a slot index is required.")
        self._ensure_absent(layer)

        count = len(self._entries)
        if slot_index >= count:
            entry_position = count
        elif slot_index >= 0:
            entry_position = slot_index
        else:
            raise OutOfRangeError(f"slot index must be between 0 and {count}, got {slot_index}")

        entry = self._make_entry(slot_index, layer)
        self._insert(entry_position, entry)
        self.heightmap_added.raise_event(layer, slot_index)
        return entry.model_copy()

    def append(self, layer: Any) -> HeightmapEntry:
        """Append ``layer`` with the next sequential slot index."""

        if layer is None:
            raise MissingArgumentError("the layer is required.")
        self._ensure_absent(layer)

        entry_position = len(self._entries)
        entry = self._make_entry(entry_position, layer)
        self._insert(entry_position, entry)
        self.heightmap_added.raise_event(layer)
        return entry.model_copy()

    def add_terrain_provider(self, provider: Any, slot_index: int) -> Any:
        """Wrap ``provider`` in a layer and insert it under ``slot_index``.

        Returns:
            The newly created layer handle
        """
        if provider is None:
            raise MissingArgumentError("provider is required.")
        if slot_index is None:
            raise MissingArgumentError("a slot index is required.")
        if slot_index < 0:
            raise NegativeIndexError("the slot index must be positive.")
        count = len(self._entries)
        if slot_index > count:
            raise OutOfRangeError(f"the slot index cannot be greater than {count}")

        layer = create_layer(provider, self._config.layer_factory)
        self.insert_by_slot_index(layer, slot_index)
        return layer

    def add_terrain(self, provider: Any) -> Any:
        """Wrap ``provider`` in a layer and append it.

        Returns:
            The newly created layer handle
        """
        if provider is None:
            raise MissingArgumentError("provider is required.")

        layer = create_layer(provider, self._config.layer_factory)
        self.append(layer)
        return layer

    # ------------------------------------------------------------------
    # Removal and selection
    # ------------------------------------------------------------------
    def remove_at_position(self, position: int) -> HeightmapEntry:
        """Remove the entry starting at physical ``position``.

        Raises:
            MissingArgumentError: If ``position`` is missing
            EmptyCollectionError: If the collection is empty
            NegativeIndexError: If ``position`` is negative
            OutOfRangeError: If ``position`` is past the last entry
            MisalignedIndexError: If ``position`` is not an entry boundary
        """
        if position is None:
            raise MissingArgumentError("a position is required.")
        length = self.physical_length
        if length <= 0:
            raise EmptyCollectionError("the collection is empty.")
        if position < 0:
            raise NegativeIndexError("the position must be positive.")
        if position >= length:
            raise OutOfRangeError(f"the position must be lower than {length}, got {position}")
        if position % ENTRY_WIDTH != 0:
            raise MisalignedIndexError(f"position {position} does not start an entry.")

        entry = self._entries.pop(position // ENTRY_WIDTH)
        logger.debug("Removed %s from '%s' at position %d", entry.label, self._collection_id, position)
        self.heightmap_removed.raise_event(position)
        return entry.model_copy()

    def remove_by_payload(self, layer: Any) -> int:
        """Remove every entry holding ``layer``, scanning from the end.

        Returns:
            Number of entries removed
        """
        if layer is None:
            raise MissingArgumentError("the layer is required.")

        return self._remove_matching(lambda entry: entry.payload is layer)

    def select_by_slot_index(self, slot_index: int) -> int:
        """Keep only the entries numbered ``slot_index`` and remove the others.

        Returns:
            Number of entries removed
        """
        if slot_index is None:
            raise MissingArgumentError("a slot index is required.")
        if slot_index < 0:
            raise NegativeIndexError("the slot index must be positive.")
        if not self._entries:
            return 0
        bound = max(self.physical_length, self._highest_slot_index())
        if slot_index > bound:
            raise OutOfRangeError(f"the slot index must be between 0 and {bound}")

        return self._retain(lambda entry: entry.slot_index == slot_index)

    def select_by_label(self, label: str) -> int:
        """Keep only the entries labelled ``label`` and remove the others.

        Returns:
            Number of entries removed
        """
        if label is None:
            raise MissingArgumentError("a label is required.")

        return self._retain(lambda entry: entry.label == label)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------
    def get_payload_by_slot_index(self, slot_index: int) -> Optional[Any]:
        """Layer numbered ``slot_index``, or ``None``.

        When several entries share the slot index, the one furthest from the
        start wins.
        """
        if slot_index is None:
            raise MissingArgumentError("a slot index is required.")
        if slot_index < 0:
            raise NegativeIndexError("the slot index must be positive.")
        bound = max(len(self._entries), self._highest_slot_index())
        if slot_index > bound:
            raise OutOfRangeError(f"the slot index cannot be greater than {bound}")

        for entry in reversed(self._entries):
            if entry.slot_index == slot_index:
                return entry.payload
        return None

    def get_slot_index_by_payload(self, layer: Any) -> Optional[int]:
        """Slot index of ``layer``, or ``None`` when it is not held."""

        if layer is None:
            raise MissingArgumentError("a layer is required.")

        entry_position = self._find_last(layer)
        if entry_position is None:
            return None
        return self._entries[entry_position].slot_index

    def position_of(self, layer: Any) -> Optional[int]:
        """Physical position of the entry holding ``layer``, or ``None``."""

        if layer is None:
            raise MissingArgumentError("a layer is required.")

        entry_position = self._find_last(layer)
        if entry_position is None:
            return None
        return entry_position * ENTRY_WIDTH

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _make_entry(self, slot_index: int, layer: Any) -> HeightmapEntry:
        return HeightmapEntry.create(slot_index, layer, label_prefix=self._config.label_prefix)

    def _find_last(self, layer: object) -> Optional[int]:
        for entry_position in reversed(range(len(self._entries))):
            if self._entries[entry_position].payload is layer:
                return entry_position
        return None

    def _highest_slot_index(self) -> int:
        return max((entry.slot_index for entry in self._entries), default=0)

    def _ensure_absent(self, layer: Any) -> None:
        if self._find_last(layer) is not None:
            raise DuplicatePayloadError("the layer already exists in the collection.")

    def _insert(self, entry_position: int, entry: HeightmapEntry) -> None:
        self._entries.insert(entry_position, entry)
        if self._config.renumber_on_insert:
            self._renumber()
        logger.debug(
            "Inserted %s into '%s' at position %d",
            entry.label,
            self._collection_id,
            entry_position * ENTRY_WIDTH,
        )

    def _renumber(self) -> None:
        prefix = self._config.label_prefix
        for entry_position, entry in enumerate(self._entries):
            entry.slot_index = entry_position
            entry.label = f"{prefix}{entry_position}"

    def _position_of_entry(self, entry: HeightmapEntry) -> Optional[int]:
        for entry_position, held in enumerate(self._entries):
            if held is entry:
                return entry_position
        return None

    def _remove_matching(self, matches: Callable[[HeightmapEntry], bool]) -> int:
        # Listeners of heightmap_removed may edit the collection mid-loop.
        removed = 0
        for entry in reversed(tuple(self._entries)):
            if not matches(entry):
                continue
            entry_position = self._position_of_entry(entry)
            if entry_position is None:
                continue
            self.remove_at_position(entry_position * ENTRY_WIDTH)
            removed += 1
        return removed

    def _retain(self, keep: Callable[[HeightmapEntry], bool]) -> int:
        removed = self._remove_matching(lambda entry: not keep(entry))
        if removed:
            logger.debug("Kept %d layer(s) of '%s'", len(self._entries), self._collection_id)
        return removed
