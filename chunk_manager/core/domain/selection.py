"""Hierarchical bucket selection state.

The selection set (bucket key -> identity) is the single source of truth.
Group-level and dataset-level selection states are derived on demand from
it, never stored as separate flags.
"""

# pylint: disable=missing-function-docstring
from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Iterator, Mapping

from chunk_manager.core.domain.dataset import total_bucket_count
from chunk_manager.core.domain.identity import as_chunk_date
from chunk_manager.core.domain.types import ChunkDataset, ChunkDate, SelectionSummary
from chunk_manager.core.events.events import SelectionChangedEvent

if TYPE_CHECKING:
    from chunk_manager.core.domain.types import Bucket, ChunkGroup
    from chunk_manager.core.events.event_bus import EventBus


class UnknownBucketError(ValueError):
    """Raised when a caller tries to select a bucket outside the current dataset."""


class SelectionModel:
    """Selection over the buckets of one dataset.

    Lookups by hour or identity that match nothing return False or do nothing.
    Toggling a bucket that is not in the dataset is a caller error.
    """

    def __init__(self, event_bus: EventBus, dataset: ChunkDataset | None = None) -> None:
        self._event_bus = event_bus

        self.dataset: ChunkDataset | None = None
        # Insertion-ordered: the order is used for "selected items" listings.
        self._selected: dict[str, ChunkDate] = {}
        self._bucket_keys: frozenset[str] = frozenset()

        if dataset is not None:
            self.load_dataset(dataset)

    # ---- Dataset ----
    def load_dataset(self, dataset: ChunkDataset) -> None:
        """Install a dataset. Any previous selection is dropped."""
        self.dataset = dataset
        self._bucket_keys = frozenset(bucket.date.key for bucket in dataset.iter_buckets())
        self._selected.clear()
        self._emit("reset", None)

    @property
    def groups(self) -> tuple[ChunkGroup, ...]:
        return () if self.dataset is None else self.dataset.groups

    @property
    def total_bucket_count(self) -> int:
        return 0 if self.dataset is None else total_bucket_count(self.dataset)

    def find_group(self, hour: int) -> ChunkGroup | None:
        for group in self.groups:
            if group.date.hour == hour:
                return group
        return None

    def _iter_buckets(self) -> Iterator[Bucket]:
        for group in self.groups:
            yield from group.buckets

    # ---- Buckets ----
    def toggle_bucket(self, date: ChunkDate | dict[str, Any]) -> None:
        chunk_date = as_chunk_date(date)
        key = chunk_date.key

        if key in self._selected:
            del self._selected[key]
        else:
            if key not in self._bucket_keys:
                raise UnknownBucketError(f"bucket {key} is not part of the current dataset")
            self._selected[key] = chunk_date

        self._emit("toggle_bucket", key)

    def is_bucket_selected(self, date: ChunkDate | dict[str, Any]) -> bool:
        return as_chunk_date(date).key in self._selected

    # ---- Groups ----
    def _selected_in_group(self, group: ChunkGroup) -> int:
        return sum(1 for bucket in group.buckets if bucket.date.key in self._selected)

    def toggle_group(self, hour: int) -> None:
        """Select every bucket of the hour, or deselect all if all were selected."""
        group = self.find_group(hour)
        if group is None:
            return

        if self._selected_in_group(group) == len(group.buckets):
            for bucket in group.buckets:
                self._selected.pop(bucket.date.key, None)
        else:
            for bucket in group.buckets:
                if bucket.date.key not in self._selected:
                    self._selected[bucket.date.key] = bucket.date

        self._emit("toggle_group", group.date.key)

    def is_group_fully_selected(self, hour: int) -> bool:
        # An empty group is vacuously fully selected.
        group = self.find_group(hour)
        if group is None:
            return False
        return self._selected_in_group(group) == len(group.buckets)

    def is_group_partially_selected(self, hour: int) -> bool:
        group = self.find_group(hour)
        if group is None:
            return False
        selected = self._selected_in_group(group)
        return 0 < selected < len(group.buckets)

    # ---- Whole dataset ----
    def is_all_selected(self) -> bool:
        if self.dataset is None:
            return False
        # Cardinality is sufficient: membership is restricted to dataset keys
        # and load_dataset() clears the selection.
        return len(self._selected) == self.total_bucket_count

    def toggle_all(self) -> None:
        if self.dataset is None:
            return

        if self.is_all_selected():
            self._selected.clear()
        else:
            self._selected.clear()
            for bucket in self._iter_buckets():
                self._selected[bucket.date.key] = bucket.date

        self._emit("toggle_all", None)

    def clear_selection(self) -> None:
        self._selected.clear()
        self._emit("clear", None)

    # ---- Derived views ----
    @property
    def selected(self) -> Mapping[str, ChunkDate]:
        """Read-only view of the selection (bucket key -> identity)."""
        return MappingProxyType(self._selected)

    @property
    def selected_count(self) -> int:
        return len(self._selected)

    @property
    def selected_dates(self) -> list[ChunkDate]:
        """Selected identities in selection order."""
        return list(self._selected.values())

    def selection_summary(self) -> SelectionSummary:
        total_size = 0
        total_records = 0
        for bucket in self._iter_buckets():
            if bucket.date.key in self._selected:
                total_size += bucket.size_on_disk
                total_records += bucket.data_count

        return SelectionSummary(
            count=len(self._selected),
            total_size=total_size,
            total_records=total_records,
        )

    def _emit(self, action: str, target: str | None) -> None:
        self._event_bus.emit(
            SelectionChangedEvent(
                action=action,
                target=target,
                selected_count=len(self._selected),
            )
        )
