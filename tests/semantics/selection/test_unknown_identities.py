"""
Semantic test: selection only references buckets of the current dataset.

Invariant:
Toggling an identity that is not a bucket of the loaded dataset is a caller
error. Membership queries for unknown identities answer False. Loading a new
dataset drops the previous selection, so no stale identity can survive.
"""

from __future__ import annotations

import pytest

from chunk_manager.core.domain.selection import SelectionModel, UnknownBucketError
from chunk_manager.core.domain.types import ChunkDate
from chunk_manager.core.events.events import SelectionChangedEvent
from chunk_manager.core.events.event_bus import EventBus
from chunk_manager.core.events.sinks.null_event_bus import NullEventBus, RecordingSink


def test_toggle_unknown_bucket_raises(scenario_dataset) -> None:
    selection = SelectionModel(event_bus=NullEventBus(), dataset=scenario_dataset)
    foreign = ChunkDate(year=2024, month=3, day=5, hour=0, minute=59)

    with pytest.raises(UnknownBucketError):
        selection.toggle_bucket(foreign)
    assert selection.selected_count == 0
    assert selection.is_bucket_selected(foreign) is False


def test_toggle_group_level_identity_raises(scenario_dataset) -> None:
    selection = SelectionModel(event_bus=NullEventBus(), dataset=scenario_dataset)

    with pytest.raises(UnknownBucketError):
        selection.toggle_bucket(ChunkDate(year=2024, month=3, day=5, hour=0))


def test_toggle_without_dataset_raises() -> None:
    selection = SelectionModel(event_bus=NullEventBus())
    with pytest.raises(UnknownBucketError):
        selection.toggle_bucket({"year": 2024, "month": 3, "day": 5, "hour": 0, "minute": 0})


def test_reload_clears_selection(scenario_dataset, generated_dataset) -> None:
    selection = SelectionModel(event_bus=NullEventBus(), dataset=scenario_dataset)
    selection.toggle_all()
    assert selection.is_all_selected()

    selection.load_dataset(generated_dataset)
    assert selection.selected_count == 0
    assert not selection.is_all_selected()


def test_mutations_emit_selection_events(scenario_dataset) -> None:
    sink = RecordingSink()
    selection = SelectionModel(event_bus=EventBus(sinks=[sink]), dataset=scenario_dataset)

    selection.toggle_group(0)
    selection.toggle_bucket(scenario_dataset.groups[1].buckets[0].date)
    selection.clear_selection()

    events = sink.of_type(SelectionChangedEvent)
    assert [e.action for e in events] == ["reset", "toggle_group", "toggle_bucket", "clear"]
    assert [e.selected_count for e in events] == [0, 2, 3, 0]
