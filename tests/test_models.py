"""Tests for the Rain Bird Local data models."""
from custom_components.rainbird_local.models import RuntimeState, StatusSnapshot, Zone


def test_snapshot_drops_zone_when_not_in_use():
    snapshot = StatusSnapshot(in_use=False, active_zone_id=3, remaining_seconds=20)
    assert snapshot.active_zone_id is None
    assert snapshot.remaining_seconds is None


def test_snapshot_drops_remaining_without_zone():
    snapshot = StatusSnapshot(in_use=True, remaining_seconds=20)
    assert snapshot.remaining_seconds is None


def test_runtime_state_from_settings():
    state = RuntimeState.from_settings(
        [{"index": "2", "name": "Back"}, Zone(5, "Side")], enable_queueing=True, default_minutes=5
    )
    assert state.known_zones == (Zone(2, "Back"), Zone(5, "Side"))
    assert state.default_duration == 300
    assert state.enable_queueing
    assert state.find_zone(5).name == "Side"
    assert state.find_zone(9) is None


def test_zone_round_trip():
    assert Zone.from_dict(Zone(1, "Front").as_dict()) == Zone(1, "Front")
