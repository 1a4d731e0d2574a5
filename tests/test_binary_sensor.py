"""Tests for the Rain Bird binary sensors."""
from types import SimpleNamespace

from custom_components.rainbird_local.binary_sensor import RainbirdIrrigatingBinarySensor
from custom_components.rainbird_local.models import StatusSnapshot


def make_sensor(handler):
    entry = SimpleNamespace(unique_id="rainbird_10.0.0.2", entry_id="entry1", title="Garden")
    data = {"handler": handler, "capabilities": handler.capabilities, "model": "ESP-TM2"}
    return RainbirdIrrigatingBinarySensor(entry, data)


def test_irrigating_follows_hub(handler, client):
    sensor = make_sensor(handler)
    assert sensor.is_on is False

    client.set_running(2, 300)
    handler.reconcile(handler.pull_snapshot())
    assert sensor.is_on is True
    assert handler.capabilities.get(sensor.capability) is True

    client.set_idle()
    handler.reconcile(StatusSnapshot())
    assert sensor.is_on is False


def test_irrigating_unique_id(handler):
    assert make_sensor(handler).unique_id == "rainbird_10.0.0.2_is_active"
