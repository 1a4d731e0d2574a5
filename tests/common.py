"""Helpers shared by the Rain Bird Local tests."""
from unittest.mock import AsyncMock, MagicMock

from custom_components.rainbird_local.capabilities import RainbirdCapabilities
from custom_components.rainbird_local.controller import RainbirdControllerHandler
from custom_components.rainbird_local.exceptions import CommandError
from custom_components.rainbird_local.models import RuntimeState

ZONES = [
    {"index": 1, "name": "Front lawn"},
    {"index": 2, "name": "Back lawn"},
    {"index": 4, "name": "Vegetables"},
]


class FakeClock:
    """Settable wall clock."""

    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


class FakeClient:
    """In-memory hub with the client's reader/command surface."""

    def __init__(self, zones=(1, 2, 3, 4, 9)):
        self.zones = list(zones)
        self.active = set()
        self.remaining = {}
        self.rain = False
        self.calls = []
        self.fail = set()
        self._listeners = []

    def add_status_listener(self, listener):
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def notify(self):
        for listener in list(self._listeners):
            listener()

    def set_running(self, zone, remaining=None):
        self.active = {zone}
        self.remaining = {zone: remaining} if remaining is not None else {}

    def set_idle(self):
        self.active = set()
        self.remaining = {}

    def is_in_use(self, zone=None):
        if zone is None:
            return bool(self.active)
        return zone in self.active

    def remaining_duration(self, zone):
        return self.remaining.get(zone)

    @property
    def rain_set_point_reached(self):
        return self.rain

    async def async_activate_zone(self, zone, seconds):
        self._record("activate", zone, seconds)

    async def async_deactivate_zone(self, zone):
        self._record("deactivate", zone)

    async def async_deactivate_all_zones(self):
        self._record("deactivate_all")

    async def async_stop_irrigation(self):
        self._record("stop_irrigation")

    def _record(self, name, *args):
        self.calls.append((name, *args))
        if name in self.fail:
            raise CommandError(f"{name} rejected")


def make_handler(hass, client, clock, enable_queueing=False, default_minutes=10, entry_id="entry1"):
    state = RuntimeState.from_settings(ZONES, enable_queueing=enable_queueing, default_minutes=default_minutes)
    capabilities = RainbirdCapabilities(hass, entry_id)
    handler = RainbirdControllerHandler(hass, client, capabilities, state, clock=clock)
    handler.coordinator = MagicMock()
    handler.coordinator.async_request_refresh = AsyncMock()
    return handler


def fired(hass):
    """Trigger types fired on the event bus, in order."""
    return [c.args[1]["type"] for c in hass.bus.async_fire.call_args_list]
