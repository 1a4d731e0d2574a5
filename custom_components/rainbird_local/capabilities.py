"""Published device state and device events for Rain Bird Local."""
from __future__ import annotations

import logging
from typing import Any, Callable

from homeassistant.core import HomeAssistant, callback

from .const import (
    CAP_ACTIVE_ZONE,
    CAP_IS_ACTIVE,
    CAP_RAIN_SET_POINT_REACHED,
    CAP_ZONE_TIME_LEFT,
    EVENT_RAINBIRD,
    STATE_ZONE_NONE,
    TIME_LEFT_NONE,
)

_LOGGER = logging.getLogger(__name__)


class RainbirdCapabilities:
    """Holds the published capability values of one device.

    Entities read values from here and register a listener to be told when
    one of them changed. Triggers go out on the event bus.
    """

    def __init__(self, hass: HomeAssistant, entry_id: str) -> None:
        self.hass = hass
        self.entry_id = entry_id
        self._values: dict[str, Any] = {
            CAP_IS_ACTIVE: False,
            CAP_ACTIVE_ZONE: STATE_ZONE_NONE,
            CAP_ZONE_TIME_LEFT: TIME_LEFT_NONE,
            CAP_RAIN_SET_POINT_REACHED: None,
        }
        self._listeners: list[Callable[[], None]] = []

    def get(self, name: str) -> Any:
        return self._values.get(name)

    @callback
    def publish(self, name: str, value: Any) -> None:
        """Set a capability value. Listeners only hear about actual changes."""
        if name in self._values and self._values[name] == value:
            return
        self._values[name] = value
        for listener in list(self._listeners):
            listener()

    @callback
    def emit_trigger(self, name: str) -> None:
        _LOGGER.debug("Firing %s for %s", name, self.entry_id)
        self.hass.bus.async_fire(EVENT_RAINBIRD, {"entry_id": self.entry_id, "type": name})

    @callback
    def async_add_listener(self, listener: Callable[[], None]) -> Callable[[], None]:
        self._listeners.append(listener)

        @callback
        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove
