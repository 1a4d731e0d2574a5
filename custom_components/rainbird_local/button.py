"""Support for Rain Bird buttons."""
from __future__ import annotations

import logging

from homeassistant.components.button import ButtonEntity
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .const import DOMAIN, MANUFACTURER

_LOGGER = logging.getLogger(__name__)


async def async_setup_entry(hass, config_entry, async_add_entities):
    """Set up the Rain Bird buttons from config entry."""
    data = hass.data[DOMAIN][config_entry.entry_id]
    async_add_entities([
        RainbirdStopIrrigationButton(data["coordinator"], data["handler"], config_entry, data["model"])
    ])


class RainbirdStopIrrigationButton(CoordinatorEntity, ButtonEntity):
    """Button that stops every zone on the controller."""

    _attr_has_entity_name = True
    _attr_name = "Stop irrigation"
    _attr_icon = "mdi:water-off"

    def __init__(self, coordinator, handler, config_entry, model):
        """Initialize the button."""
        super().__init__(coordinator)
        self.handler = handler
        self._model = model
        self._device_id = config_entry.unique_id or config_entry.entry_id
        self._device_name = config_entry.title
        self._attr_unique_id = f"{self._device_id}_stop_irrigation"

    @property
    def device_info(self):
        """Return device info."""
        return {
            "identifiers": {(DOMAIN, self._device_id)},
            "name": self._device_name,
            "model": self._model,
            "manufacturer": MANUFACTURER,
        }

    async def async_press(self) -> None:
        """Stop all watering."""
        _LOGGER.info("Stop irrigation pressed for %s", self._device_name)
        await self.handler.async_request_stop_all()
