"""Support for Rain Bird zone switches."""
from __future__ import annotations

import logging
from typing import Any

import voluptuous as vol
from homeassistant.components.switch import SwitchEntity
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
import homeassistant.helpers.config_validation as cv
from homeassistant.helpers.entity_platform import AddEntitiesCallback, async_get_current_platform
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .const import (
    ATTR_MINUTES,
    CONDITION_ZONE_IS_ACTIVE,
    DOMAIN,
    MANUFACTURER,
    SERVICE_START_ZONE,
)

_LOGGER = logging.getLogger(__name__)


async def async_setup_entry(
    hass: HomeAssistant,
    config_entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up the Rain Bird zone switches from config entry."""
    data = hass.data[DOMAIN][config_entry.entry_id]
    handler = data["handler"]
    coordinator = data["coordinator"]

    entities = [
        RainbirdZoneSwitch(coordinator, handler, config_entry, data["model"], zone)
        for zone in handler.state.known_zones
    ]
    async_add_entities(entities)

    # Start with an explicit duration; the plain turn_on uses the default irrigation time.
    platform = async_get_current_platform()
    platform.async_register_entity_service(
        SERVICE_START_ZONE,
        {vol.Optional(ATTR_MINUTES): cv.positive_int},
        "async_start_zone",
    )


class RainbirdZoneSwitch(CoordinatorEntity, SwitchEntity):
    """Representation of a zone switch."""

    _attr_has_entity_name = True
    _attr_icon = "mdi:sprinkler"

    def __init__(self, coordinator, handler, config_entry, model, zone):
        """Initialize the zone switch."""
        super().__init__(coordinator)
        self.handler = handler
        self.zone = zone
        self._model = model
        self._device_id = config_entry.unique_id or config_entry.entry_id
        self._device_name = config_entry.title
        self._attr_name = zone.name
        self._attr_unique_id = f"{self._device_id}_zone_{zone.index}"

    @property
    def device_info(self):
        """Return device info."""
        return {
            "identifiers": {(DOMAIN, self._device_id)},
            "name": self._device_name,
            "model": self._model,
            "manufacturer": MANUFACTURER,
        }

    @property
    def is_on(self):
        return self.handler.evaluate_condition(CONDITION_ZONE_IS_ACTIVE, self.zone.index)

    @property
    def extra_state_attributes(self):
        """Return extra state attributes."""
        return {
            "zone_index": self.zone.index,
            "default_duration": self.handler.state.default_duration,
        }

    async def async_turn_on(self, **kwargs: Any) -> None:
        """Start the zone for the default irrigation time."""
        await self.handler.async_request_start(self.zone.index)

    async def async_turn_off(self, **kwargs: Any) -> None:
        """Stop the zone."""
        _LOGGER.debug("[ZoneSwitch] async_turn_off called: zone=%s", self.zone.index)
        await self.handler.async_request_stop(self.zone.index)

    async def async_start_zone(self, minutes: int | None = None) -> None:
        """Start the zone for the given number of minutes."""
        duration = minutes * 60 if minutes else None
        await self.handler.async_request_start(self.zone.index, duration)
