"""Support for Rain Bird sensors."""
from __future__ import annotations

import logging

from homeassistant.components.sensor import SensorEntity
from homeassistant.helpers.entity import Entity

from .const import CAP_ACTIVE_ZONE, CAP_ZONE_TIME_LEFT, DOMAIN, MANUFACTURER

_LOGGER = logging.getLogger(__name__)


async def async_setup_entry(hass, config_entry, async_add_entities):
    """Set up the Rain Bird sensors from config entry."""
    data = hass.data[DOMAIN][config_entry.entry_id]
    entities = [
        RainbirdCapabilitySensor(config_entry, data, CAP_ACTIVE_ZONE, "Active zone", "mdi:sprinkler-variant"),
        RainbirdCapabilitySensor(config_entry, data, CAP_ZONE_TIME_LEFT, "Zone time left", "mdi:timer-sand"),
    ]
    _LOGGER.debug("Adding %d Rain Bird sensor entities", len(entities))
    async_add_entities(entities)


class RainbirdCapabilityEntity(Entity):
    """Base class for entities showing a published capability."""

    _attr_should_poll = False
    _attr_has_entity_name = True

    def __init__(self, config_entry, data, capability):
        """Initialize entity properties."""
        self.capabilities = data["capabilities"]
        self.capability = capability
        self._model = data["model"]
        self._device_id = config_entry.unique_id or config_entry.entry_id
        self._device_name = config_entry.title
        self._attr_unique_id = f"{self._device_id}_{capability}"

    @property
    def device_info(self):
        """Return device info."""
        return {
            "identifiers": {(DOMAIN, self._device_id)},
            "name": self._device_name,
            "model": self._model,
            "manufacturer": MANUFACTURER,
        }

    async def async_added_to_hass(self) -> None:
        self.async_on_remove(self.capabilities.async_add_listener(self.async_write_ha_state))


class RainbirdCapabilitySensor(RainbirdCapabilityEntity, SensorEntity):
    """Text sensor for the active zone or its time left."""

    def __init__(self, config_entry, data, capability, name, icon):
        super().__init__(config_entry, data, capability)
        self._attr_name = name
        self._attr_icon = icon

    @property
    def native_value(self):
        return self.capabilities.get(self.capability)
