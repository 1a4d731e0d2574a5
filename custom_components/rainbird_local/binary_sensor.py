"""Support for Rain Bird binary sensors."""
from __future__ import annotations

from homeassistant.components.binary_sensor import BinarySensorDeviceClass, BinarySensorEntity

from .const import CAP_IS_ACTIVE, CAP_RAIN_SET_POINT_REACHED, CONDITION_RAINBIRD_IS_ACTIVE, DOMAIN
from .sensor import RainbirdCapabilityEntity


async def async_setup_entry(hass, config_entry, async_add_entities):
    """Set up the Rain Bird binary sensors from config entry."""
    data = hass.data[DOMAIN][config_entry.entry_id]
    async_add_entities([
        RainbirdIrrigatingBinarySensor(config_entry, data),
        RainbirdCapabilityBinarySensor(
            config_entry, data, CAP_RAIN_SET_POINT_REACHED, "Rain set point reached", BinarySensorDeviceClass.MOISTURE
        ),
    ])


class RainbirdCapabilityBinarySensor(RainbirdCapabilityEntity, BinarySensorEntity):
    def __init__(self, config_entry, data, capability, name, device_class):
        super().__init__(config_entry, data, capability)
        self._attr_name = name
        self._attr_device_class = device_class

    @property
    def is_on(self):
        value = self.capabilities.get(self.capability)
        return None if value is None else bool(value)


class RainbirdIrrigatingBinarySensor(RainbirdCapabilityBinarySensor):
    """On while the hub runs any zone; refreshed when `is_active` is published."""

    def __init__(self, config_entry, data):
        super().__init__(config_entry, data, CAP_IS_ACTIVE, "Irrigating", BinarySensorDeviceClass.RUNNING)
        self.handler = data["handler"]

    @property
    def is_on(self):
        return self.handler.evaluate_condition(CONDITION_RAINBIRD_IS_ACTIVE)
