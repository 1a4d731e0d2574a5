"""The Rain Bird Local integration."""
from __future__ import annotations

import logging
from typing import Any

from homeassistant.config_entries import ConfigEntry
from homeassistant.const import CONF_HOST, CONF_PASSWORD, Platform
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import ConfigEntryNotReady
from homeassistant.helpers.aiohttp_client import async_get_clientsession
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator, UpdateFailed

from .capabilities import RainbirdCapabilities
from .client import RainbirdLocalClient
from .const import (
    CONF_DEFAULT_IRRIGATION_TIME,
    CONF_ENABLE_QUEUEING,
    CONF_ZONES,
    DEFAULT_ENABLE_QUEUEING,
    DEFAULT_IRRIGATION_TIME,
    DOMAIN,
)
from .controller import RainbirdControllerHandler
from .exceptions import ConnectivityError
from .models import RuntimeState
from .utils import default_zone_names, get_update_interval, zones_from_names

_LOGGER = logging.getLogger(__name__)
PLATFORMS: list[Platform] = [
    Platform.SENSOR, Platform.BINARY_SENSOR, Platform.SWITCH, Platform.BUTTON
]


def get_settings(entry: ConfigEntry) -> dict[str, Any]:
    """Merge entry data and options, normalizing values older versions stored."""
    settings = {**entry.data, **entry.options}

    queueing = settings.get(CONF_ENABLE_QUEUEING, DEFAULT_ENABLE_QUEUEING)
    if not isinstance(queueing, bool):
        # Early releases stored the checkbox value "on"; those entries ran without queueing.
        queueing = DEFAULT_ENABLE_QUEUEING
    settings[CONF_ENABLE_QUEUEING] = queueing

    minutes = settings.get(CONF_DEFAULT_IRRIGATION_TIME, DEFAULT_IRRIGATION_TIME)
    try:
        minutes = int(minutes)
    except (TypeError, ValueError):
        minutes = DEFAULT_IRRIGATION_TIME
    if minutes <= 0:
        minutes = DEFAULT_IRRIGATION_TIME
    settings[CONF_DEFAULT_IRRIGATION_TIME] = minutes
    return settings


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up a Rain Bird controller from a config entry."""
    settings = get_settings(entry)
    client = RainbirdLocalClient(
        async_get_clientsession(hass), settings[CONF_HOST], settings[CONF_PASSWORD]
    )

    try:
        metadata = await client.async_init()
    except ConnectivityError as err:
        raise ConfigEntryNotReady(str(err)) from err

    zones = settings.get(CONF_ZONES)
    if not zones:
        zones = [z.as_dict() for z in zones_from_names(default_zone_names(metadata["zones"]))]
    _LOGGER.info("Getting configured zones for %s: %s", entry.title, zones)

    state = RuntimeState.from_settings(
        zones,
        enable_queueing=settings[CONF_ENABLE_QUEUEING],
        default_minutes=settings[CONF_DEFAULT_IRRIGATION_TIME],
    )
    capabilities = RainbirdCapabilities(hass, entry.entry_id)
    handler = RainbirdControllerHandler(hass, client, capabilities, state)

    async def _async_update():
        try:
            await client.async_refresh()
        except ConnectivityError as err:
            raise UpdateFailed(str(err)) from err
        new_interval = get_update_interval(handler)
        if coordinator.update_interval != new_interval:
            _LOGGER.debug("[POLL] %s: polling every %s", entry.title, new_interval)
            coordinator.update_interval = new_interval

    coordinator = DataUpdateCoordinator(
        hass,
        _LOGGER,
        config_entry=entry,
        name=f"Rain Bird {metadata['model']}",
        update_method=_async_update,
        update_interval=get_update_interval(handler),
    )
    handler.coordinator = coordinator
    await coordinator.async_config_entry_first_refresh()
    await handler.async_setup()

    hass.data.setdefault(DOMAIN, {})
    hass.data[DOMAIN][entry.entry_id] = {
        "handler": handler,
        "coordinator": coordinator,
        "capabilities": capabilities,
        "model": metadata["model"],
    }

    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)
    entry.async_on_unload(entry.add_update_listener(_async_update_listener))
    return True


async def _async_update_listener(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Settings changed: tear the session down and build a new one."""
    _LOGGER.info("Rain Bird settings were changed, reloading %s", entry.title)
    await hass.config_entries.async_reload(entry.entry_id)


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a config entry, stopping irrigation on the hub."""
    data = hass.data[DOMAIN][entry.entry_id]
    await data["handler"].async_shutdown()
    if unload_ok := await hass.config_entries.async_unload_platforms(entry, PLATFORMS):
        hass.data[DOMAIN].pop(entry.entry_id)
    return unload_ok
