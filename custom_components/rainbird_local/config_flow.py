"""Config flow for Rain Bird Local integration."""
from __future__ import annotations

import logging
from typing import Any

import voluptuous as vol
from homeassistant import config_entries
from homeassistant.const import CONF_HOST, CONF_PASSWORD
from homeassistant.core import HomeAssistant, callback
from homeassistant.data_entry_flow import FlowResult
from homeassistant.helpers.aiohttp_client import async_get_clientsession
import homeassistant.helpers.config_validation as cv

from .client import RainbirdLocalClient
from .const import (
    CONF_DEFAULT_IRRIGATION_TIME,
    CONF_ENABLE_QUEUEING,
    CONF_ZONES,
    DEFAULT_ENABLE_QUEUEING,
    DEFAULT_IRRIGATION_TIME,
    DEFAULT_NAME,
    DOMAIN,
)
from .exceptions import ConnectivityError
from .utils import default_zone_names, zones_from_names

_LOGGER = logging.getLogger(__name__)


async def validate_input(hass: HomeAssistant, data: dict[str, Any]) -> dict[str, Any]:
    """Validate the user input allows us to connect."""
    client = RainbirdLocalClient(
        async_get_clientsession(hass), data[CONF_HOST], data[CONF_PASSWORD]
    )
    metadata = await client.async_init()
    zones = zones_from_names(default_zone_names(metadata["zones"]))
    return {
        "title": metadata["model"] or DEFAULT_NAME,
        "zones": [zone.as_dict() for zone in zones],
    }


class RainbirdConfigFlow(config_entries.ConfigFlow, domain=DOMAIN):
    """Handle a config flow for Rain Bird Local."""

    VERSION = 1

    async def async_step_user(
        self, user_input: dict[str, Any] | None = None
    ) -> FlowResult:
        """Handle the initial step."""
        errors = {}

        if user_input is not None:
            await self.async_set_unique_id(f"rainbird_{user_input[CONF_HOST]}")
            self._abort_if_unique_id_configured()
            try:
                info = await validate_input(self.hass, user_input)
            except ConnectivityError:
                _LOGGER.exception("Unable to connect to Rain Bird controller")
                errors["base"] = "cannot_connect"
            else:
                return self.async_create_entry(
                    title=info["title"],
                    data={
                        CONF_HOST: user_input[CONF_HOST],
                        CONF_PASSWORD: user_input[CONF_PASSWORD],
                        CONF_ZONES: info["zones"],
                    },
                    options={
                        CONF_ENABLE_QUEUEING: user_input[CONF_ENABLE_QUEUEING],
                        CONF_DEFAULT_IRRIGATION_TIME: user_input[CONF_DEFAULT_IRRIGATION_TIME],
                    },
                )

        return self.async_show_form(
            step_id="user",
            data_schema=vol.Schema({
                vol.Required(CONF_HOST): str,
                vol.Required(CONF_PASSWORD): str,
                vol.Optional(CONF_ENABLE_QUEUEING, default=DEFAULT_ENABLE_QUEUEING): bool,
                vol.Optional(CONF_DEFAULT_IRRIGATION_TIME, default=DEFAULT_IRRIGATION_TIME): cv.positive_int,
            }),
            errors=errors,
        )

    @staticmethod
    @callback
    def async_get_options_flow(config_entry: config_entries.ConfigEntry) -> "RainbirdOptionsFlow":
        return RainbirdOptionsFlow()


class RainbirdOptionsFlow(config_entries.OptionsFlow):
    """Queueing policy and default irrigation time."""

    async def async_step_init(
        self, user_input: dict[str, Any] | None = None
    ) -> FlowResult:
        if user_input is not None:
            return self.async_create_entry(title="", data=user_input)

        options = self.config_entry.options
        return self.async_show_form(
            step_id="init",
            data_schema=vol.Schema({
                vol.Optional(
                    CONF_ENABLE_QUEUEING,
                    default=options.get(CONF_ENABLE_QUEUEING, DEFAULT_ENABLE_QUEUEING),
                ): bool,
                vol.Optional(
                    CONF_DEFAULT_IRRIGATION_TIME,
                    default=options.get(CONF_DEFAULT_IRRIGATION_TIME, DEFAULT_IRRIGATION_TIME),
                ): cv.positive_int,
            }),
        )
