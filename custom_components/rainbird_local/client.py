"""Local client for Rain Bird irrigation controllers."""
from __future__ import annotations

import logging
import math
from typing import Any, Callable

import aiohttp
from aiohttp import ClientSession
from pyrainbird.async_client import create_controller
from pyrainbird.exceptions import RainbirdApiException

from .exceptions import CommandError, ConnectivityError

_LOGGER = logging.getLogger(__name__)

HUB_ERRORS = (RainbirdApiException, aiohttp.ClientError, TimeoutError)


class RainbirdLocalClient:
    """Talks to one Rain Bird hub and caches what it last reported.

    The readers (`is_in_use`, `remaining_duration`, `rain_set_point_reached`)
    are synchronous and return the cached state, which is stale but safe when
    the hub cannot be reached. Status listeners carry no payload: they are told
    that something changed and must pull what they need.

    Commands read the zone states from the hub before acting. Zones started
    while another one runs wait in a queue and are started in order once the
    hub goes idle.
    """

    def __init__(self, websession: ClientSession, host: str, password: str) -> None:
        """Initialize the client."""
        self.host = host
        self._websession = websession
        self._password = password
        self._controller = None
        self.model: str | None = None
        self.zones: list[int] = []
        self._active_zones: set[int] = set()
        self._remaining: dict[int, float] = {}
        self._rain_sensor: bool = False
        self._listeners: list[Callable[[], None]] = []
        self._queue: list[tuple[int, int]] = []

    async def async_init(self) -> dict[str, Any]:
        """Handshake with the hub and return its model and zone indexes."""
        try:
            self._controller = await create_controller(
                self._websession, self.host, self._password
            )
            model_info = await self._controller.get_model_and_version()
            stations = await self._controller.get_available_stations()
        except HUB_ERRORS as err:
            raise ConnectivityError(f"Unable to connect to {self.host}: {err}") from err

        self.model = model_info.model_name
        self.zones = sorted(stations.active_set)
        if not self.model or not self.zones:
            raise ConnectivityError(f"{self.host} did not report a model and zones")

        _LOGGER.info("Connected to %s at %s with zones %s", self.model, self.host, self.zones)
        return {"model": self.model, "zones": list(self.zones)}

    async def async_refresh(self) -> None:
        """Pull the current state from the hub and notify listeners if it changed."""
        if self._controller is None:
            raise ConnectivityError(f"{self.host} is not initialized")
        try:
            states = await self._controller.get_zone_states()
            rain_sensor = bool(await self._controller.get_rain_sensor_state())
        except HUB_ERRORS as err:
            raise ConnectivityError(f"Error polling {self.host}: {err}") from err

        active_zones = set(states.active_set)
        remaining: dict[int, float] = {}
        if active_zones:
            try:
                state = await self._controller.get_combined_controller_state()
            except HUB_ERRORS as err:
                # Older firmware lacks the combined state; remaining time stays unknown.
                _LOGGER.debug("[POLL] %s: no remaining runtime available: %s", self.host, err)
            else:
                if state.active_station and state.active_station in active_zones:
                    remaining[state.active_station] = state.remaining_runtime

        changed = (
            active_zones != self._active_zones
            or remaining != self._remaining
            or rain_sensor != self._rain_sensor
        )
        self._active_zones = active_zones
        self._remaining = remaining
        self._rain_sensor = rain_sensor
        _LOGGER.debug(
            "[POLL] %s: active=%s remaining=%s rain=%s changed=%s",
            self.host, sorted(active_zones), remaining, rain_sensor, changed,
        )
        if changed:
            self._notify()

        if not active_zones and self._queue:
            try:
                await self._async_start_next()
            except CommandError as err:
                _LOGGER.error("Error starting the next queued zone: %s", err)

    def add_status_listener(self, listener: Callable[[], None]) -> Callable[[], None]:
        """Register a status listener; returns a callable that removes it."""
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()

    def is_in_use(self, zone: int | None = None) -> bool:
        if zone is None:
            return bool(self._active_zones)
        return zone in self._active_zones

    def remaining_duration(self, zone: int) -> float | None:
        return self._remaining.get(zone)

    @property
    def rain_set_point_reached(self) -> bool:
        return self._rain_sensor

    @property
    def queued_zones(self) -> list[int]:
        return [zone for zone, _ in self._queue]

    async def async_activate_zone(self, zone: int, seconds: int) -> None:
        """Start a zone, or queue it while the hub is running another one."""
        active = await self._async_read_active_zones()
        self._queue.append((zone, seconds))
        if active or len(self._queue) > 1:
            _LOGGER.info("Queueing zone %s on %s behind %s", zone, self.host, sorted(active))
            return
        await self._async_start_next()

    async def async_deactivate_zone(self, zone: int) -> None:
        """Stop a zone, leaving the other queued zones to run."""
        queued = len(self._queue)
        self._queue = [entry for entry in self._queue if entry[0] != zone]
        if len(self._queue) != queued:
            _LOGGER.info("Removed zone %s from the queue on %s", zone, self.host)

        if zone not in await self._async_read_active_zones():
            _LOGGER.debug("Zone %s on %s is not running, nothing to stop", zone, self.host)
            return
        # The hub can only stop the running session.
        await self._command("stop_irrigation")
        await self._async_start_next()

    async def async_deactivate_all_zones(self) -> None:
        self._queue.clear()
        if await self._async_read_active_zones():
            _LOGGER.info("Stopping running zones on %s", self.host)
            await self._command("stop_irrigation")

    async def async_stop_irrigation(self) -> None:
        """Stop the hub session unless it is already idle."""
        self._queue.clear()
        if not await self._async_read_active_zones():
            _LOGGER.debug("%s is idle, nothing to stop", self.host)
            return
        _LOGGER.info("Stopping irrigation on %s", self.host)
        await self._command("stop_irrigation")

    async def _async_start_next(self) -> None:
        if not self._queue:
            return
        zone, seconds = self._queue.pop(0)
        # The hub runs zones in whole minutes.
        minutes = max(1, math.ceil(seconds / 60))
        _LOGGER.info("Activating zone %s on %s for %s minutes", zone, self.host, minutes)
        await self._command("irrigate_zone", zone, minutes)

    async def _async_read_active_zones(self) -> set[int]:
        """Ask the hub which zones are running right now."""
        if self._controller is None:
            raise CommandError(f"{self.host} is not initialized")
        try:
            states = await self._controller.get_zone_states()
        except HUB_ERRORS as err:
            raise CommandError(f"Unable to read zone states from {self.host}: {err}") from err
        return set(states.active_set)

    async def _command(self, name: str, *args: Any) -> None:
        if self._controller is None:
            raise CommandError(f"{self.host} is not initialized")
        try:
            await getattr(self._controller, name)(*args)
        except HUB_ERRORS as err:
            raise CommandError(f"{name}{args} rejected by {self.host}: {err}") from err
