"""Zone session controller for Rain Bird irrigation controllers."""
from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable

from homeassistant.core import HomeAssistant, callback

from .capabilities import RainbirdCapabilities
from .client import RainbirdLocalClient
from .const import (
    CAP_ACTIVE_ZONE,
    CAP_IS_ACTIVE,
    CAP_RAIN_SET_POINT_REACHED,
    CAP_ZONE_TIME_LEFT,
    CONDITION_RAINBIRD_IS_ACTIVE,
    CONDITION_ZONE_IS_ACTIVE,
    STATE_ZONE_NONE,
    STATE_ZONE_UNKNOWN,
    TIME_LEFT_NONE,
    TRIGGER_RAIN_SET_POINT_CHANGED,
    TRIGGER_RAIN_SET_POINT_REACHED,
    TRIGGER_TURNS_OFF,
    TRIGGER_TURNS_ON,
)
from .countdown import CountdownTimer
from .exceptions import CommandError, ZoneNotFoundError
from .models import RuntimeState, StatusSnapshot

_LOGGER = logging.getLogger(__name__)


class RainbirdControllerHandler:
    """Handler for one Rain Bird controller session.

    Reconciles what the hub reports with the published capabilities and
    arbitrates zone start/stop requests. Reconciliation runs as a callback on
    the event loop; requests and teardown are serialized on a lock.
    """

    def __init__(
        self,
        hass: HomeAssistant,
        client: RainbirdLocalClient | None,
        capabilities: RainbirdCapabilities,
        state: RuntimeState,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the controller."""
        self.hass = hass
        self.client = client
        self.capabilities = capabilities
        self.state = state
        self.coordinator = None
        self._clock = clock
        self._lock = asyncio.Lock()
        self._unsub_status: Callable[[], None] | None = None
        self._closed = False
        self.timer = CountdownTimer(
            hass,
            state,
            lambda value: capabilities.publish(CAP_ZONE_TIME_LEFT, value),
            clock=clock,
        )

    async def async_setup(self) -> None:
        """Subscribe to hub status changes and publish the initial state."""
        if self.client is not None:
            self._unsub_status = self.client.add_status_listener(self.handle_status)
        self.reconcile(self.pull_snapshot(), initial=True)

    @callback
    def handle_status(self) -> None:
        """The hub reported a change: pull fresh state and reconcile."""
        if self._closed:
            return
        self.reconcile(self.pull_snapshot())

    def pull_snapshot(self) -> StatusSnapshot:
        client = self.client
        if client is None:
            return StatusSnapshot()

        in_use = client.is_in_use()
        zone_id = next((z for z in client.zones if client.is_in_use(z)), None)
        remaining = client.remaining_duration(zone_id) if zone_id is not None else None
        return StatusSnapshot(
            in_use=in_use,
            active_zone_id=zone_id,
            remaining_seconds=remaining,
            rain_set_point_reached=client.rain_set_point_reached,
        )

    @callback
    def reconcile(self, snapshot: StatusSnapshot | None, initial: bool = False) -> None:
        """Publish the snapshot, firing triggers on transitions unless initial."""
        if snapshot is None:
            snapshot = StatusSnapshot()
        state = self.state
        caps = self.capabilities
        _LOGGER.debug("[RECONCILE] initial=%s %s", initial, snapshot)

        in_use = bool(snapshot.in_use)
        if not initial and in_use != state.last_published_in_use:
            caps.emit_trigger(TRIGGER_TURNS_ON if in_use else TRIGGER_TURNS_OFF)
        state.last_published_in_use = in_use
        caps.publish(CAP_IS_ACTIVE, in_use)

        rain = snapshot.rain_set_point_reached
        if rain is not None:
            rain = bool(rain)
            previous = state.last_rain_set_point
            if not initial and previous is not None and rain != previous:
                caps.emit_trigger(TRIGGER_RAIN_SET_POINT_CHANGED)
                if rain:
                    caps.emit_trigger(TRIGGER_RAIN_SET_POINT_REACHED)
            state.last_rain_set_point = rain
            caps.publish(CAP_RAIN_SET_POINT_REACHED, rain)

        if snapshot.active_zone_id is None:
            state.end_time = None
            self.timer.stop()
            caps.publish(CAP_ACTIVE_ZONE, STATE_ZONE_NONE)
            caps.publish(CAP_ZONE_TIME_LEFT, TIME_LEFT_NONE)
            return

        zone = state.find_zone(snapshot.active_zone_id)
        caps.publish(CAP_ACTIVE_ZONE, zone.name if zone else STATE_ZONE_UNKNOWN)

        remaining = snapshot.remaining_seconds
        if remaining and remaining > 0:
            state.end_time = self._clock() + remaining
            self.timer.start()
        else:
            state.end_time = None
            self.timer.stop()
            caps.publish(CAP_ZONE_TIME_LEFT, TIME_LEFT_NONE)

    async def async_request_start(self, zone_index: int, duration: int | None = None) -> bool:
        """Start a zone, pre-empting the running session unless queueing is enabled."""
        zone = self.state.find_zone(zone_index)
        if zone is None:
            raise ZoneNotFoundError(f"Zone {zone_index} is not configured")
        if duration is None:
            duration = self.state.default_duration
        if isinstance(duration, bool) or int(duration) != duration or duration <= 0:
            raise ValueError(f"Duration must be a positive number of seconds, got {duration!r}")
        duration = int(duration)

        async with self._lock:
            if self._closed or self.client is None:
                _LOGGER.warning("Ignoring start of zone %s: controller is shut down", zone.name)
                return False

            if not self.state.enable_queueing:
                _LOGGER.info("No queueing, disabling active zones before starting new one")
                if not await self._async_stop_all():
                    _LOGGER.error("Not starting zone %s (%s): stopping the running zones failed", zone.name, zone.index)
                    return False
                _LOGGER.info("Starting zone %s (%s) for %s seconds", zone.name, zone.index, duration)
            else:
                _LOGGER.info("Queueing zone %s (%s) for %s seconds", zone.name, zone.index, duration)

            try:
                await self.client.async_activate_zone(zone.index, duration)
            except CommandError as err:
                _LOGGER.error("Error starting zone %s: %s", zone.name, err)
                return False

        await self._async_request_refresh()
        return True

    async def async_request_stop(self, zone_index: int) -> bool:
        """Stop a single zone, leaving other queued zones alone."""
        async with self._lock:
            if self._closed or self.client is None:
                _LOGGER.warning("Ignoring stop of zone %s: controller is shut down", zone_index)
                return False
            zone = self.state.find_zone(zone_index)
            _LOGGER.info("Stopping zone %s", zone.name if zone else zone_index)
            try:
                await self.client.async_deactivate_zone(zone_index)
            except CommandError as err:
                _LOGGER.error("Error stopping zone %s: %s", zone_index, err)
                return False

        await self._async_request_refresh()
        return True

    async def async_request_stop_all(self) -> bool:
        """Stop every zone and the overall irrigation."""
        async with self._lock:
            if self._closed or self.client is None:
                _LOGGER.warning("Ignoring stop irrigation: controller is shut down")
                return False
            result = await self._async_stop_all()

        if result:
            await self._async_request_refresh()
        return result

    async def _async_stop_all(self) -> bool:
        try:
            await self.client.async_deactivate_all_zones()
            await self.client.async_stop_irrigation()
        except CommandError as err:
            _LOGGER.error("Error stopping irrigation: %s", err)
            return False
        return True

    async def _async_request_refresh(self) -> None:
        if self.coordinator is not None and not self._closed:
            await self.coordinator.async_request_refresh()

    def evaluate_condition(self, name: str, zone_index: int | None = None) -> bool:
        """Answer a condition query from the current hub state."""
        if name == CONDITION_ZONE_IS_ACTIVE:
            if zone_index is None or self.client is None:
                return False
            return self.client.is_in_use(zone_index)
        if name == CONDITION_RAINBIRD_IS_ACTIVE:
            return self.client is not None and self.client.is_in_use()
        raise ValueError(f"Unknown condition {name}")

    async def async_shutdown(self, stop_irrigation: bool = True) -> None:
        """Tear the session down: no more reconciles or ticks, then stop the hub."""
        self._closed = True
        if self._unsub_status is not None:
            self._unsub_status()
            self._unsub_status = None
        self.timer.stop()
        self.state.end_time = None

        if not stop_irrigation or self.client is None:
            return
        # Waits for any request still talking to the hub.
        async with self._lock:
            await self._async_stop_all()
