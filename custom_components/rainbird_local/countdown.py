"""Countdown of the remaining watering time."""
from __future__ import annotations

import logging
import time
from typing import Callable

from homeassistant.core import HomeAssistant, callback
from homeassistant.helpers.event import async_call_later

from .const import TIME_LEFT_NONE
from .models import RuntimeState
from .utils import format_time

_LOGGER = logging.getLogger(__name__)


class CountdownTimer:
    """Publishes the time left once per second until the session end time.

    Ticks are aligned to wall-clock second boundaries and there is never more
    than one pending tick. The timer stops itself once the end time passes.
    """

    def __init__(
        self,
        hass: HomeAssistant,
        state: RuntimeState,
        publish: Callable[[str], None],
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.hass = hass
        self.state = state
        self._publish = publish
        self._clock = clock
        self._unsub: Callable[[], None] | None = None
        self.running = False

    @callback
    def start(self) -> None:
        if self.running:
            return
        _LOGGER.debug("[COUNTDOWN] Starting, end_time=%s", self.state.end_time)
        self.running = True
        self.tick()

    @callback
    def stop(self) -> None:
        if self._unsub is not None:
            self._unsub()
            self._unsub = None
        if self.running:
            _LOGGER.debug("[COUNTDOWN] Stopped")
        self.running = False

    @callback
    def tick(self, _now=None) -> None:
        self._unsub = None
        if not self.running:
            return

        now = self._clock()
        end_time = self.state.end_time
        if end_time is None or now >= end_time:
            self._publish(TIME_LEFT_NONE)
            self.stop()
            return

        self._publish(format_time(end_time - now))
        delay = (1000 - (int(now * 1000) % 1000)) / 1000
        self._unsub = async_call_later(self.hass, delay, self.tick)
