from __future__ import annotations

import time
from datetime import timedelta
from typing import Any, Iterable, Mapping

from .const import END_OF_SESSION_GRACE, REFRESH_INTERVAL, TIME_LEFT_NONE
from .models import Zone


def format_time(seconds: float | None) -> str:
    """Format a duration in seconds as HH:MM:SS, or "-" when there is none."""
    if seconds is None:
        return TIME_LEFT_NONE
    total = max(0, int(seconds))
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def zones_from_names(names: Mapping[Any, str]) -> list[Zone]:
    """Build the zone list from an index -> name mapping, skipping blank names."""
    result = []
    for key, name in names.items():
        if name is None or str(name).strip() == "":
            continue
        result.append(Zone(index=int(key), name=str(name)))
    return sorted(result, key=lambda z: z.index)


def default_zone_names(indexes: Iterable[int]) -> dict[int, str]:
    return {int(i): f"Zone {int(i)}" for i in indexes}


def get_update_interval(handler, now: float | None = None) -> timedelta:
    """Poll at the regular rate, or just after the running countdown is due to end.

    Catching the end of a session early lets the next queued zone show up
    without waiting a full refresh interval.
    """
    end_time = getattr(getattr(handler, "state", None), "end_time", None)
    if end_time is None:
        return timedelta(seconds=REFRESH_INTERVAL)
    if now is None:
        now = time.time()
    until_end = end_time - now + END_OF_SESSION_GRACE
    if 0 < until_end < REFRESH_INTERVAL:
        return timedelta(seconds=max(1.0, until_end))
    return timedelta(seconds=REFRESH_INTERVAL)
