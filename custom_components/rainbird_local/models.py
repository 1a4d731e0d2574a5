"""Data models for the Rain Bird Local integration."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional


@dataclass(frozen=True)
class Zone:
    """A configured irrigation zone."""

    index: int
    name: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Zone":
        return cls(index=int(data["index"]), name=str(data["name"]))

    def as_dict(self) -> dict[str, Any]:
        return {"index": self.index, "name": self.name}


@dataclass(frozen=True)
class StatusSnapshot:
    """Last-known state of the hub, as pulled from the client.

    The active zone is only kept while the hub is in use, and the remaining
    time only while a zone is active. The default instance is the safe
    inactive state.
    """

    in_use: bool = False
    active_zone_id: Optional[int] = None
    remaining_seconds: Optional[float] = None
    rain_set_point_reached: Optional[bool] = None

    def __post_init__(self) -> None:
        if not self.in_use and self.active_zone_id is not None:
            object.__setattr__(self, "active_zone_id", None)
        if self.active_zone_id is None and self.remaining_seconds is not None:
            object.__setattr__(self, "remaining_seconds", None)


@dataclass
class RuntimeState:
    """Mutable state of one controller session. Never shared between devices."""

    enable_queueing: bool = False
    default_duration: int = 3600  # seconds
    known_zones: tuple[Zone, ...] = field(default_factory=tuple)
    last_published_in_use: bool = False
    last_rain_set_point: Optional[bool] = None
    end_time: Optional[float] = None

    @classmethod
    def from_settings(
        cls,
        zones: Iterable[dict[str, Any] | Zone],
        enable_queueing: bool,
        default_minutes: int,
    ) -> "RuntimeState":
        known = tuple(z if isinstance(z, Zone) else Zone.from_dict(z) for z in zones)
        return cls(
            enable_queueing=enable_queueing,
            default_duration=int(default_minutes) * 60,
            known_zones=known,
        )

    def find_zone(self, index: int) -> Zone | None:
        for zone in self.known_zones:
            if zone.index == index:
                return zone
        return None
