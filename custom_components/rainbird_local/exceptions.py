"""Exceptions raised by the Rain Bird Local integration."""
from __future__ import annotations


class RainbirdLocalException(Exception):
    """Base class for all Rain Bird Local exceptions."""

    HINT: str | None = None

    def __init__(self, *args: object) -> None:
        super().__init__(*args)
        self.message: str | None = str(args[0]) if args else None

    def __str__(self) -> str:
        if self.message and self.HINT:
            return f"{self.message} (hint: {self.HINT})"
        if self.message:
            return self.message
        if self.HINT:
            return f"Hint: {self.HINT}"
        return ""


class ConnectivityError(RainbirdLocalException):
    """The hub is unreachable or rejected the handshake."""

    HINT = "check the host address and password of the controller"


class CommandError(RainbirdLocalException):
    """The hub rejected (or timed out on) a zone command."""


class ZoneNotFoundError(RainbirdLocalException):
    """The requested zone is not one of the configured zones."""
