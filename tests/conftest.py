"""Fixtures for Rain Bird Local tests."""
from unittest.mock import MagicMock, patch

import pytest

from .common import FakeClient, FakeClock, make_handler


@pytest.fixture
def hass():
    """Create a mock Home Assistant instance."""
    hass = MagicMock()
    hass.bus = MagicMock()
    return hass


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def client():
    return FakeClient()


@pytest.fixture
def call_later():
    """Replace async_call_later; each call returns its own cancel mock."""
    with patch(
        "custom_components.rainbird_local.countdown.async_call_later",
        side_effect=lambda hass, delay, action: MagicMock(name=f"unsub_{delay}"),
    ) as mock_call_later:
        yield mock_call_later


@pytest.fixture
def handler(hass, client, clock, call_later):
    return make_handler(hass, client, clock)
