"""Pytest configuration and fixtures for Sensibo Split tests."""

from typing import Any
from unittest.mock import AsyncMock, Mock

import pytest

from custom_components.sensibo_split.accessory import SensiboAccessory
from custom_components.sensibo_split.api import SensiboDeviceClient
from custom_components.sensibo_split.const import DOMAIN
from custom_components.sensibo_split.models import SensiboDevice

from .common import DEVICE_ID, create_pod_result, create_state


@pytest.fixture
def sample_pod_response() -> dict[str, Any]:
    """Fixture providing a successful pod response for a cooling device."""
    return {"status": "success", "result": create_pod_result()}


@pytest.fixture
def sample_patch_response() -> dict[str, Any]:
    """Fixture providing a successful acState PATCH response."""
    return {
        "status": "success",
        "result": {
            "status": "Success",
            "changedProperties": ["on"],
            "acState": create_pod_result()["acState"],
        },
    }


@pytest.fixture
def sample_failure_response() -> dict[str, Any]:
    """Fixture providing a vendor failure response."""
    return {"status": "failure", "reason": "Pod is offline"}


@pytest.fixture
def sample_device() -> SensiboDevice:
    """Fixture providing the identity of the test pod."""
    return SensiboDevice(id=DEVICE_ID, name="Living room")


@pytest.fixture
def mock_client() -> Mock:
    """Create a mock remote client that reports a cooling device."""
    client = Mock(spec=SensiboDeviceClient)
    client.device_id = DEVICE_ID
    client.async_fetch = AsyncMock(return_value=create_state())
    client.async_patch_field = AsyncMock(return_value={})
    client.async_bulk_update = AsyncMock(return_value={})
    return client


@pytest.fixture
def accessory(mock_client: Mock, sample_device: SensiboDevice) -> SensiboAccessory:
    """Fixture providing an accessory backed by the mock client."""
    return SensiboAccessory(mock_client, sample_device)


@pytest.fixture
def mock_hass(accessory: SensiboAccessory) -> Mock:
    """Create a mock Home Assistant instance holding one set-up entry."""
    hass = Mock()
    hass.data = {DOMAIN: {"test_entry": {"accessory": accessory}}}
    return hass
