"""Shared helpers for Sensibo Split tests."""

from typing import Any

from custom_components.sensibo_split.models import (
    ACMode,
    FanLevel,
    RemoteDeviceState,
    SwingMode,
)

DEVICE_ID = "abc123"
API_KEY = "test_api_key"


def create_pod_result(
    ac_state: dict[str, Any] | None = None,
    measurements: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Create the ``result`` object of a pod response.

    Args:
        ac_state: Overrides for the default acState (cooling at 22 degrees).
        measurements: Overrides for the default measurements.

    Returns:
        A dictionary shaped like the ``result`` of a pod response.

    """
    default_ac_state = {
        "on": True,
        "mode": "cool",
        "targetTemperature": 22,
        "temperatureUnit": "C",
        "fanLevel": "medium",
        "swing": "stopped",
        "horizontalSwing": "stopped",
    }
    default_measurements = {"temperature": 24.5, "humidity": 55.0}
    return {
        "acState": {**default_ac_state, **(ac_state or {})},
        "measurements": {**default_measurements, **(measurements or {})},
    }


def create_state(**kwargs: Any) -> RemoteDeviceState:
    """Create a RemoteDeviceState with cooling defaults.

    Args:
        **kwargs: Field overrides.

    Returns:
        RemoteDeviceState for a device cooling at 22 degrees.

    """
    defaults: dict[str, Any] = {
        "power": True,
        "mode": ACMode.COOL,
        "target_temperature": 22.0,
        "temperature_unit": "C",
        "fan_level": FanLevel.MEDIUM,
        "swing": SwingMode.STOPPED,
        "horizontal_swing": SwingMode.STOPPED,
        "current_temperature": 24.5,
        "current_humidity": 55.0,
    }
    return RemoteDeviceState(**{**defaults, **kwargs})
