"""Translation between Sensibo field values and Home Assistant states.

Every function here is pure: no I/O and no state. Read-side translations
are total and fall back to a safe default; write-side translations raise
SensiboMappingError for values that have no vendor counterpart.
"""

from __future__ import annotations

import logging

from homeassistant.components.climate import HVACAction, HVACMode
from homeassistant.components.humidifier import HumidifierAction

from .const import DEFAULT_ROTATION_SPEED
from .models import ACMode, FanLevel, FieldName, RemoteDeviceState, SwingMode, ViewKind

_LOGGER = logging.getLogger(__name__)

ROTATION_SPEED_BY_FAN_LEVEL: dict[FanLevel, int] = {
    FanLevel.LOW: 1,
    FanLevel.MEDIUM_LOW: 2,
    FanLevel.MEDIUM: 3,
    FanLevel.MEDIUM_HIGH: 4,
    FanLevel.HIGH: 5,
}
FAN_LEVEL_BY_ROTATION_SPEED: dict[int, FanLevel] = {
    speed: level for level, speed in ROTATION_SPEED_BY_FAN_LEVEL.items()
}


class SensiboMappingError(ValueError):
    """Raised when a value has no counterpart on the other side."""


def owned_modes(view: ViewKind) -> frozenset[ACMode]:
    """Return the device modes in which a view is the active one."""
    match view:
        case ViewKind.HEATER_COOLER:
            return frozenset({ACMode.HEAT, ACMode.COOL})
        case ViewKind.DEHUMIDIFIER:
            return frozenset({ACMode.DRY})
        case ViewKind.FAN:
            return frozenset({ACMode.FAN})
    return frozenset()


def active_for(view: ViewKind, state: RemoteDeviceState) -> bool:
    """Return whether a view is active under a device state.

    A powered-off device makes every view inactive regardless of its mode.
    """
    return bool(state.power) and state.mode in owned_modes(view)


def current_heater_cooler_state(state: RemoteDeviceState) -> HVACAction:
    """Return the heater/cooler action for a device state."""
    if not active_for(ViewKind.HEATER_COOLER, state):
        return HVACAction.OFF

    if state.mode is ACMode.HEAT:
        return HVACAction.HEATING
    return HVACAction.COOLING


def target_heater_cooler_state(state: RemoteDeviceState) -> HVACMode:
    """Return the heater/cooler target for a device state.

    Modes other than heat report COOL so that reads never fail.
    """
    match state.mode:
        case ACMode.HEAT:
            return HVACMode.HEAT
        case ACMode.COOL:
            return HVACMode.COOL
        case _:
            _LOGGER.debug("No heater/cooler target for mode %s", state.mode)
            return HVACMode.COOL


def mode_for_target(target: HVACMode | str) -> ACMode:
    """Return the device mode for a heater/cooler target.

    Raises:
        SensiboMappingError: If the target is neither heat nor cool.

    """
    match target:
        case HVACMode.HEAT:
            return ACMode.HEAT
        case HVACMode.COOL:
            return ACMode.COOL
    error_msg = f"Unsupported heater/cooler target: {target}"
    raise SensiboMappingError(error_msg)


def rotation_speed_for_fan_level(level: FanLevel | str | None) -> int:
    """Return the rotation speed (1-5) for a fan level.

    Levels outside the table, such as ``auto``, report the highest speed.
    """
    fan_level = FanLevel.parse(level)
    if fan_level is None:
        return DEFAULT_ROTATION_SPEED
    return ROTATION_SPEED_BY_FAN_LEVEL[fan_level]


def fan_level_for_rotation_speed(speed: int) -> FanLevel:
    """Return the fan level for a rotation speed.

    Speed 0 means "no change" and must be filtered out by the caller.

    Raises:
        SensiboMappingError: If the speed is outside 1-5.

    """
    try:
        return FAN_LEVEL_BY_ROTATION_SPEED[speed]
    except KeyError as err:
        error_msg = f"Unsupported rotation speed: {speed}"
        raise SensiboMappingError(error_msg) from err


def swing_enabled(state: RemoteDeviceState) -> bool:
    """Return whether both vertical and horizontal swing are full range."""
    return state.swing is SwingMode.FULL and state.horizontal_swing is SwingMode.FULL


def swing_fields_for(enabled: bool) -> dict[FieldName, SwingMode]:  # noqa: FBT001
    """Return the swing fields to write for a single swing flag."""
    swing = SwingMode.FULL if enabled else SwingMode.STOPPED
    return {FieldName.SWING: swing, FieldName.HORIZONTAL_SWING: swing}


def current_dehumidifier_action(state: RemoteDeviceState) -> HumidifierAction:
    """Return the dehumidifier action for a device state."""
    if active_for(ViewKind.DEHUMIDIFIER, state):
        return HumidifierAction.DRYING
    return HumidifierAction.OFF
