"""Standalone fan view of a Sensibo pod as a fan entity.

The five device fan levels are exposed as five speeds. A percentage of 0
maps to rotation speed 0, which leaves the fan level unchanged.
"""

from __future__ import annotations

import logging
import math
from datetime import timedelta
from typing import TYPE_CHECKING, Any

from homeassistant.components.fan import FanEntity, FanEntityFeature
from homeassistant.util.percentage import (
    percentage_to_ranged_value,
    ranged_value_to_percentage,
)

from .const import DEFAULT_SCAN_INTERVAL, DOMAIN, ROTATION_SPEED_MAX, ROTATION_SPEED_MIN
from .entity import SensiboViewEntity

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry
    from homeassistant.core import HomeAssistant
    from homeassistant.helpers.entity_platform import AddEntitiesCallback

    from .accessory import SensiboAccessory
    from .coordinator import ViewSnapshot

_LOGGER = logging.getLogger(__name__)

SCAN_INTERVAL = timedelta(seconds=DEFAULT_SCAN_INTERVAL)

SPEED_RANGE = (ROTATION_SPEED_MIN, ROTATION_SPEED_MAX)


def rotation_speed_to_percentage(speed: int) -> int:
    """Convert a rotation speed (1-5) to a fan percentage."""
    return ranged_value_to_percentage(SPEED_RANGE, speed)


def percentage_to_rotation_speed(percentage: int) -> int:
    """Convert a fan percentage to a rotation speed, 0 for 0%."""
    if percentage <= 0:
        return 0
    return math.ceil(percentage_to_ranged_value(SPEED_RANGE, percentage))


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up the fan entity for a Sensibo pod."""
    accessory: SensiboAccessory = hass.data[DOMAIN][entry.entry_id]["accessory"]
    async_add_entities([SensiboFanEntity(accessory)], update_before_add=True)


class SensiboFanEntity(SensiboViewEntity, FanEntity):
    """Fan entity for the fan-only view."""

    _attr_name = "Fan"
    _attr_speed_count = ROTATION_SPEED_MAX
    _attr_supported_features = (
        FanEntityFeature.SET_SPEED
        | FanEntityFeature.OSCILLATE
        | FanEntityFeature.TURN_ON
        | FanEntityFeature.TURN_OFF
    )

    def __init__(self, accessory: SensiboAccessory) -> None:
        """Initialize the fan entity."""
        super().__init__(accessory, accessory.fan)
        self._attr_is_on = False
        self._attr_percentage = None
        self._attr_oscillating = False

    def _update_from_snapshot(self, snapshot: ViewSnapshot) -> None:
        self._attr_is_on = snapshot.active
        self._attr_percentage = rotation_speed_to_percentage(snapshot.rotation_speed)
        self._attr_oscillating = snapshot.swing

    async def async_set_percentage(self, percentage: int) -> None:
        """Set the fan speed."""
        speed = percentage_to_rotation_speed(percentage)

        def apply() -> None:
            if speed:
                self._attr_percentage = rotation_speed_to_percentage(speed)

        await self._async_write(
            "rotation speed", self._view.async_set_rotation_speed(speed), apply
        )

    async def async_oscillate(self, oscillating: bool) -> None:  # noqa: FBT001
        """Enable or disable swing."""

        def apply() -> None:
            self._attr_oscillating = oscillating

        await self._async_write(
            "swing", self._view.async_set_swing(oscillating), apply
        )

    async def async_turn_on(
        self,
        percentage: int | None = None,
        preset_mode: str | None = None,  # noqa: ARG002
        **kwargs: Any,  # noqa: ANN401, ARG002
    ) -> None:
        """Switch the device to fan mode, optionally at a given speed."""

        def apply() -> None:
            self._attr_is_on = True

        await self._async_write(
            "active", self._view.async_set_active(True), apply  # noqa: FBT003
        )
        if percentage is not None:
            await self.async_set_percentage(percentage)

    async def async_turn_off(self, **kwargs: Any) -> None:  # noqa: ANN401, ARG002
        """Power the device off if it is in fan mode."""

        def apply() -> None:
            self._attr_is_on = False

        await self._async_write(
            "active", self._view.async_set_active(False), apply  # noqa: FBT003
        )
