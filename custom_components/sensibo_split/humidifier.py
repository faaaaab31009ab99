"""Dehumidifier view of a Sensibo pod as a humidifier entity."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import TYPE_CHECKING, Any

from homeassistant.components.humidifier import (
    HumidifierAction,
    HumidifierDeviceClass,
    HumidifierEntity,
)
from homeassistant.exceptions import HomeAssistantError

from . import mapper
from .const import DEFAULT_SCAN_INTERVAL, DOMAIN
from .entity import SensiboViewEntity

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry
    from homeassistant.core import HomeAssistant
    from homeassistant.helpers.entity_platform import AddEntitiesCallback

    from .accessory import SensiboAccessory
    from .coordinator import ViewSnapshot

_LOGGER = logging.getLogger(__name__)

SCAN_INTERVAL = timedelta(seconds=DEFAULT_SCAN_INTERVAL)


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up the dehumidifier entity for a Sensibo pod."""
    accessory: SensiboAccessory = hass.data[DOMAIN][entry.entry_id]["accessory"]
    async_add_entities([SensiboDehumidifierEntity(accessory)], update_before_add=True)


class SensiboDehumidifierEntity(SensiboViewEntity, HumidifierEntity):
    """Humidifier entity for the dehumidifier (dry mode) view."""

    _attr_name = "Dehumidifier"
    _attr_device_class = HumidifierDeviceClass.DEHUMIDIFIER

    def __init__(self, accessory: SensiboAccessory) -> None:
        """Initialize the dehumidifier entity."""
        super().__init__(accessory, accessory.dehumidifier)
        self._attr_is_on = False
        self._attr_action = HumidifierAction.OFF
        self._attr_current_humidity = None
        self._attr_target_humidity = None

    def _update_from_snapshot(self, snapshot: ViewSnapshot) -> None:
        self._attr_is_on = snapshot.active
        self._attr_action = (
            mapper.current_dehumidifier_action(snapshot.state)
            if snapshot.active
            else HumidifierAction.OFF
        )
        self._attr_current_humidity = snapshot.current_humidity

    async def async_turn_on(self, **kwargs: Any) -> None:  # noqa: ANN401, ARG002
        """Switch the device to dry mode."""

        def apply() -> None:
            self._attr_is_on = True
            self._attr_action = HumidifierAction.DRYING

        await self._async_write(
            "active", self._view.async_set_active(True), apply  # noqa: FBT003
        )

    async def async_turn_off(self, **kwargs: Any) -> None:  # noqa: ANN401, ARG002
        """Power the device off if it is drying."""

        def apply() -> None:
            self._attr_is_on = False
            self._attr_action = HumidifierAction.OFF

        await self._async_write(
            "active", self._view.async_set_active(False), apply  # noqa: FBT003
        )

    async def async_set_humidity(self, humidity: int) -> None:
        """Reject target humidity, dry mode has no humidity setpoint."""
        error_msg = f"Target humidity not supported (requested {humidity}%)"
        raise HomeAssistantError(error_msg)
