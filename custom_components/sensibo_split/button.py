"""Identify button for a Sensibo pod."""

from __future__ import annotations

from typing import TYPE_CHECKING

from homeassistant.components.button import ButtonDeviceClass, ButtonEntity
from homeassistant.const import EntityCategory

from .const import DOMAIN

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry
    from homeassistant.core import HomeAssistant
    from homeassistant.helpers.entity_platform import AddEntitiesCallback

    from .accessory import SensiboAccessory


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up the identify button for a Sensibo pod."""
    accessory: SensiboAccessory = hass.data[DOMAIN][entry.entry_id]["accessory"]
    async_add_entities([SensiboIdentifyButton(accessory)])


class SensiboIdentifyButton(ButtonEntity):
    """Forwards identify presses to the accessory."""

    _attr_has_entity_name = True
    _attr_name = "Identify"
    _attr_device_class = ButtonDeviceClass.IDENTIFY
    _attr_entity_category = EntityCategory.DIAGNOSTIC
    _attr_should_poll = False

    def __init__(self, accessory: SensiboAccessory) -> None:
        self._accessory = accessory
        self._attr_unique_id = f"{accessory.device.id}_identify"
        self._attr_device_info = accessory.device_info

    async def async_press(self) -> None:
        """Handle the button press."""
        self._accessory.identify()
