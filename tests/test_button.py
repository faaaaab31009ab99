"""Tests for the Sensibo Split identify button."""

from unittest.mock import Mock, patch

import pytest
from homeassistant.components.button import ButtonDeviceClass
from homeassistant.const import EntityCategory

from custom_components.sensibo_split.accessory import SensiboAccessory
from custom_components.sensibo_split.button import (
    SensiboIdentifyButton,
    async_setup_entry,
)

from .common import DEVICE_ID


class TestSensiboIdentifyButton:
    """Tests for SensiboIdentifyButton."""

    @pytest.mark.asyncio
    async def test_async_setup_entry_adds_button(self, mock_hass: Mock) -> None:
        """Test that async_setup_entry adds the identify button."""
        entry = Mock()
        entry.entry_id = "test_entry"
        async_add_entities = Mock()

        await async_setup_entry(mock_hass, entry, async_add_entities)

        entities = async_add_entities.call_args[0][0]
        assert len(entities) == 1
        assert isinstance(entities[0], SensiboIdentifyButton)

    def test_init(self, accessory: SensiboAccessory) -> None:
        """Test the button attributes."""
        button = SensiboIdentifyButton(accessory)

        assert button.unique_id == f"{DEVICE_ID}_identify"
        assert button.device_class == ButtonDeviceClass.IDENTIFY
        assert button.entity_category == EntityCategory.DIAGNOSTIC

    @pytest.mark.asyncio
    async def test_press_identifies_accessory(
        self, accessory: SensiboAccessory, mock_client: Mock
    ) -> None:
        """Test that pressing the button identifies without touching the device."""
        button = SensiboIdentifyButton(accessory)

        with patch.object(accessory, "identify") as mock_identify:
            await button.async_press()

        mock_identify.assert_called_once_with()
        mock_client.async_patch_field.assert_not_awaited()
