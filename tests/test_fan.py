"""Tests for the Sensibo Split fan entity."""

from unittest.mock import Mock, call

import pytest
from homeassistant.exceptions import HomeAssistantError

from custom_components.sensibo_split.accessory import SensiboAccessory
from custom_components.sensibo_split.api import SensiboApiClientError
from custom_components.sensibo_split.fan import (
    SensiboFanEntity,
    async_setup_entry,
    percentage_to_rotation_speed,
    rotation_speed_to_percentage,
)
from custom_components.sensibo_split.models import (
    ACMode,
    FanLevel,
    FieldName,
    SwingMode,
)

from .common import DEVICE_ID, create_state


@pytest.fixture
def entity(accessory: SensiboAccessory) -> SensiboFanEntity:
    """Create a fan entity with state writes mocked out."""
    entity = SensiboFanEntity(accessory)
    entity.async_write_ha_state = Mock()
    entity._schedule_refresh = Mock()
    return entity


class TestPercentageConversion:
    """Tests for the speed/percentage helpers."""

    @pytest.mark.parametrize(
        ("speed", "percentage"),
        [(1, 20), (2, 40), (3, 60), (4, 80), (5, 100)],
    )
    def test_speed_to_percentage(self, speed: int, percentage: int) -> None:
        """Test that each speed maps to one fifth of the range."""
        assert rotation_speed_to_percentage(speed) == percentage
        assert percentage_to_rotation_speed(percentage) == speed

    @pytest.mark.parametrize(
        ("percentage", "speed"),
        [(0, 0), (1, 1), (21, 2), (50, 3), (99, 5)],
    )
    def test_percentage_rounds_up(self, percentage: int, speed: int) -> None:
        """Test that intermediate percentages round up to the next speed."""
        assert percentage_to_rotation_speed(percentage) == speed


class TestAsyncSetupEntry:
    """Tests for async_setup_entry function."""

    @pytest.mark.asyncio
    async def test_async_setup_entry_adds_fan(self, mock_hass: Mock) -> None:
        """Test that async_setup_entry adds one fan entity."""
        entry = Mock()
        entry.entry_id = "test_entry"
        async_add_entities = Mock()

        await async_setup_entry(mock_hass, entry, async_add_entities)

        entities = async_add_entities.call_args[0][0]
        assert len(entities) == 1
        assert isinstance(entities[0], SensiboFanEntity)


class TestSensiboFanEntity:
    """Tests for SensiboFanEntity."""

    def test_init(self, entity: SensiboFanEntity) -> None:
        """Test the attributes before the first update."""
        assert entity.unique_id == f"{DEVICE_ID}_fan"
        assert entity.is_on is False
        assert entity.speed_count == 5
        assert entity.oscillating is False

    @pytest.mark.asyncio
    async def test_update_while_cooling(self, entity: SensiboFanEntity) -> None:
        """Test that the fan view is off while the device cools."""
        await entity.async_update()

        assert entity.is_on is False
        assert entity.percentage == 60
        assert entity.oscillating is False

    @pytest.mark.asyncio
    async def test_update_in_fan_mode(
        self, mock_client: Mock, entity: SensiboFanEntity
    ) -> None:
        """Test the state of a device in fan mode."""
        mock_client.async_fetch.return_value = create_state(
            mode=ACMode.FAN,
            fan_level=FanLevel.LOW,
            swing=SwingMode.FULL,
            horizontal_swing=SwingMode.FULL,
        )

        await entity.async_update()

        assert entity.is_on is True
        assert entity.percentage == 20
        assert entity.oscillating is True

    @pytest.mark.asyncio
    async def test_turn_on_with_percentage(
        self, mock_client: Mock, entity: SensiboFanEntity
    ) -> None:
        """Test that turning on switches to fan mode and then sets the speed."""
        await entity.async_turn_on(percentage=100)

        assert mock_client.async_patch_field.await_args_list == [
            call(FieldName.MODE, ACMode.FAN),
            call(FieldName.POWER, True),
            call(FieldName.FAN_LEVEL, FanLevel.HIGH),
        ]
        assert entity.is_on is True
        assert entity.percentage == 100

    @pytest.mark.asyncio
    async def test_turn_off_while_cooling_writes_nothing(
        self, mock_client: Mock, entity: SensiboFanEntity
    ) -> None:
        """Test that the fan cannot power off a cooling device."""
        await entity.async_turn_off()

        mock_client.async_patch_field.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_turn_off_in_fan_mode(
        self, mock_client: Mock, entity: SensiboFanEntity
    ) -> None:
        """Test that turning off powers off a device in fan mode."""
        mock_client.async_fetch.return_value = create_state(mode=ACMode.FAN)

        await entity.async_turn_off()

        mock_client.async_patch_field.assert_awaited_once_with(FieldName.POWER, False)
        assert entity.is_on is False

    @pytest.mark.asyncio
    async def test_set_percentage_zero_writes_nothing(
        self, mock_client: Mock, entity: SensiboFanEntity
    ) -> None:
        """Test that 0% leaves the fan level unchanged."""
        await entity.async_update()

        await entity.async_set_percentage(0)

        mock_client.async_patch_field.assert_not_awaited()
        assert entity.percentage == 60

    @pytest.mark.asyncio
    async def test_set_percentage(
        self, mock_client: Mock, entity: SensiboFanEntity
    ) -> None:
        """Test that a percentage writes the matching fan level."""
        await entity.async_set_percentage(40)

        mock_client.async_patch_field.assert_awaited_once_with(
            FieldName.FAN_LEVEL, FanLevel.MEDIUM_LOW
        )
        assert entity.percentage == 40

    @pytest.mark.asyncio
    async def test_oscillate(self, mock_client: Mock, entity: SensiboFanEntity) -> None:
        """Test that oscillation writes both swing axes."""
        await entity.async_oscillate(True)

        mock_client.async_bulk_update.assert_awaited_once_with(
            {
                FieldName.SWING: SwingMode.FULL,
                FieldName.HORIZONTAL_SWING: SwingMode.FULL,
            }
        )
        assert entity.oscillating is True

    @pytest.mark.asyncio
    async def test_turn_on_api_error(
        self, mock_client: Mock, entity: SensiboFanEntity
    ) -> None:
        """Test that a vendor failure on activation raises HomeAssistantError."""
        mock_client.async_patch_field.side_effect = SensiboApiClientError("failure")

        with pytest.raises(HomeAssistantError):
            await entity.async_turn_on()

        assert entity.is_on is False
