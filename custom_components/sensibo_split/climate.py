"""Heater/cooler view of a Sensibo pod as a climate entity.

The entity is active only while the device is powered in heat or cool
mode. Both temperature thresholds map to the single device target
temperature; the limits follow the current heat/cool target.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import TYPE_CHECKING, Any

from homeassistant.components.climate import (
    ClimateEntity,
    ClimateEntityFeature,
    HVACAction,
    HVACMode,
)
from homeassistant.components.climate.const import SWING_OFF, SWING_ON
from homeassistant.const import ATTR_TEMPERATURE, UnitOfTemperature
from homeassistant.exceptions import HomeAssistantError

from . import mapper
from .const import (
    COOLING_THRESHOLD_MAX,
    COOLING_THRESHOLD_MIN,
    DEFAULT_SCAN_INTERVAL,
    DOMAIN,
    HEATING_THRESHOLD_MAX,
    HEATING_THRESHOLD_MIN,
    THRESHOLD_STEP,
)
from .entity import SensiboViewEntity
from .models import FanLevel

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry
    from homeassistant.core import HomeAssistant
    from homeassistant.helpers.entity_platform import AddEntitiesCallback

    from .accessory import SensiboAccessory
    from .coordinator import HeaterCoolerViewCoordinator, ViewSnapshot

_LOGGER = logging.getLogger(__name__)

SCAN_INTERVAL = timedelta(seconds=DEFAULT_SCAN_INTERVAL)

ATTR_HVAC_MODE = "hvac_mode"
FAHRENHEIT = "F"


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up the heater/cooler entity for a Sensibo pod."""
    accessory: SensiboAccessory = hass.data[DOMAIN][entry.entry_id]["accessory"]
    async_add_entities([SensiboHeaterCoolerEntity(accessory)], update_before_add=True)


class SensiboHeaterCoolerEntity(SensiboViewEntity, ClimateEntity):
    """Climate entity for the heater/cooler view.

    Provides heat/cool control, target temperature, fan speed and swing.
    """

    _attr_name = "Heater cooler"
    _attr_target_temperature_step = THRESHOLD_STEP

    _view: HeaterCoolerViewCoordinator

    def __init__(self, accessory: SensiboAccessory) -> None:
        """Initialize the heater/cooler entity.

        Args:
            accessory: Accessory owning the heater/cooler view.

        """
        super().__init__(accessory, accessory.heater_cooler)

        self._attr_hvac_mode = HVACMode.OFF
        self._attr_hvac_action = HVACAction.OFF
        self._target_mode = HVACMode.COOL
        self._attr_target_temperature = None
        self._attr_current_temperature = None
        self._attr_temperature_unit = UnitOfTemperature.CELSIUS
        self._attr_fan_mode = None
        self._attr_swing_mode = SWING_OFF

        self._configure_features()

    def _configure_features(self) -> None:
        """Configure entity features for the heater/cooler view."""
        self._attr_hvac_modes = [HVACMode.OFF, HVACMode.HEAT, HVACMode.COOL]
        self._attr_fan_modes = [level.value for level in FanLevel]
        self._attr_swing_modes = [SWING_OFF, SWING_ON]
        self._attr_supported_features = (
            ClimateEntityFeature.TARGET_TEMPERATURE
            | ClimateEntityFeature.FAN_MODE
            | ClimateEntityFeature.SWING_MODE
            | ClimateEntityFeature.TURN_OFF
            | ClimateEntityFeature.TURN_ON
        )

    @property
    def min_temp(self) -> float:
        """Return the lowest threshold allowed for the current target."""
        if self._target_mode == HVACMode.HEAT:
            return HEATING_THRESHOLD_MIN
        return COOLING_THRESHOLD_MIN

    @property
    def max_temp(self) -> float:
        """Return the highest threshold allowed for the current target."""
        if self._target_mode == HVACMode.HEAT:
            return HEATING_THRESHOLD_MAX
        return COOLING_THRESHOLD_MAX

    def _update_from_snapshot(self, snapshot: ViewSnapshot) -> None:
        state = snapshot.state
        self._target_mode = mapper.target_heater_cooler_state(state)
        self._attr_hvac_mode = self._target_mode if snapshot.active else HVACMode.OFF
        self._attr_hvac_action = (
            mapper.current_heater_cooler_state(state)
            if snapshot.active
            else HVACAction.OFF
        )
        self._attr_target_temperature = snapshot.target_temperature
        self._attr_current_temperature = snapshot.current_temperature
        self._attr_temperature_unit = (
            UnitOfTemperature.FAHRENHEIT
            if snapshot.temperature_unit == FAHRENHEIT
            else UnitOfTemperature.CELSIUS
        )
        self._attr_fan_mode = mapper.fan_level_for_rotation_speed(
            snapshot.rotation_speed
        ).value
        self._attr_swing_mode = SWING_ON if snapshot.swing else SWING_OFF
        _LOGGER.debug(
            "%s: hvac_mode=%s, action=%s, target=%s, fan=%s, swing=%s",
            self.name,
            self._attr_hvac_mode,
            self._attr_hvac_action,
            self._attr_target_temperature,
            self._attr_fan_mode,
            self._attr_swing_mode,
        )

    async def async_set_hvac_mode(self, hvac_mode: HVACMode) -> None:
        """Set the HVAC mode.

        Args:
            hvac_mode: OFF deactivates the view, HEAT/COOL activate it.

        """
        if hvac_mode == HVACMode.OFF:
            await self.async_turn_off()
            return

        def apply() -> None:
            self._target_mode = hvac_mode
            self._attr_hvac_mode = hvac_mode

        await self._async_write(
            "target heater/cooler state",
            self._view.async_set_target_heater_cooler_state(hvac_mode),
        )
        await self._async_write(
            "active", self._view.async_set_active(True), apply  # noqa: FBT003
        )

    async def async_set_temperature(self, **kwargs: Any) -> None:  # noqa: ANN401
        """Set the target temperature.

        The threshold matching the current target (heating or cooling) is
        written; both end up in the single device target temperature.

        Args:
            **kwargs: Keyword arguments containing temperature data.

        """
        if (hvac_mode := kwargs.get(ATTR_HVAC_MODE)) is not None:
            await self.async_set_hvac_mode(hvac_mode)

        temperature = kwargs.get(ATTR_TEMPERATURE)
        if temperature is None:
            return

        if self._target_mode == HVACMode.HEAT:
            action = self._view.async_set_heating_threshold(temperature)
            description = "heating threshold"
        else:
            action = self._view.async_set_cooling_threshold(temperature)
            description = "cooling threshold"

        def apply() -> None:
            self._attr_target_temperature = temperature

        await self._async_write(description, action, apply)

    async def async_set_fan_mode(self, fan_mode: str) -> None:
        """Set the fan mode.

        Args:
            fan_mode: One of the supported fan levels.

        """
        level = FanLevel.parse(fan_mode)
        if level is None:
            error_msg = f"Unsupported fan mode: {fan_mode}"
            raise HomeAssistantError(error_msg)

        def apply() -> None:
            self._attr_fan_mode = level.value

        await self._async_write(
            "rotation speed",
            self._view.async_set_rotation_speed(
                mapper.rotation_speed_for_fan_level(level)
            ),
            apply,
        )

    async def async_set_swing_mode(self, swing_mode: str) -> None:
        """Set the swing mode.

        Args:
            swing_mode: SWING_ON or SWING_OFF.

        """

        def apply() -> None:
            self._attr_swing_mode = swing_mode

        await self._async_write(
            "swing", self._view.async_set_swing(swing_mode == SWING_ON), apply
        )

    async def async_turn_on(self) -> None:
        """Activate the heater/cooler view."""

        def apply() -> None:
            self._attr_hvac_mode = self._target_mode

        await self._async_write(
            "active", self._view.async_set_active(True), apply  # noqa: FBT003
        )

    async def async_turn_off(self) -> None:
        """Deactivate the heater/cooler view."""

        def apply() -> None:
            self._attr_hvac_mode = HVACMode.OFF
            self._attr_hvac_action = HVACAction.OFF

        await self._async_write(
            "active", self._view.async_set_active(False), apply  # noqa: FBT003
        )
