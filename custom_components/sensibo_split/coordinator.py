"""View coordinators for Sensibo Split.

A single air conditioner has one power flag and one mode, but it is exposed
as several logical views (heater/cooler, dehumidifier, fan). Each view gets
a coordinator that derives its state from the remote mode/power pair and
turns writes into the remote calls that keep at most one view active.

Coordinators are called concurrently and hold no lock: two writes racing on
the device end in whatever state the last request leaves behind.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from homeassistant.components.climate import HVACAction, HVACMode
from homeassistant.components.humidifier import HumidifierAction

from . import mapper
from .models import ACMode, FieldGroup, FieldName, RemoteDeviceState, ViewKind

if TYPE_CHECKING:
    from .api import SensiboDeviceClient

_LOGGER = logging.getLogger(__name__)

AC_STATE_FIELDS = frozenset({FieldGroup.AC_STATE})
MEASUREMENT_FIELDS = frozenset({FieldGroup.MEASUREMENTS})
ALL_FIELD_GROUPS = frozenset(FieldGroup)


class ActivityOverrides:
    """Reported-active overrides shared by the views of one accessory.

    After a view takes over the device, its siblings may still read a stale
    "active" answer until they fetch again. The activating coordinator
    records ``False`` for every sibling; the sibling consumes it once on
    its next successful activity read. Other reads only peek at it.
    """

    def __init__(self) -> None:
        """Initialize an empty override store."""
        self._pending: dict[ViewKind, bool] = {}
        self._listeners: dict[ViewKind, list[Callable[[], None]]] = {}

    def record_activation(self, active_view: ViewKind) -> None:
        """Mark every view except ``active_view`` as inactive."""
        self._pending.pop(active_view, None)
        for view in ViewKind:
            if view is active_view:
                continue
            self._pending[view] = False
            for listener in list(self._listeners.get(view, [])):
                listener()

    def consume(self, view: ViewKind) -> bool | None:
        """Return and clear the pending override of a view, if any."""
        return self._pending.pop(view, None)

    def peek(self, view: ViewKind) -> bool | None:
        """Return the pending override of a view without clearing it."""
        return self._pending.get(view)

    def async_add_listener(
        self, view: ViewKind, listener: Callable[[], None]
    ) -> Callable[[], None]:
        """Call ``listener`` whenever an override is recorded for ``view``.

        Returns:
            Callable that removes the listener.

        """
        self._listeners.setdefault(view, []).append(listener)

        def remove_listener() -> None:
            listeners = self._listeners.get(view, [])
            if listener in listeners:
                listeners.remove(listener)

        return remove_listener


@dataclass(slots=True)
class ViewSnapshot:
    """Everything a view reports, derived from one remote fetch."""

    active: bool
    current_temperature: float | None
    current_humidity: float | None
    target_temperature: float | None
    temperature_unit: str | None
    rotation_speed: int
    swing: bool
    state: RemoteDeviceState


class SensiboViewCoordinator:
    """Base coordinator for one logical view of a Sensibo pod."""

    kind: ClassVar[ViewKind]

    def __init__(
        self,
        client: SensiboDeviceClient,
        overrides: ActivityOverrides,
    ) -> None:
        """Initialize the view coordinator.

        Args:
            client: Remote client of the pod shared by all views.
            overrides: Override store shared by the views of the same pod.

        """
        self._client = client
        self._overrides = overrides

    @property
    def client(self) -> SensiboDeviceClient:
        """Return the remote client of the pod."""
        return self._client

    def activation_mode(self, state: RemoteDeviceState) -> ACMode:
        """Return the mode to write when this view is activated."""
        raise NotImplementedError

    def is_active(self, state: RemoteDeviceState) -> bool:
        """Return whether this view is active under a device state."""
        return mapper.active_for(self.kind, state)

    async def _async_fetch(self, fields: frozenset[FieldGroup]) -> RemoteDeviceState:
        return await self._client.async_fetch(fields)

    async def _async_fetch_activity(
        self, fields: frozenset[FieldGroup]
    ) -> tuple[RemoteDeviceState, bool | None]:
        """Fetch the device and consume this view's pending override.

        A failed fetch leaves the override in place.
        """
        state = await self._client.async_fetch(fields)
        return state, self._overrides.consume(self.kind)

    async def async_get_active(self) -> bool:
        """Return whether this view reports itself active."""
        state, override = await self._async_fetch_activity(AC_STATE_FIELDS)
        if override is not None:
            _LOGGER.debug("%s: reporting override active=%s", self.kind, override)
            return override
        return self.is_active(state)

    async def async_set_active(self, active: bool) -> None:  # noqa: FBT001
        """Activate or deactivate this view.

        Activation writes the mode before the power flag. Deactivating a
        view that does not control the device is a no-op.
        """
        state = await self._async_fetch(AC_STATE_FIELDS)

        if active:
            if self.is_active(state):
                _LOGGER.debug("%s: already active, nothing to write", self.kind)
                return
            mode = self.activation_mode(state)
            _LOGGER.debug("%s: activating with mode %s", self.kind, mode)
            await self._client.async_patch_field(FieldName.MODE, mode)
            await self._client.async_patch_field(FieldName.POWER, True)  # noqa: FBT003
            self._overrides.record_activation(self.kind)
            return

        if not self.is_active(state):
            _LOGGER.debug(
                "%s: not controlling the device (mode=%s, power=%s), "
                "ignoring deactivation",
                self.kind,
                state.mode,
                state.power,
            )
            return
        _LOGGER.debug("%s: powering off", self.kind)
        await self._client.async_patch_field(FieldName.POWER, False)  # noqa: FBT003

    async def async_get_current_temperature(self) -> float | None:
        """Return the measured room temperature."""
        state = await self._async_fetch(MEASUREMENT_FIELDS)
        return state.current_temperature

    async def async_get_current_humidity(self) -> float | None:
        """Return the measured room humidity."""
        state = await self._async_fetch(MEASUREMENT_FIELDS)
        return state.current_humidity

    async def async_get_rotation_speed(self) -> int:
        """Return the fan rotation speed (1-5)."""
        state = await self._async_fetch(AC_STATE_FIELDS)
        return mapper.rotation_speed_for_fan_level(state.fan_level)

    async def async_set_rotation_speed(self, speed: int) -> None:
        """Set the fan rotation speed; speed 0 requests no change."""
        if speed == 0:
            _LOGGER.debug("%s: rotation speed 0, nothing to write", self.kind)
            return
        level = mapper.fan_level_for_rotation_speed(speed)
        await self._client.async_patch_field(FieldName.FAN_LEVEL, level)

    async def async_get_swing(self) -> bool:
        """Return whether swing is enabled."""
        state = await self._async_fetch(AC_STATE_FIELDS)
        return mapper.swing_enabled(state)

    async def async_set_swing(self, enabled: bool) -> None:  # noqa: FBT001
        """Enable or disable vertical and horizontal swing together."""
        await self._client.async_bulk_update(mapper.swing_fields_for(enabled))

    async def async_read_snapshot(self) -> ViewSnapshot:
        """Read every value of this view from a single fetch."""
        state, override = await self._async_fetch_activity(ALL_FIELD_GROUPS)
        active = self.is_active(state) if override is None else override

        snapshot = ViewSnapshot(
            active=active,
            current_temperature=state.current_temperature,
            current_humidity=state.current_humidity,
            target_temperature=state.target_temperature,
            temperature_unit=state.temperature_unit,
            rotation_speed=mapper.rotation_speed_for_fan_level(state.fan_level),
            swing=mapper.swing_enabled(state),
            state=state,
        )
        _LOGGER.debug("%s: snapshot %s", self.kind, snapshot)
        return snapshot


class HeaterCoolerViewCoordinator(SensiboViewCoordinator):
    """Coordinator for the heater/cooler view (heat and cool modes)."""

    kind = ViewKind.HEATER_COOLER

    def activation_mode(self, state: RemoteDeviceState) -> ACMode:
        """Keep the current heat/cool mode, default to cool."""
        if state.mode in (ACMode.HEAT, ACMode.COOL):
            return state.mode
        return ACMode.COOL

    async def async_get_current_heater_cooler_state(self) -> HVACAction:
        """Return whether the device is heating, cooling or inactive."""
        state = await self._async_fetch(AC_STATE_FIELDS)
        if self._overrides.peek(self.kind) is False:
            return HVACAction.OFF
        return mapper.current_heater_cooler_state(state)

    async def async_get_target_heater_cooler_state(self) -> HVACMode:
        """Return the heat/cool target."""
        state = await self._async_fetch(AC_STATE_FIELDS)
        return mapper.target_heater_cooler_state(state)

    async def async_set_target_heater_cooler_state(self, target: HVACMode) -> None:
        """Set the heat/cool target.

        On a powered device controlled by another view, the mode change
        moves control to this view.
        """
        mode = mapper.mode_for_target(target)
        state = await self._async_fetch(AC_STATE_FIELDS)
        await self._client.async_patch_field(FieldName.MODE, mode)
        if state.power and not self.is_active(state):
            self._overrides.record_activation(self.kind)

    async def _async_get_target_temperature(self) -> float | None:
        state = await self._async_fetch(AC_STATE_FIELDS)
        return state.target_temperature

    async def async_get_cooling_threshold(self) -> float | None:
        """Return the cooling threshold (the device target temperature)."""
        return await self._async_get_target_temperature()

    async def async_get_heating_threshold(self) -> float | None:
        """Return the heating threshold (the device target temperature)."""
        return await self._async_get_target_temperature()

    async def async_set_cooling_threshold(self, value: float) -> None:
        """Set the cooling threshold."""
        await self._client.async_patch_field(FieldName.TARGET_TEMPERATURE, value)

    async def async_set_heating_threshold(self, value: float) -> None:
        """Set the heating threshold."""
        await self._client.async_patch_field(FieldName.TARGET_TEMPERATURE, value)


class DehumidifierViewCoordinator(SensiboViewCoordinator):
    """Coordinator for the dehumidifier view (dry mode)."""

    kind = ViewKind.DEHUMIDIFIER

    def activation_mode(self, state: RemoteDeviceState) -> ACMode:  # noqa: ARG002
        return ACMode.DRY

    async def async_get_current_dehumidifier_action(self) -> HumidifierAction:
        """Return whether the device is drying."""
        state = await self._async_fetch(AC_STATE_FIELDS)
        if self._overrides.peek(self.kind) is False:
            return HumidifierAction.OFF
        return mapper.current_dehumidifier_action(state)


class FanViewCoordinator(SensiboViewCoordinator):
    """Coordinator for the standalone fan view (fan mode)."""

    kind = ViewKind.FAN

    def activation_mode(self, state: RemoteDeviceState) -> ACMode:  # noqa: ARG002
        return ACMode.FAN
