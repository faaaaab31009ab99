"""Base entity for the logical views of a Sensibo pod."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

import httpx
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.entity import Entity

from .api import SensiboApiAuthError, SensiboApiClientError
from .const import REFRESH_DELAY
from .mapper import SensiboMappingError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from .accessory import SensiboAccessory
    from .coordinator import SensiboViewCoordinator, ViewSnapshot

_LOGGER = logging.getLogger(__name__)


class SensiboViewEntity(Entity):
    """Entity backed by one view coordinator.

    State is polled: every update reads the whole view with one fetch.
    Writes go straight to the coordinator; on success the entity shows the
    written value immediately and re-reads the device a few seconds later.
    """

    _attr_has_entity_name = True
    _attr_should_poll = True

    def __init__(
        self,
        accessory: SensiboAccessory,
        view: SensiboViewCoordinator,
    ) -> None:
        """Initialize the view entity.

        Args:
            accessory: Accessory owning the view.
            view: View coordinator this entity reads and writes through.

        """
        self._accessory = accessory
        self._view = view
        self._attr_unique_id = f"{accessory.device.id}_{view.kind}"
        self._attr_device_info = accessory.device_info
        self._refresh_task: asyncio.Task[None] | None = None

    async def async_added_to_hass(self) -> None:
        """Subscribe to overrides recorded when a sibling view takes over."""
        await super().async_added_to_hass()
        self.async_on_remove(
            self._accessory.overrides.async_add_listener(
                self._view.kind, self._handle_sibling_activation
            )
        )

    async def async_will_remove_from_hass(self) -> None:
        """Cancel a pending delayed refresh."""
        await super().async_will_remove_from_hass()
        if self._refresh_task is not None:
            self._refresh_task.cancel()
            self._refresh_task = None

    def _handle_sibling_activation(self) -> None:
        """Re-read the view right away after a sibling became active."""
        if self.hass is None:
            return
        self.async_schedule_update_ha_state(force_refresh=True)

    async def async_update(self) -> None:
        """Read the view and update the entity attributes."""
        try:
            snapshot = await self._view.async_read_snapshot()
        except (SensiboApiClientError, httpx.RequestError) as err:
            if self._attr_available:
                _LOGGER.warning("Unable to read %s: %s", self._view.kind, err)
            self._attr_available = False
            return

        if not self._attr_available:
            _LOGGER.info("%s is available again", self._view.kind)
        self._attr_available = True
        self._update_from_snapshot(snapshot)

    def _update_from_snapshot(self, snapshot: ViewSnapshot) -> None:
        """Apply a snapshot to the entity attributes."""
        raise NotImplementedError

    async def _async_write(
        self,
        description: str,
        action: Awaitable[None],
        optimistic: Callable[[], None] | None = None,
    ) -> None:
        """Run a write and surface failures as HomeAssistantError.

        Args:
            description: What is written, used in log and error messages.
            action: Coordinator call performing the write.
            optimistic: Applies the written value to the entity attributes.

        Raises:
            HomeAssistantError: If the value is invalid or the write fails.

        """
        try:
            await action
        except SensiboMappingError as err:
            error_msg = f"Invalid {description}: {err}"
            raise HomeAssistantError(error_msg) from err
        except SensiboApiAuthError as err:
            _LOGGER.exception(
                "Authentication error while setting %s on %s. "
                "Please check the API key.",
                description,
                self._view.kind,
            )
            error_msg = f"Authentication error while setting {description}"
            raise HomeAssistantError(error_msg) from err
        except SensiboApiClientError as err:
            _LOGGER.exception(
                "API error while setting %s on %s", description, self._view.kind
            )
            error_msg = f"API error while setting {description}: {err}"
            raise HomeAssistantError(error_msg) from err
        except httpx.RequestError as err:
            _LOGGER.exception(
                "Connection error while setting %s on %s",
                description,
                self._view.kind,
            )
            error_msg = f"Connection error while setting {description}: {err}"
            raise HomeAssistantError(error_msg) from err

        if optimistic is not None:
            optimistic()
        self.async_write_ha_state()
        self._schedule_refresh()

    def _schedule_refresh(self) -> None:
        """Re-read the device after it had time to apply a write."""
        if self._refresh_task is not None and not self._refresh_task.done():
            self._refresh_task.cancel()
        self._refresh_task = asyncio.create_task(self._async_delayed_refresh())

    async def _async_delayed_refresh(self) -> None:
        await asyncio.sleep(REFRESH_DELAY)
        self.async_schedule_update_ha_state(force_refresh=True)
