"""Accessory that splits one Sensibo pod into several logical devices."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from homeassistant.helpers.device_registry import DeviceInfo

from .const import DOMAIN, MANUFACTURER, MODEL
from .coordinator import (
    ActivityOverrides,
    DehumidifierViewCoordinator,
    FanViewCoordinator,
    HeaterCoolerViewCoordinator,
    SensiboViewCoordinator,
)
from .models import SensiboDevice, ViewKind

if TYPE_CHECKING:
    from .api import SensiboDeviceClient

_LOGGER = logging.getLogger(__name__)


class SensiboAccessory:
    """Owns the view coordinators of a single Sensibo pod.

    Every accessory has its own override store, so views of different pods
    never affect each other.
    """

    def __init__(self, client: SensiboDeviceClient, device: SensiboDevice) -> None:
        """Initialize the accessory.

        Args:
            client: Remote client bound to the pod.
            device: Identity of the pod.

        """
        self.client = client
        self.device = device
        self.overrides = ActivityOverrides()

        self.heater_cooler = HeaterCoolerViewCoordinator(client, self.overrides)
        self.dehumidifier = DehumidifierViewCoordinator(client, self.overrides)
        self.fan = FanViewCoordinator(client, self.overrides)

    @property
    def views(self) -> dict[ViewKind, SensiboViewCoordinator]:
        """Return the view coordinators keyed by view kind."""
        return {
            ViewKind.HEATER_COOLER: self.heater_cooler,
            ViewKind.DEHUMIDIFIER: self.dehumidifier,
            ViewKind.FAN: self.fan,
        }

    def get_view(self, kind: ViewKind) -> SensiboViewCoordinator:
        """Return the coordinator of one view."""
        return self.views[kind]

    def get_services(self) -> list[ViewKind]:
        """Return the views this accessory publishes."""
        return list(self.views)

    def identify(self) -> None:
        """Handle an identify request."""
        _LOGGER.info("Identify requested for %s (%s)", self.device.name, self.device.id)

    @property
    def device_info(self) -> DeviceInfo:
        """Return the Home Assistant device entry shared by every view."""
        return DeviceInfo(
            identifiers={(DOMAIN, self.device.id)},
            manufacturer=MANUFACTURER,
            model=MODEL,
            name=self.device.name,
        )
