from __future__ import annotations

import logging

import httpx
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import CONF_API_KEY, CONF_ID, CONF_NAME, Platform
from homeassistant.core import HomeAssistant

from . import api
from .accessory import SensiboAccessory
from .api import SensiboDeviceClient, create_session_client
from .const import DEFAULT_NAME, DOMAIN
from .coordinator import AC_STATE_FIELDS
from .models import SensiboDevice

_LOGGER = logging.getLogger(__name__)

PLATFORMS = [Platform.BUTTON, Platform.CLIMATE, Platform.FAN, Platform.HUMIDIFIER]


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    _LOGGER.info("Setting up Sensibo Split for entry %s", entry.entry_id)

    if CONF_ID not in entry.data or CONF_API_KEY not in entry.data:
        _LOGGER.error(
            "Entry %s has no pod id or API key, remove and add it again",
            entry.entry_id,
        )
        return False

    device = SensiboDevice(
        id=entry.data[CONF_ID],
        name=entry.data.get(CONF_NAME) or DEFAULT_NAME,
    )
    session = create_session_client(hass)
    client = SensiboDeviceClient(session, device.id, entry.data[CONF_API_KEY])

    try:
        _LOGGER.debug("Checking that pod %s is reachable", device.id)
        await client.async_fetch(AC_STATE_FIELDS)
    except api.SensiboApiAuthError as err:
        _LOGGER.warning("Sensibo rejected the API key for pod %s: %s", device.id, err)
        return False
    except api.SensiboApiClientError as err:
        _LOGGER.error("Sensibo API error for pod %s: %s", device.id, err)
        return False
    except httpx.ConnectError as err:
        _LOGGER.error("Cannot reach the Sensibo API for pod %s: %s", device.id, err)
        return False
    except httpx.TimeoutException as err:
        _LOGGER.error("Sensibo API timed out for pod %s: %s", device.id, err)
        return False
    except Exception:
        _LOGGER.exception("Unexpected error while reading pod %s", device.id)
        return False

    accessory = SensiboAccessory(client, device)
    hass.data.setdefault(DOMAIN, {})[entry.entry_id] = {
        "session": session,
        "client": client,
        "accessory": accessory,
    }
    _LOGGER.debug(
        "Pod %s (%s) publishes views %s",
        device.id,
        device.name,
        accessory.get_services(),
    )

    try:
        await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)
    except Exception:
        _LOGGER.exception("Failed to set up platforms for pod %s", device.id)
        return False

    _LOGGER.info("Sensibo Split ready for pod %s", device.id)
    return True


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    _LOGGER.info("Unloading Sensibo Split for entry %s", entry.entry_id)

    try:
        unload_ok = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)
    except Exception:
        _LOGGER.exception("Error unloading platforms of entry %s", entry.entry_id)
        return False

    if not unload_ok:
        _LOGGER.warning("Some platforms of entry %s did not unload", entry.entry_id)
        return False

    hass.data.get(DOMAIN, {}).pop(entry.entry_id, None)
    _LOGGER.debug("Released pod data of entry %s", entry.entry_id)
    return True
