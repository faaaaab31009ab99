"""
Configuration flow for Sensibo Split integration.

This module handles the setup of a Sensibo pod through Home Assistant's
config flow system. The pod id and API key are checked with one read of
the pod before the entry is created.
"""

import logging
from typing import Any

import httpx
import voluptuous as vol
from homeassistant.config_entries import ConfigFlow, ConfigFlowResult
from homeassistant.const import CONF_API_KEY, CONF_ID, CONF_NAME
from homeassistant.helpers.httpx_client import get_async_client

from . import api
from .const import (
    DEFAULT_NAME,
    DOMAIN,
    ERROR_API_ERROR,
    ERROR_CANNOT_CONNECT,
    ERROR_INVALID_AUTH,
    ERROR_TIMEOUT,
    ERROR_UNKNOWN,
)
from .models import FieldGroup

_LOGGER = logging.getLogger(__name__)


class SensiboSplitConfigFlow(ConfigFlow, domain=DOMAIN):
    """Handle configuration flow for Sensibo Split integration."""

    VERSION = 1

    async def async_step_user(
        self, user_input: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        """
        Handle the initial step of the config flow.

        Args:
            user_input: User input data containing pod id, API key and name.

        Returns:
            ConfigFlowResult indicating the next step or errors.

        """
        errors: dict[str, str] = {}

        if user_input is not None:
            device_id = user_input[CONF_ID].strip()
            api_key = user_input[CONF_API_KEY].strip()
            name = user_input.get(CONF_NAME) or DEFAULT_NAME

            try:
                session = get_async_client(self.hass)
                await api.async_fetch(
                    session, device_id, api_key, {FieldGroup.AC_STATE}
                )
                _LOGGER.info("Successfully read Sensibo pod %s", device_id)

            except api.SensiboApiAuthError as err:
                _LOGGER.warning("API key rejected for pod %s: %s", device_id, err)
                errors["base"] = ERROR_INVALID_AUTH
            except httpx.ConnectError:
                _LOGGER.exception("Cannot reach the Sensibo API for pod %s", device_id)
                errors["base"] = ERROR_CANNOT_CONNECT
            except httpx.TimeoutException:
                _LOGGER.exception("Sensibo API timed out for pod %s", device_id)
                errors["base"] = ERROR_TIMEOUT
            except api.SensiboApiClientError:
                _LOGGER.exception("Sensibo API error for pod %s", device_id)
                errors["base"] = ERROR_API_ERROR
            except Exception:
                _LOGGER.exception("Unexpected error while reading pod %s", device_id)
                errors["base"] = ERROR_UNKNOWN

            else:
                await self.async_set_unique_id(device_id)
                self._abort_if_unique_id_configured()

                return self.async_create_entry(
                    title=name,
                    data={
                        CONF_ID: device_id,
                        CONF_API_KEY: api_key,
                        CONF_NAME: name,
                    },
                )

        return self.async_show_form(
            step_id="user",
            data_schema=vol.Schema(
                {
                    vol.Required(CONF_ID): str,
                    vol.Required(CONF_API_KEY): str,
                    vol.Optional(CONF_NAME, default=DEFAULT_NAME): str,
                }
            ),
            errors=errors,
        )
