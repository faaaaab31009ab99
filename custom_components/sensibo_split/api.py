"""API client for Sensibo pods.

This module provides functions to read and write the state of a single
Sensibo pod through the Sensibo REST API, and a small client object that
binds those functions to one device identifier.

No retries are performed here; the session returned by
``create_session_client`` carries the retry policy.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import TYPE_CHECKING, Any

import httpx
from homeassistant.helpers.httpx_client import create_async_httpx_client
from httpx_retries import Retry, RetryTransport

from .const import (
    BASE_URL,
    REQUEST_TIMEOUT,
    RETRY_BACKOFF_FACTOR,
    RETRY_TOTAL,
    SUCCESS_STATUS,
)
from .models import (
    ACMode,
    FanLevel,
    FieldGroup,
    FieldName,
    RemoteDeviceState,
    SwingMode,
)

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant

_LOGGER = logging.getLogger(__name__)

# HTTP status codes
HTTP_BAD_REQUEST = 400
HTTP_UNAUTHORIZED = 401
HTTP_FORBIDDEN = 403

ALL_FIELDS = "*"


class SensiboApiClientError(Exception):
    """Base exception for Sensibo API client errors."""


class SensiboApiAuthError(SensiboApiClientError):
    """Exception raised when the API key is rejected."""


class SensiboApiStatusError(SensiboApiClientError):
    """Exception raised when the API answers with a non-success status."""


def build_pod_url(device_id: str, path: str = "") -> str:
    """Build the URL of a pod resource.

    Args:
        device_id: Pod identifier.
        path: Optional sub-path below the pod, without leading slash.

    Returns:
        Absolute URL of the pod or of the requested sub-resource.

    """
    url = f"{BASE_URL}/pods/{device_id}"
    if path:
        url = f"{url}/{path}"
    return url


def fields_param(fields: Iterable[FieldGroup] | None) -> str:
    """Return the ``fields`` query value for a set of field groups.

    Args:
        fields: Field groups to request, or None/empty for every field.

    Returns:
        Comma separated group names in a stable order, or ``*``.

    """
    if not fields:
        return ALL_FIELDS
    requested = set(fields)
    return ",".join(group.value for group in FieldGroup if group in requested)


def to_wire_value(value: Any) -> Any:  # noqa: ANN401
    """Convert enum members to the plain values the API expects."""
    if isinstance(value, Enum):
        return value.value
    return value


def is_http_error(status: int) -> bool:
    """Check if HTTP status code indicates an error.

    Args:
        status: HTTP status code to check.

    Returns:
        True if status code is 400 or higher, False otherwise.

    """
    return status >= HTTP_BAD_REQUEST


def is_auth_error(status: int) -> bool:
    """Check if HTTP status code indicates a rejected API key.

    Args:
        status: HTTP status code to check.

    Returns:
        True if status code is 401 or 403, False otherwise.

    """
    return status in (HTTP_UNAUTHORIZED, HTTP_FORBIDDEN)


def is_success_status(data: Any) -> bool:  # noqa: ANN401
    """Check if an API response body reports success.

    Args:
        data: Parsed API response body.

    Returns:
        True only if the body is an object whose status is "success".

    """
    return isinstance(data, dict) and data.get("status") == SUCCESS_STATUS


def validate_response(response: httpx.Response) -> dict[str, Any]:
    """Validate HTTP response and return parsed JSON data.

    Args:
        response: HTTP response object to validate.

    Returns:
        Parsed JSON data from response.

    Raises:
        SensiboApiAuthError: If the API key is rejected.
        SensiboApiStatusError: If the body status is not "success".
        SensiboApiClientError: If the request failed or the body is not JSON.

    """
    _validate_http_status(response)
    try:
        data = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as err:
        error_msg = f"Response is not valid JSON: {err}"
        raise SensiboApiClientError(error_msg) from err
    _validate_api_status(data)
    return data


def _validate_http_status(response: httpx.Response) -> None:
    if not is_http_error(response.status_code):
        return

    if is_auth_error(response.status_code):
        auth_error = "Authentication error"
        raise SensiboApiAuthError(auth_error)

    client_error = f"Request failed: {response.status_code}"
    raise SensiboApiClientError(client_error)


def _validate_api_status(data: Any) -> None:  # noqa: ANN401
    if is_success_status(data):
        return

    if not isinstance(data, dict):
        error_message = "Response `status` was not success"
        raise SensiboApiStatusError(error_message)

    reason = data.get("reason") or data.get("message")
    error_message = f"Response `status` was {data.get('status')!r}"
    if reason:
        error_message = f"{error_message}: {reason}"
    raise SensiboApiStatusError(error_message)


def extract_result(data: dict[str, Any]) -> dict[str, Any]:
    """Extract the result object from API response.

    Args:
        data: API response data dictionary.

    Returns:
        The ``result`` object, or an empty dict when it is missing.

    """
    result = data.get("result")
    return result if isinstance(result, dict) else {}


def _as_float(value: Any) -> float | None:  # noqa: ANN401
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        _LOGGER.debug("Ignoring non-numeric value %r", value)
        return None


def decode_device_state(result: dict[str, Any]) -> RemoteDeviceState:
    """Decode a pod ``result`` object into a RemoteDeviceState.

    Groups that are absent from the result leave their fields as None.
    Vendor values outside the known enumerations are mapped to UNKNOWN
    (mode) or None (fan level, swing).

    Args:
        result: The ``result`` object of a pod response.

    Returns:
        RemoteDeviceState with the decoded values.

    """
    state = RemoteDeviceState(raw_state=result)

    ac_state = result.get(FieldGroup.AC_STATE.value)
    if isinstance(ac_state, dict):
        power = ac_state.get(FieldName.POWER.value)
        state.power = bool(power) if power is not None else None
        state.mode = ACMode.parse(ac_state.get(FieldName.MODE.value))
        state.target_temperature = _as_float(
            ac_state.get(FieldName.TARGET_TEMPERATURE.value)
        )
        state.temperature_unit = ac_state.get("temperatureUnit")
        state.fan_level = FanLevel.parse(ac_state.get(FieldName.FAN_LEVEL.value))
        state.swing = SwingMode.parse(ac_state.get(FieldName.SWING.value))
        state.horizontal_swing = SwingMode.parse(
            ac_state.get(FieldName.HORIZONTAL_SWING.value)
        )

        if state.mode is ACMode.UNKNOWN:
            if state.power:
                _LOGGER.warning(
                    "Device is on in an unsupported mode (%s), no view is active",
                    ac_state.get(FieldName.MODE.value),
                )
            else:
                _LOGGER.debug("Unsupported mode reported: %s", ac_state.get("mode"))
        if state.fan_level is None and FieldName.FAN_LEVEL.value in ac_state:
            _LOGGER.debug(
                "Unsupported fan level reported: %s", ac_state.get("fanLevel")
            )

    measurements = result.get(FieldGroup.MEASUREMENTS.value)
    if isinstance(measurements, dict):
        state.current_temperature = _as_float(measurements.get("temperature"))
        state.current_humidity = _as_float(measurements.get("humidity"))

    return state


def create_session_client(hass: HomeAssistant) -> httpx.AsyncClient:
    """Create HTTP client with retry logic for Sensibo API.

    Args:
        hass: Home Assistant instance.

    Returns:
        Configured httpx AsyncClient with retry transport.

    """
    base_client = create_async_httpx_client(hass, timeout=REQUEST_TIMEOUT)
    retry = Retry(total=RETRY_TOTAL, backoff_factor=RETRY_BACKOFF_FACTOR)
    base_client._transport = RetryTransport(  # noqa: SLF001
        transport=base_client._transport,  # noqa: SLF001
        retry=retry,
    )
    return base_client


async def async_fetch(
    session: httpx.AsyncClient,
    device_id: str,
    api_key: str,
    fields: Iterable[FieldGroup] | None = None,
) -> RemoteDeviceState:
    """Read the state of a pod.

    Args:
        session: HTTP client session.
        device_id: Pod identifier.
        api_key: Sensibo API key.
        fields: Field groups to request, None for all.

    Returns:
        RemoteDeviceState decoded from the response.

    Raises:
        SensiboApiAuthError: If the API key is rejected.
        SensiboApiStatusError: If the API reports a failure.
        SensiboApiClientError: If the request fails.

    """
    params = {"apiKey": api_key, "fields": fields_param(fields)}

    _LOGGER.debug("Fetching %s for device %s", params["fields"], device_id)
    response = await session.get(build_pod_url(device_id), params=params)
    data = validate_response(response)
    _LOGGER.debug("Fetch response for device %s: %s", device_id, data)
    return decode_device_state(extract_result(data))


async def async_patch_field(
    session: httpx.AsyncClient,
    device_id: str,
    api_key: str,
    field: FieldName,
    value: Any,  # noqa: ANN401
) -> dict[str, Any]:
    """Write a single acState field.

    Args:
        session: HTTP client session.
        device_id: Pod identifier.
        api_key: Sensibo API key.
        field: Field to change.
        value: New value of the field.

    Returns:
        The ``result`` object of the response.

    Raises:
        SensiboApiAuthError: If the API key is rejected.
        SensiboApiStatusError: If the API reports a failure.
        SensiboApiClientError: If the request fails.

    """
    url = build_pod_url(device_id, f"acStates/{FieldName(field).value}")
    payload = {"newValue": to_wire_value(value)}

    _LOGGER.debug("PATCH %s for device %s: %s", field, device_id, payload)
    response = await session.patch(url, params={"apiKey": api_key}, json=payload)
    data = validate_response(response)
    _LOGGER.debug("PATCH response for device %s: %s", device_id, data)
    return extract_result(data)


async def async_bulk_update(
    session: httpx.AsyncClient,
    device_id: str,
    api_key: str,
    fields: Mapping[FieldName, Any],
) -> dict[str, Any]:
    """Write several acState fields in one request.

    The API does not promise that the fields are applied together, so
    callers must tolerate partial application.

    Args:
        session: HTTP client session.
        device_id: Pod identifier.
        api_key: Sensibo API key.
        fields: Mapping of field to new value.

    Returns:
        The ``result`` object of the response.

    Raises:
        SensiboApiAuthError: If the API key is rejected.
        SensiboApiStatusError: If the API reports a failure.
        SensiboApiClientError: If the request fails.

    """
    url = build_pod_url(device_id, "acStates")
    payload = {
        FieldName(name).value: to_wire_value(value) for name, value in fields.items()
    }

    _LOGGER.debug("POST acStates for device %s: %s", device_id, payload)
    response = await session.post(url, params={"apiKey": api_key}, json=payload)
    data = validate_response(response)
    _LOGGER.debug("POST response for device %s: %s", device_id, data)
    return extract_result(data)


class SensiboDeviceClient:
    """Remote client bound to one Sensibo pod."""

    def __init__(
        self,
        session: httpx.AsyncClient,
        device_id: str,
        api_key: str,
    ) -> None:
        """Initialize the client.

        Args:
            session: HTTP client session used for every request.
            device_id: Pod identifier.
            api_key: Sensibo API key.

        """
        self._session = session
        self._api_key = api_key
        self.device_id = device_id

    async def async_fetch(
        self, fields: Iterable[FieldGroup] | None = None
    ) -> RemoteDeviceState:
        """Read the requested field groups of the pod."""
        return await async_fetch(self._session, self.device_id, self._api_key, fields)

    async def async_patch_field(
        self,
        field: FieldName,
        value: Any,  # noqa: ANN401
    ) -> dict[str, Any]:
        """Write one field of the pod."""
        return await async_patch_field(
            self._session, self.device_id, self._api_key, field, value
        )

    async def async_bulk_update(
        self, fields: Mapping[FieldName, Any]
    ) -> dict[str, Any]:
        """Write several fields of the pod in one request."""
        return await async_bulk_update(
            self._session, self.device_id, self._api_key, fields
        )
