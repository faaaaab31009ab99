"""Tests for the Sensibo Split Config Flow."""

from unittest.mock import AsyncMock, Mock, patch

import httpx
import pytest
from homeassistant.const import CONF_API_KEY, CONF_ID, CONF_NAME
from homeassistant.data_entry_flow import FlowResultType

from custom_components.sensibo_split import api
from custom_components.sensibo_split.config_flow import SensiboSplitConfigFlow
from custom_components.sensibo_split.const import (
    DEFAULT_NAME,
    ERROR_API_ERROR,
    ERROR_CANNOT_CONNECT,
    ERROR_INVALID_AUTH,
    ERROR_TIMEOUT,
    ERROR_UNKNOWN,
)
from custom_components.sensibo_split.models import FieldGroup

from .common import API_KEY, DEVICE_ID, create_state

FETCH_TARGET = "custom_components.sensibo_split.config_flow.api.async_fetch"
CLIENT_TARGET = "custom_components.sensibo_split.config_flow.get_async_client"


@pytest.fixture
def flow() -> SensiboSplitConfigFlow:
    """Create a SensiboSplitConfigFlow instance for testing."""
    flow_instance = SensiboSplitConfigFlow()
    flow_instance.hass = Mock()
    flow_instance.async_set_unique_id = AsyncMock()
    flow_instance._abort_if_unique_id_configured = Mock()
    flow_instance.async_create_entry = Mock(
        return_value={"type": FlowResultType.CREATE_ENTRY},
    )
    flow_instance.async_show_form = Mock(return_value={"type": FlowResultType.FORM})
    return flow_instance


@pytest.fixture
def user_input() -> dict[str, str]:
    """Fixture providing valid user input."""
    return {CONF_ID: DEVICE_ID, CONF_API_KEY: API_KEY, CONF_NAME: "Living room"}


class TestSensiboSplitConfigFlowAsyncStepUser:
    """Tests for async_step_user method."""

    @pytest.mark.asyncio
    async def test_async_step_user_shows_form_when_no_input(
        self,
        flow: SensiboSplitConfigFlow,
    ) -> None:
        """Test that async_step_user shows form when no input provided."""
        result = await flow.async_step_user()

        flow.async_show_form.assert_called_once()
        call_args = flow.async_show_form.call_args
        assert call_args[1]["step_id"] == "user"
        assert call_args[1]["errors"] == {}
        assert result["type"] == FlowResultType.FORM

    @pytest.mark.asyncio
    async def test_async_step_user_creates_entry_on_successful_read(
        self,
        flow: SensiboSplitConfigFlow,
        user_input: dict[str, str],
    ) -> None:
        """Test that async_step_user creates an entry once the pod is readable."""
        mock_session = Mock()
        with (
            patch(CLIENT_TARGET, return_value=mock_session),
            patch(FETCH_TARGET, return_value=create_state()) as mock_fetch,
        ):
            result = await flow.async_step_user(user_input)

        mock_fetch.assert_awaited_once_with(
            mock_session, DEVICE_ID, API_KEY, {FieldGroup.AC_STATE}
        )
        flow.async_set_unique_id.assert_called_once_with(DEVICE_ID)
        flow._abort_if_unique_id_configured.assert_called_once()
        call_args = flow.async_create_entry.call_args
        assert call_args[1]["title"] == "Living room"
        assert call_args[1]["data"] == {
            CONF_ID: DEVICE_ID,
            CONF_API_KEY: API_KEY,
            CONF_NAME: "Living room",
        }
        assert result["type"] == FlowResultType.CREATE_ENTRY

    @pytest.mark.asyncio
    async def test_async_step_user_strips_input_and_defaults_name(
        self,
        flow: SensiboSplitConfigFlow,
    ) -> None:
        """Test that whitespace is stripped and a missing name gets the default."""
        user_input = {CONF_ID: f"  {DEVICE_ID} ", CONF_API_KEY: f"{API_KEY}\n"}
        with (
            patch(CLIENT_TARGET, return_value=Mock()),
            patch(FETCH_TARGET, return_value=create_state()),
        ):
            await flow.async_step_user(user_input)

        call_args = flow.async_create_entry.call_args
        assert call_args[1]["title"] == DEFAULT_NAME
        assert call_args[1]["data"][CONF_ID] == DEVICE_ID
        assert call_args[1]["data"][CONF_API_KEY] == API_KEY

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("error", "expected"),
        [
            (api.SensiboApiAuthError("Forbidden"), ERROR_INVALID_AUTH),
            (httpx.ConnectError("Connection failed"), ERROR_CANNOT_CONNECT),
            (httpx.ReadTimeout("Request timed out"), ERROR_TIMEOUT),
            (api.SensiboApiStatusError("Pod not found"), ERROR_API_ERROR),
            (api.SensiboApiClientError("Response is not valid JSON"), ERROR_API_ERROR),
            (RuntimeError("Unexpected"), ERROR_UNKNOWN),
        ],
    )
    async def test_async_step_user_shows_error(
        self,
        flow: SensiboSplitConfigFlow,
        user_input: dict[str, str],
        error: Exception,
        expected: str,
    ) -> None:
        """Test that each failure is reported with its error key."""
        with (
            patch(CLIENT_TARGET, return_value=Mock()),
            patch(FETCH_TARGET, side_effect=error),
        ):
            result = await flow.async_step_user(user_input)

        flow.async_show_form.assert_called_once()
        call_args = flow.async_show_form.call_args
        assert call_args[1]["errors"]["base"] == expected
        flow.async_create_entry.assert_not_called()
        assert result["type"] == FlowResultType.FORM
