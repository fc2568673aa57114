"""Unit tests for the real Twilio client wrapper."""

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest
import requests
from twilio.base.exceptions import TwilioRestException

from call_gateway.config import Settings
from call_gateway.errors import ConfigurationError, PartialTransferFailure, ProviderRequestFailed
from call_gateway.services.transfer_orchestrator import TransferOrchestrator
from call_gateway.services.twilio_protocol import CallStatus
from call_gateway.services.twilio_service import TwilioService


@pytest.fixture
def sdk_client():
    with patch("call_gateway.services.twilio_service.Client") as client_cls:
        yield client_cls.return_value


class TestTwilioService:
    def test_requires_account_credentials(self, settings: Settings):
        settings.twilio_auth_token = ""

        with pytest.raises(ConfigurationError):
            TwilioService(settings)

    @pytest.mark.asyncio
    async def test_redirect_updates_call_twiml(self, settings: Settings, sdk_client: MagicMock):
        service = TwilioService(settings)

        await service.redirect_call("CA123", "<Response/>")

        sdk_client.calls.assert_called_with("CA123")
        sdk_client.calls.return_value.update.assert_called_once_with(twiml="<Response/>")

    @pytest.mark.asyncio
    async def test_hangup_completes_call(self, settings: Settings, sdk_client: MagicMock):
        service = TwilioService(settings)

        await service.hangup_call("CA456")

        sdk_client.calls.assert_called_with("CA456")
        sdk_client.calls.return_value.update.assert_called_once_with(status="completed")

    @pytest.mark.asyncio
    async def test_make_call_returns_result(self, settings: Settings, sdk_client: MagicMock):
        sdk_client.calls.create.return_value = SimpleNamespace(sid="CA789", status="queued")
        service = TwilioService(settings)

        result = await service.make_call("client:agent_2", "+15551234567", "<Response/>")

        sdk_client.calls.create.assert_called_once_with(
            to="client:agent_2", from_="+15551234567", twiml="<Response/>"
        )
        assert result.call_sid == "CA789"
        assert result.status == CallStatus.QUEUED

    @pytest.mark.asyncio
    async def test_rest_error_becomes_provider_failure(self, settings: Settings, sdk_client: MagicMock):
        sdk_client.calls.return_value.update.side_effect = TwilioRestException(
            404, "/Calls/CA404.json", msg="The requested resource was not found", code=20404
        )
        service = TwilioService(settings)

        with pytest.raises(ProviderRequestFailed) as excinfo:
            await service.redirect_call("CA404", "<Response/>")

        error = excinfo.value
        assert error.operation == "redirect_call"
        assert error.call_sid == "CA404"
        assert error.code == 20404
        assert error.to_dict()["error"] == "provider_request_failed"

    @pytest.mark.asyncio
    async def test_network_error_becomes_provider_failure(
        self, settings: Settings, sdk_client: MagicMock
    ):
        """接続エラーもProviderRequestFailedに変換"""
        sdk_client.calls.return_value.update.side_effect = requests.exceptions.ConnectionError(
            "connection refused"
        )
        service = TwilioService(settings)

        with pytest.raises(ProviderRequestFailed) as excinfo:
            await service.redirect_call("CA123", "<Response/>")

        assert excinfo.value.operation == "redirect_call"
        assert excinfo.value.call_sid == "CA123"
        assert excinfo.value.code is None

    @pytest.mark.asyncio
    async def test_timeout_on_create_becomes_provider_failure(
        self, settings: Settings, sdk_client: MagicMock
    ):
        sdk_client.calls.create.side_effect = requests.exceptions.Timeout("read timed out")
        service = TwilioService(settings)

        with pytest.raises(ProviderRequestFailed) as excinfo:
            await service.make_call("client:agent_2", "+15551234567", "<Response/>")

        assert excinfo.value.operation == "make_call"


class TestTransferOverTwilioService:
    """Transfers driven through the real client wrapper."""

    @pytest.mark.asyncio
    async def test_network_error_after_hold_is_partial(
        self, settings: Settings, sdk_client: MagicMock
    ):
        """保留後のネットワーク障害は部分失敗として報告"""
        sdk_client.calls.create.side_effect = requests.exceptions.ConnectionError("connection reset")
        orchestrator = TransferOrchestrator(
            twilio=TwilioService(settings),
            caller_id=settings.twilio_phone_number,
            hold_music_url=settings.hold_music_url,
        )

        with pytest.raises(PartialTransferFailure) as excinfo:
            await orchestrator.warm_transfer_start("CA123", "agent_2")

        sdk_client.calls.return_value.update.assert_called_once()
        assert excinfo.value.failed_step == "originate_consult"
        assert excinfo.value.state == "on_hold"
        assert excinfo.value.applied_steps == ["hold_original"]
