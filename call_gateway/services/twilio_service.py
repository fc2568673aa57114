"""Real Twilio service implementation."""

import asyncio
import logging
from collections.abc import Callable
from typing import Any, TypeVar

from requests.exceptions import RequestException
from twilio.base.exceptions import TwilioException, TwilioRestException
from twilio.rest import Client

from call_gateway.config import Settings, get_settings
from call_gateway.errors import ConfigurationError, ProviderRequestFailed
from call_gateway.services.twilio_protocol import (
    CallResult,
    CallStatus,
    TwilioServiceProtocol,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TwilioService(TwilioServiceProtocol):
    """
    Real Twilio service implementation.

    Uses the Twilio Python SDK to interact with the Twilio API. The SDK is
    blocking, so every request runs in a worker thread.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize with Twilio credentials from settings."""
        settings = settings or get_settings()
        if not (settings.twilio_account_sid and settings.twilio_auth_token):
            raise ConfigurationError("TWILIO_ACCOUNT_SID and TWILIO_AUTH_TOKEN are required")
        self._client = Client(settings.twilio_account_sid, settings.twilio_auth_token)

    async def _request(
        self,
        operation: str,
        call_sid: str | None,
        func: Callable[..., T],
        **params: Any,
    ) -> T:
        try:
            return await asyncio.to_thread(func, **params)
        except TwilioRestException as exc:
            logger.warning(
                "twilio.request_failed",
                extra={"operation": operation, "call_sid": call_sid, "code": exc.code, "error": exc.msg},
            )
            raise ProviderRequestFailed(
                str(exc.msg), operation=operation, call_sid=call_sid, code=exc.code
            ) from exc
        except (TwilioException, RequestException) as exc:
            # the SDK's HTTP client lets connection errors and timeouts through unwrapped
            logger.warning(
                "twilio.request_failed",
                extra={"operation": operation, "call_sid": call_sid, "error": str(exc)},
            )
            raise ProviderRequestFailed(str(exc), operation=operation, call_sid=call_sid) from exc

    async def redirect_call(self, call_sid: str, twiml: str) -> None:
        """Replace the TwiML of a live call via Twilio."""
        await self._request("redirect_call", call_sid, self._client.calls(call_sid).update, twiml=twiml)

    async def hangup_call(self, call_sid: str) -> None:
        """Hang up a call via Twilio."""
        await self._request(
            "hangup_call", call_sid, self._client.calls(call_sid).update, status="completed"
        )

    async def make_call(self, to: str, from_: str, twiml: str) -> CallResult:
        """Initiate an outbound call via Twilio."""
        call = await self._request(
            "make_call", None, self._client.calls.create, to=to, from_=from_, twiml=twiml
        )

        return CallResult(
            call_sid=call.sid,
            status=CallStatus(call.status),
            to=to,
            from_=from_,
        )
