"""Mock Twilio service for development and testing."""

import logging
import uuid
from dataclasses import dataclass, field

from call_gateway.errors import ProviderRequestFailed
from call_gateway.services.twilio_protocol import (
    CallResult,
    CallStatus,
    TwilioServiceProtocol,
)

logger = logging.getLogger(__name__)


@dataclass
class MockCall:
    """Internal representation of a mock call."""

    call_sid: str
    to: str = ""
    from_: str = ""
    status: CallStatus = CallStatus.IN_PROGRESS
    twiml: str | None = None


@dataclass
class ProviderCommand:
    """A command the gateway sent to the provider, in issue order."""

    operation: str
    call_sid: str | None
    params: dict[str, str] = field(default_factory=dict)


class MockTwilioService(TwilioServiceProtocol):
    """
    Mock implementation of Twilio service.

    Simulates Twilio call control without a real account. Unknown call SIDs
    are accepted as live calls so that webhook-driven flows work locally.
    Operations can be configured to fail to exercise error handling.
    """

    def __init__(self) -> None:
        self._calls: dict[str, MockCall] = {}
        self._failures: dict[str, str] = {}
        self.commands: list[ProviderCommand] = []

    def _generate_sid(self, prefix: str) -> str:
        """Generate a Twilio-like SID."""
        return f"{prefix}{uuid.uuid4().hex[:32]}"

    def _check_failure(self, operation: str, call_sid: str | None) -> None:
        message = self._failures.pop(operation, None)
        if message is not None:
            raise ProviderRequestFailed(message, operation=operation, call_sid=call_sid, code=20404)

    def _get_or_create(self, call_sid: str) -> MockCall:
        call = self._calls.get(call_sid)
        if call is None:
            call = MockCall(call_sid=call_sid)
            self._calls[call_sid] = call
        return call

    async def redirect_call(self, call_sid: str, twiml: str) -> None:
        """Replace the TwiML of a mock call."""
        self.commands.append(ProviderCommand("redirect_call", call_sid, {"twiml": twiml}))
        self._check_failure("redirect_call", call_sid)

        call = self._get_or_create(call_sid)
        if call.status == CallStatus.COMPLETED:
            raise ProviderRequestFailed(
                "Call is not in-progress. Cannot redirect.",
                operation="redirect_call",
                call_sid=call_sid,
                code=21220,
            )
        call.twiml = twiml
        logger.debug("mock_twilio.redirect", extra={"call_sid": call_sid})

    async def hangup_call(self, call_sid: str) -> None:
        """Hang up a mock call."""
        self.commands.append(ProviderCommand("hangup_call", call_sid, {"status": "completed"}))
        self._check_failure("hangup_call", call_sid)

        self._get_or_create(call_sid).status = CallStatus.COMPLETED
        logger.debug("mock_twilio.hangup", extra={"call_sid": call_sid})

    async def make_call(self, to: str, from_: str, twiml: str) -> CallResult:
        """Initiate a mock call."""
        self.commands.append(
            ProviderCommand("make_call", None, {"to": to, "from_": from_, "twiml": twiml})
        )
        self._check_failure("make_call", None)

        call_sid = self._generate_sid("CA")
        self._calls[call_sid] = MockCall(
            call_sid=call_sid,
            to=to,
            from_=from_,
            status=CallStatus.QUEUED,
            twiml=twiml,
        )
        logger.debug("mock_twilio.make_call", extra={"call_sid": call_sid, "to": to})

        return CallResult(
            call_sid=call_sid,
            status=CallStatus.QUEUED,
            to=to,
            from_=from_,
        )

    # Test helper methods

    def fail_next(self, operation: str, message: str = "Simulated Twilio failure") -> None:
        """Make the next call to ``operation`` raise ProviderRequestFailed."""
        self._failures[operation] = message

    def get_call(self, call_sid: str) -> MockCall | None:
        """Get a mock call by SID (for testing)."""
        return self._calls.get(call_sid)
