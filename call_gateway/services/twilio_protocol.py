"""Twilio service protocol definition."""

from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class CallStatus(str, Enum):
    """Twilio call statuses."""

    QUEUED = "queued"
    RINGING = "ringing"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    BUSY = "busy"
    FAILED = "failed"
    NO_ANSWER = "no-answer"
    CANCELED = "canceled"


@dataclass
class CallResult:
    """Result of a call initiation."""

    call_sid: str
    status: CallStatus
    to: str
    from_: str


class TwilioServiceProtocol(Protocol):
    """Protocol for Twilio service implementations.

    Implementations raise ``ProviderRequestFailed`` when Twilio rejects a
    command or cannot be reached.
    """

    async def redirect_call(self, call_sid: str, twiml: str) -> None:
        """
        Replace the instructions of a live call leg.

        Args:
            call_sid: Call SID to update
            twiml: TwiML document the call executes next
        """
        ...

    async def hangup_call(self, call_sid: str) -> None:
        """
        Hang up a call.

        Args:
            call_sid: Call SID to hang up
        """
        ...

    async def make_call(self, to: str, from_: str, twiml: str) -> CallResult:
        """
        Initiate an outbound call leg that runs inline TwiML when answered.

        Args:
            to: Destination (E.164 number or ``client:<identity>``)
            from_: Caller ID phone number (E.164 format)
            twiml: TwiML document for the new leg

        Returns:
            CallResult with call SID and initial status
        """
        ...
