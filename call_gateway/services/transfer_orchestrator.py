"""Transfer orchestrator - blind and warm call transfers."""

import logging
from dataclasses import dataclass, field
from enum import Enum

from call_gateway.errors import PartialTransferFailure, ProviderRequestFailed, TransferFailed
from call_gateway.services import twiml
from call_gateway.services.twilio_protocol import TwilioServiceProtocol

logger = logging.getLogger(__name__)


class TransferState(str, Enum):
    """Where a transfer stands after its last applied step."""

    IDLE = "idle"
    ON_HOLD = "on_hold"
    CONSULT_RINGING = "consult_ringing"
    BRIDGED = "bridged"
    FAILED = "failed"


class TransferStep(str, Enum):
    """Provider commands issued by transfers."""

    DIAL_TARGET = "dial_target"
    HOLD_ORIGINAL = "hold_original"
    ORIGINATE_CONSULT = "originate_consult"
    BRIDGE_PARENT = "bridge_parent"
    END_CONSULT = "end_consult"


@dataclass
class TransferOutcome:
    """Final state of a transfer and the steps applied to reach it."""

    state: TransferState
    steps: list[TransferStep] = field(default_factory=list)


@dataclass
class WarmTransferStarted(TransferOutcome):
    """Phase one of a warm transfer: caller on hold, consult leg ringing."""

    original_call_sid: str = ""
    consult_call_sid: str = ""
    target_identity: str = ""


class TransferOrchestrator:
    """
    Call transfer orchestrator.

    Drives transfers by updating live call legs through Twilio. Nothing is
    stored between requests: a warm transfer is correlated by the consult
    call SID returned from phase one.

    Each provider command is a transition that only runs when the previous
    one succeeded. A failure before any leg changed raises TransferFailed;
    a failure after an earlier step was applied raises
    PartialTransferFailure naming the failed step, so the caller can clean
    up. Commands are never retried.
    """

    def __init__(
        self,
        twilio: TwilioServiceProtocol,
        caller_id: str,
        hold_music_url: str,
    ):
        """
        Initialize the orchestrator.

        Args:
            twilio: Provider client used for call updates
            caller_id: Phone number presented on consult calls
            hold_music_url: Audio looped while the caller is on hold
        """
        self.twilio = twilio
        self.caller_id = caller_id
        self.hold_music_url = hold_music_url

    async def blind_transfer(self, call_sid: str, target_identity: str) -> TransferOutcome:
        """
        Redirect a call straight to the target agent.

        Args:
            call_sid: Call leg of the caller being transferred
            target_identity: Client identity of the receiving agent

        Raises:
            TransferFailed: Twilio rejected the redirect
        """
        try:
            await self.twilio.redirect_call(call_sid, twiml.dial_client(target_identity))
        except ProviderRequestFailed as exc:
            raise TransferFailed(
                exc.detail, failed_step=TransferStep.DIAL_TARGET.value, call_sid=call_sid
            ) from exc

        logger.info(
            "transfer.blind",
            extra={"call_sid": call_sid, "target_identity": target_identity},
        )
        return TransferOutcome(state=TransferState.BRIDGED, steps=[TransferStep.DIAL_TARGET])

    async def warm_transfer_start(self, call_sid: str, target_identity: str) -> WarmTransferStarted:
        """
        Put the caller on hold and ring the target agent on a new consult leg.

        Args:
            call_sid: Call leg of the caller being transferred
            target_identity: Client identity of the receiving agent

        Returns:
            WarmTransferStarted carrying the consult call SID

        Raises:
            TransferFailed: the hold could not be applied
            PartialTransferFailure: the caller is on hold but no consult
                call was created
        """
        steps: list[TransferStep] = []

        try:
            await self.twilio.redirect_call(call_sid, twiml.hold_music(self.hold_music_url))
        except ProviderRequestFailed as exc:
            raise TransferFailed(
                exc.detail, failed_step=TransferStep.HOLD_ORIGINAL.value, call_sid=call_sid
            ) from exc
        steps.append(TransferStep.HOLD_ORIGINAL)

        try:
            consult = await self.twilio.make_call(
                to=f"client:{target_identity}",
                from_=self.caller_id,
                twiml=twiml.dial_client(target_identity),
            )
        except ProviderRequestFailed as exc:
            logger.error(
                "transfer.warm_start_partial",
                extra={
                    "original_call_sid": call_sid,
                    "target_identity": target_identity,
                    "failed_step": TransferStep.ORIGINATE_CONSULT.value,
                },
            )
            raise PartialTransferFailure(
                exc.detail,
                failed_step=TransferStep.ORIGINATE_CONSULT.value,
                call_sid=call_sid,
                state=TransferState.ON_HOLD.value,
                applied_steps=[step.value for step in steps],
            ) from exc
        steps.append(TransferStep.ORIGINATE_CONSULT)

        logger.info(
            "transfer.warm_started",
            extra={
                "original_call_sid": call_sid,
                "consult_call_sid": consult.call_sid,
                "target_identity": target_identity,
            },
        )
        return WarmTransferStarted(
            state=TransferState.CONSULT_RINGING,
            steps=steps,
            original_call_sid=call_sid,
            consult_call_sid=consult.call_sid,
            target_identity=target_identity,
        )

    async def warm_transfer_complete(
        self,
        parent_call_sid: str,
        consult_call_sid: str,
        target_identity: str,
    ) -> TransferOutcome:
        """
        Bridge the held caller to the target agent and drop the consult leg.

        Args:
            parent_call_sid: Call leg of the caller on hold
            consult_call_sid: Consult leg created by warm_transfer_start
            target_identity: Client identity of the receiving agent

        Raises:
            TransferFailed: the caller could not be bridged
            PartialTransferFailure: the caller was bridged but the consult
                call is still up
        """
        steps: list[TransferStep] = []

        try:
            await self.twilio.redirect_call(parent_call_sid, twiml.dial_client(target_identity))
        except ProviderRequestFailed as exc:
            raise TransferFailed(
                exc.detail,
                failed_step=TransferStep.BRIDGE_PARENT.value,
                call_sid=parent_call_sid,
                state=TransferState.ON_HOLD.value,
            ) from exc
        steps.append(TransferStep.BRIDGE_PARENT)

        try:
            await self.twilio.hangup_call(consult_call_sid)
        except ProviderRequestFailed as exc:
            logger.error(
                "transfer.warm_complete_partial",
                extra={
                    "parent_call_sid": parent_call_sid,
                    "consult_call_sid": consult_call_sid,
                    "target_identity": target_identity,
                    "failed_step": TransferStep.END_CONSULT.value,
                },
            )
            raise PartialTransferFailure(
                exc.detail,
                failed_step=TransferStep.END_CONSULT.value,
                call_sid=consult_call_sid,
                state=TransferState.BRIDGED.value,
                applied_steps=[step.value for step in steps],
            ) from exc
        steps.append(TransferStep.END_CONSULT)

        logger.info(
            "transfer.warm_completed",
            extra={
                "parent_call_sid": parent_call_sid,
                "consult_call_sid": consult_call_sid,
                "target_identity": target_identity,
            },
        )
        return TransferOutcome(state=TransferState.BRIDGED, steps=steps)
