"""Twilio control endpoints: access tokens and call transfers."""

from typing import Annotated

from fastapi import APIRouter, Depends

from call_gateway.config import Settings, get_settings
from call_gateway.schemas.twilio import (
    BlindTransferRequest,
    TransferAck,
    TwilioTokenResponse,
    WarmTransferCompleteRequest,
    WarmTransferStartRequest,
    WarmTransferStartResponse,
)
from call_gateway.services.dependencies import get_transfer_orchestrator
from call_gateway.services.token_service import issue_token
from call_gateway.services.transfer_orchestrator import TransferOrchestrator

router = APIRouter(prefix="/twilio", tags=["twilio"])

Orchestrator = Annotated[TransferOrchestrator, Depends(get_transfer_orchestrator)]


@router.get("/token", response_model=TwilioTokenResponse)
async def create_twilio_token(
    settings: Annotated[Settings, Depends(get_settings)],
    identity: str | None = None,
) -> TwilioTokenResponse:
    """
    Create a Twilio Voice access token for the browser soft-phone.

    Requires TWILIO_ACCOUNT_SID, TWILIO_API_KEY_SID, TWILIO_API_KEY_SECRET.
    TWILIO_APP_SID additionally enables outgoing calls.
    """
    issued = issue_token(identity, settings)
    return TwilioTokenResponse(token=issued.token, identity=issued.identity)


@router.post("/transfer/blind", response_model=TransferAck)
async def blind_transfer(
    orchestrator: Orchestrator,
    body: BlindTransferRequest | None = None,
) -> TransferAck:
    """Redirect the caller's call leg to the target agent."""
    body = body or BlindTransferRequest()
    await orchestrator.blind_transfer(body.call_sid, body.target_identity)
    return TransferAck()


@router.post("/transfer/start", response_model=WarmTransferStartResponse)
async def warm_transfer_start(
    orchestrator: Orchestrator,
    body: WarmTransferStartRequest | None = None,
) -> WarmTransferStartResponse:
    """
    Start a warm transfer.

    The caller hears hold music while the target agent is rung on a consult
    call. Pass the returned consultCallSid to /transfer/complete.
    """
    body = body or WarmTransferStartRequest()
    started = await orchestrator.warm_transfer_start(body.call_sid, body.target_identity)
    return WarmTransferStartResponse(consult_call_sid=started.consult_call_sid)


@router.post("/transfer/complete", response_model=TransferAck)
async def warm_transfer_complete(
    orchestrator: Orchestrator,
    body: WarmTransferCompleteRequest | None = None,
) -> TransferAck:
    """Connect the held caller to the target agent and end the consult call."""
    body = body or WarmTransferCompleteRequest()
    await orchestrator.warm_transfer_complete(
        body.parent_call_sid,
        body.consult_call_sid,
        body.target_identity,
    )
    return TransferAck()
