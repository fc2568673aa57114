"""Twilio API schemas."""

from pydantic import BaseModel, ConfigDict, Field


class TwilioTokenResponse(BaseModel):
    """Twilio Voice access token response."""

    token: str
    identity: str


class TransferRequest(BaseModel):
    """Base for transfer request bodies (camelCase on the wire)."""

    model_config = ConfigDict(populate_by_name=True)

    target_identity: str = Field(default="", alias="targetIdentity")


class BlindTransferRequest(TransferRequest):
    """Redirect a call to another agent."""

    call_sid: str = Field(default="", alias="callSid")


class WarmTransferStartRequest(TransferRequest):
    """Put a call on hold and ring the target agent."""

    call_sid: str = Field(default="", alias="callSid")


class WarmTransferCompleteRequest(TransferRequest):
    """Bridge the held call to the target agent."""

    parent_call_sid: str = Field(default="", alias="parentCallSid")
    consult_call_sid: str = Field(default="", alias="consultCallSid")


class TransferAck(BaseModel):
    """Acknowledgment of an applied transfer."""

    success: bool = True


class WarmTransferStartResponse(TransferAck):
    """Acknowledgment of phase one of a warm transfer."""

    model_config = ConfigDict(populate_by_name=True)

    consult_call_sid: str = Field(alias="consultCallSid")
