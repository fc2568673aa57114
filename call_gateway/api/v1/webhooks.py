"""Twilio voice webhook endpoints."""

# ruff: noqa: N803

import logging
from collections.abc import Callable
from typing import Annotated

from fastapi import APIRouter, Depends, Form, Response, status

from call_gateway.config import Settings, get_settings
from call_gateway.services import twiml
from call_gateway.services.dependencies import get_routing_strategy
from call_gateway.services.routing import RoutingStrategy
from call_gateway.services.status_recorder import record_status

logger = logging.getLogger("call_gateway.webhooks")

FALLBACK_MESSAGE = "We are unable to connect your call. Goodbye."

router = APIRouter(prefix="/twilio/voice", tags=["webhooks"])


def twiml_response(content: str) -> Response:
    """Create a TwiML XML response."""
    return Response(
        content=content,
        media_type="application/xml",
    )


def render_twiml(name: str, build: Callable[[], str]) -> Response:
    """Build a TwiML document, degrading to a hangup if building fails.

    Twilio expects a well-formed document on every webhook.
    """
    try:
        return twiml_response(build())
    except Exception:
        logger.exception("twiml.render_failed", extra={"webhook": name})
        return twiml_response(twiml.hangup(FALLBACK_MESSAGE))


@router.post("/incoming")
async def incoming_call(
    settings: Annotated[Settings, Depends(get_settings)],
    routing: Annotated[RoutingStrategy, Depends(get_routing_strategy)],
) -> Response:
    """Greet an inbound caller and ring the agent chosen by routing."""
    return render_twiml(
        "incoming",
        lambda: twiml.incoming_call(routing.select_target(), settings.incoming_greeting),
    )


@router.post("/outgoing")
async def outgoing_call(
    settings: Annotated[Settings, Depends(get_settings)],
    To: str = Form(""),
) -> Response:
    """Dial the number requested by a browser client."""
    return render_twiml(
        "outgoing",
        lambda: twiml.outgoing_call(To, settings.twilio_phone_number),
    )


@router.post("/status", status_code=status.HTTP_204_NO_CONTENT)
async def call_status_webhook(
    CallSid: str = Form(None),
    CallStatus: str = Form(None),
    From: str = Form(None),
    To: str = Form(None),
    CallDuration: str = Form(None),
    ErrorCode: str = Form(None),
    ErrorMessage: str = Form(None),
) -> Response:
    """
    Record a Twilio call status update.

    Called when call status changes:
    - initiated: Call is being placed
    - ringing: Phone is ringing
    - in-progress: Call is connected
    - completed: Call ended normally
    - busy, no-answer, failed, canceled: Call did not connect
    """
    record_status(
        CallSid,
        CallStatus,
        From,
        To,
        call_duration=CallDuration,
        error_code=ErrorCode,
        error_message=ErrorMessage,
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/transfer-dial")
async def transfer_dial(target: str = "") -> Response:
    """Ring the client identity given in the ``target`` query parameter."""
    return render_twiml("transfer-dial", lambda: twiml.dial_client(target))
