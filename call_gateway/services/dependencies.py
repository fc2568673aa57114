"""Service dependencies for FastAPI dependency injection."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from call_gateway.config import Settings, get_settings
from call_gateway.services.routing import FixedAgentRouting, RoutingStrategy
from call_gateway.services.transfer_orchestrator import TransferOrchestrator
from call_gateway.services.twilio_mock import MockTwilioService
from call_gateway.services.twilio_protocol import TwilioServiceProtocol
from call_gateway.services.twilio_service import TwilioService


@lru_cache
def get_twilio_service() -> TwilioServiceProtocol:
    """
    Get Twilio service instance.

    Returns MockTwilioService in development or TwilioService in production,
    based on the TWILIO_USE_MOCK setting.
    """
    settings = get_settings()

    if settings.twilio_use_mock:
        return MockTwilioService()
    else:
        return TwilioService(settings)


def get_routing_strategy(
    settings: Annotated[Settings, Depends(get_settings)],
) -> RoutingStrategy:
    """Routing used for inbound calls."""
    return FixedAgentRouting(settings.incoming_target_identity)


def get_transfer_orchestrator(
    settings: Annotated[Settings, Depends(get_settings)],
    twilio: Annotated[TwilioServiceProtocol, Depends(get_twilio_service)],
) -> TransferOrchestrator:
    """Build a transfer orchestrator bound to the configured Twilio client."""
    return TransferOrchestrator(
        twilio=twilio,
        caller_id=settings.twilio_phone_number,
        hold_music_url=settings.hold_music_url,
    )
