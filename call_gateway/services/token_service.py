"""Twilio Voice access token issuance."""

from dataclasses import dataclass

from twilio.jwt.access_token import AccessToken
from twilio.jwt.access_token.grants import VoiceGrant

from call_gateway.config import Settings
from call_gateway.errors import ConfigurationError


@dataclass
class IssuedToken:
    """Signed access token and the identity it was issued for."""

    token: str
    identity: str


def issue_token(identity: str | None, settings: Settings) -> IssuedToken:
    """
    Create a Twilio Voice access token for the frontend SDK.

    The grant always allows incoming calls. Outgoing calls are allowed only
    when a TwiML application (TWILIO_APP_SID) is configured.

    Args:
        identity: Client identity; empty or missing falls back to the default
        settings: Application settings with the Twilio API key

    Raises:
        ConfigurationError: account SID or API key credentials are missing
    """
    if not (
        settings.twilio_account_sid
        and settings.twilio_api_key_sid
        and settings.twilio_api_key_secret
    ):
        raise ConfigurationError(
            "TWILIO_ACCOUNT_SID, TWILIO_API_KEY_SID and TWILIO_API_KEY_SECRET are required"
        )

    identity = identity or settings.default_identity
    token = AccessToken(
        settings.twilio_account_sid,
        settings.twilio_api_key_sid,
        settings.twilio_api_key_secret,
        identity=identity,
        ttl=settings.token_ttl_seconds,
    )
    token.add_grant(
        VoiceGrant(
            incoming_allow=True,
            outgoing_application_sid=settings.twilio_app_sid or None,
        )
    )

    return IssuedToken(token=token.to_jwt(), identity=identity)
