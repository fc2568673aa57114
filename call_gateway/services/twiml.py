"""TwiML documents returned to Twilio or sent inline with call updates.

All documents are built with ``VoiceResponse`` so caller-supplied values
(dialed numbers, client identities) are XML-escaped. Characters XML 1.0
cannot represent at all (most C0 controls, lone surrogates) are removed
first, since escaping does not make them legal.
"""

import re

from twilio.twiml.voice_response import VoiceResponse

_INVALID_XML_CHARS = re.compile("[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


def xml_text(value: str | None) -> str:
    """Drop characters outside the XML 1.0 Char range."""
    return _INVALID_XML_CHARS.sub("", value or "")


def incoming_call(target_identity: str, greeting: str) -> str:
    """Announce the greeting, then ring the target soft-phone."""
    response = VoiceResponse()
    if greeting:
        response.say(xml_text(greeting))
    dial = response.dial()
    dial.client(xml_text(target_identity))
    return str(response)


def outgoing_call(to: str, caller_id: str | None) -> str:
    """Dial a PSTN number, presenting ``caller_id`` when configured."""
    response = VoiceResponse()
    dial = response.dial(caller_id=xml_text(caller_id) or None)
    dial.number(xml_text(to))
    return str(response)


def dial_client(identity: str) -> str:
    """Connect the call to a browser client registered as ``identity``."""
    response = VoiceResponse()
    dial = response.dial()
    dial.client(xml_text(identity))
    return str(response)


def hold_music(url: str) -> str:
    """Loop hold music until the call receives new instructions."""
    response = VoiceResponse()
    response.play(xml_text(url), loop=0)
    return str(response)


def hangup(message: str | None = None) -> str:
    """Degraded response for webhooks that could not build their document."""
    response = VoiceResponse()
    if message:
        response.say(xml_text(message))
    response.hangup()
    return str(response)
