"""Unit tests for TwiML builders."""

import xml.etree.ElementTree as ET

from call_gateway.services import twiml


def parse(document: str) -> ET.Element:
    root = ET.fromstring(document)
    assert root.tag == "Response"
    return root


class TestIncomingCall:
    def test_greets_then_dials_client(self):
        root = parse(twiml.incoming_call("agent_1", "Connecting you to an agent."))

        assert [child.tag for child in root] == ["Say", "Dial"]
        assert root.find("Say").text == "Connecting you to an agent."
        assert root.find("Dial/Client").text == "agent_1"

    def test_empty_greeting_skips_say(self):
        root = parse(twiml.incoming_call("agent_1", ""))

        assert root.find("Say") is None


class TestOutgoingCall:
    def test_dials_number_with_caller_id(self):
        root = parse(twiml.outgoing_call("+15551112222", "+15551234567"))

        dial = root.find("Dial")
        assert dial.get("callerId") == "+15551234567"
        assert dial.find("Number").text == "+15551112222"

    def test_caller_id_omitted_when_not_configured(self):
        root = parse(twiml.outgoing_call("+15551112222", ""))

        assert "callerId" not in root.find("Dial").attrib

    def test_markup_in_number_is_escaped(self):
        """A hostile To value stays a single text node"""
        hostile = '+1555</Number></Dial><Hangup/><Dial a="&'

        root = parse(twiml.outgoing_call(hostile, "+15551234567"))

        assert root.find("Hangup") is None
        assert root.find("Dial/Number").text == hostile


class TestDialClient:
    def test_dials_identity(self):
        root = parse(twiml.dial_client("agent_2"))

        assert root.find("Dial/Client").text == "agent_2"

    def test_markup_in_identity_is_escaped(self):
        hostile = "agent_2</Client><Number>+19000000000</Number><Client>"

        root = parse(twiml.dial_client(hostile))

        assert root.find("Dial/Number") is None
        assert root.find("Dial/Client").text == hostile


class TestHoldAndHangup:
    def test_hold_music_loops_forever(self):
        root = parse(twiml.hold_music("http://example.com/hold.mp3"))

        play = root.find("Play")
        assert play.get("loop") == "0"
        assert play.text == "http://example.com/hold.mp3"

    def test_hangup_with_message(self):
        root = parse(twiml.hangup("Goodbye."))

        assert [child.tag for child in root] == ["Say", "Hangup"]

    def test_hangup_without_message(self):
        root = parse(twiml.hangup())

        assert [child.tag for child in root] == ["Hangup"]


class TestControlCharacters:
    """Values carrying characters XML 1.0 cannot represent."""

    def test_control_characters_removed_from_number(self):
        root = parse(twiml.outgoing_call("+1555\x01111\x1f2222", "+15551234567"))

        assert root.find("Dial/Number").text == "+15551112222"

    def test_control_characters_removed_from_identity(self):
        root = parse(twiml.dial_client("agent\x00_2\x0b"))

        assert root.find("Dial/Client").text == "agent_2"

    def test_tabs_newlines_and_non_ascii_kept(self):
        assert twiml.xml_text("a\tb\nc\rd é 📞") == "a\tb\nc\rd é 📞"

    def test_lone_surrogate_removed(self):
        assert twiml.xml_text("agent\ud800_2") == "agent_2"
