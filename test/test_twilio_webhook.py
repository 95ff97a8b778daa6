from fastapi import FastAPI
from fastapi.testclient import TestClient
from twilio.request_validator import RequestValidator

from call_router import app
from modules.config import Settings, get_settings
from modules.twilio_webhook import get_quote_generator, router
from modules.twiml import CLOSING_MESSAGE, INVALID_MESSAGE, MENU_PROMPT, TRANSFER_MESSAGE, WELCOME_MESSAGE

from conftest import AGENT_NUMBER, FIXED_QUOTE, FakeQuoteGenerator


def test_index_page(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert "Call Router is running" in resp.text


def test_call_with_empty_body_prompts_for_a_digit(client, parse_twiml):
    root = parse_twiml(client.post("/call"))

    assert [verb.tag for verb in root] == ["Gather", "Redirect"]
    gather, redirect = root
    assert gather.get("numDigits") == "1"
    assert gather.get("action") == "/action"
    assert gather.get("method") == "POST"
    assert [say.tag for say in gather] == ["Say", "Say"]
    assert [say.text for say in gather] == [WELCOME_MESSAGE, MENU_PROMPT]
    assert redirect.text == "/call"


def test_digit_one_transfers_to_agent(client, parse_twiml, quote_generator):
    root = parse_twiml(client.post("/action", data={"Digits": "1", "CallSid": "CA123"}))

    assert [verb.tag for verb in root] == ["Say", "Dial"]
    assert root[0].text == TRANSFER_MESSAGE
    assert root[1].text == AGENT_NUMBER
    assert quote_generator.calls == 0


def test_digit_two_reads_quote_and_ends(client, parse_twiml, quote_generator):
    root = parse_twiml(client.post("/action", data={"Digits": "2"}))

    assert [verb.tag for verb in root] == ["Say", "Say"]
    assert [verb.text for verb in root] == [FIXED_QUOTE, CLOSING_MESSAGE]
    assert quote_generator.calls == 1


def test_invalid_digit_loops_back(client, parse_twiml):
    root = parse_twiml(client.post("/action", data={"Digits": "9"}))

    assert [verb.tag for verb in root] == ["Say", "Redirect"]
    assert root[0].text == INVALID_MESSAGE
    assert root[1].text == "/call"


def test_missing_digits_only_redirects(client, parse_twiml):
    root = parse_twiml(client.post("/action", data={"CallSid": "CA123"}))

    assert [verb.tag for verb in root] == ["Redirect"]
    assert root[0].text == "/call"


def test_leading_zero_is_invalid(client, parse_twiml):
    root = parse_twiml(client.post("/action", data={"Digits": "01"}))
    assert root[0].text == INVALID_MESSAGE


def test_repeated_requests_are_identical(client):
    first = client.post("/call").text
    second = client.post("/call").text
    assert first == second

    first = client.post("/action", data={"Digits": "1"}).text
    second = client.post("/action", data={"Digits": "1"}).text
    assert first == second


def test_public_base_url_makes_urls_absolute(client, parse_twiml):
    app.dependency_overrides[get_settings] = lambda: Settings(
        agent_phone_number=AGENT_NUMBER,
        public_base_url="https://ivr.example.com",
    )
    gather, redirect = parse_twiml(client.post("/call"))
    assert gather.get("action") == "https://ivr.example.com/action"
    assert redirect.text == "https://ivr.example.com/call"


def test_urls_follow_router_prefix(settings, parse_twiml):
    prefixed = FastAPI()
    prefixed.include_router(router, prefix="/twilio")
    prefixed.dependency_overrides[get_settings] = lambda: settings
    prefixed.dependency_overrides[get_quote_generator] = lambda: FakeQuoteGenerator()

    gather, redirect = parse_twiml(TestClient(prefixed).post("/twilio/call"))
    assert gather.get("action") == "/twilio/action"
    assert redirect.text == "/twilio/call"


def _signing_settings():
    return Settings(
        agent_phone_number=AGENT_NUMBER,
        public_base_url="https://ivr.example.com",
        twilio_auth_token="test-auth-token",
        validate_signature=True,
    )


def test_unsigned_request_is_rejected(client):
    app.dependency_overrides[get_settings] = _signing_settings
    resp = client.post("/action", data={"Digits": "1"})
    assert resp.status_code == 403


def test_bad_signature_is_rejected(client):
    app.dependency_overrides[get_settings] = _signing_settings
    resp = client.post("/call", data={"CallSid": "CA123"}, headers={"X-Twilio-Signature": "bogus"})
    assert resp.status_code == 403


def test_signed_request_is_accepted(client, parse_twiml):
    app.dependency_overrides[get_settings] = _signing_settings
    params = {"CallSid": "CA123", "Digits": "1"}
    signature = RequestValidator("test-auth-token").compute_signature("https://ivr.example.com/action", params)

    root = parse_twiml(client.post("/action", data=params, headers={"X-Twilio-Signature": signature}))
    assert [verb.tag for verb in root] == ["Say", "Dial"]
