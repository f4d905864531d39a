import httpx
from starlette.testclient import TestClient
from twilio.request_validator import RequestValidator

from call_bridge.handlers.ai import GeminiPromptProvider, StaticPromptProvider
from call_bridge.integrations.ultravox import UltravoxClient
from call_bridge.main import LIVENESS_TEXT, create_app
from conftest import failing_transport, json_transport, make_settings, raw_transport

FORM = {"CallSid": "CA123", "From": "+15551230000", "To": "+15559870000"}


def build_client(settings, ultravox_transport, gemini_transport=None) -> TestClient:
    if gemini_transport is None:
        prompt_provider = StaticPromptProvider(settings)
    else:
        prompt_provider = GeminiPromptProvider(settings, transport=gemini_transport)
    app = create_app(
        settings,
        prompt_provider=prompt_provider,
        ultravox=UltravoxClient(settings, transport=ultravox_transport),
    )
    return TestClient(app)


def assert_twiml_ok(resp):
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/xml")


class TestIncomingCall:

    def test_join_url_is_streamed(self, settings):
        client = build_client(settings, json_transport({"joinUrl": "wss://example/session/1"}))

        resp = client.post("/incoming", data=FORM)

        assert_twiml_ok(resp)
        assert resp.text.count("<Stream ") == 1
        assert 'url="wss://example/session/1"' in resp.text

    def test_missing_join_url_speaks_apology(self, settings):
        client = build_client(settings, json_transport({"callId": "c-1"}))

        resp = client.post("/incoming", data=FORM)

        assert_twiml_ok(resp)
        assert resp.text.count("<Say>") == 1
        assert "<Connect" not in resp.text

    def test_session_timeout_still_returns_twiml(self, settings):
        client = build_client(settings, failing_transport(httpx.ReadTimeout))

        resp = client.post("/incoming", data=FORM)

        assert_twiml_ok(resp)
        assert "currently unavailable" in resp.text

    def test_session_garbage_body_still_returns_twiml(self, settings):
        client = build_client(settings, raw_transport("Internal Server Error", status_code=500))

        resp = client.post("/incoming", data=FORM)

        assert_twiml_ok(resp)
        assert "<Connect" not in resp.text

    def test_summary_reaches_session_prompt(self, settings):
        seen = []
        client = build_client(
            settings,
            json_transport({"joinUrl": "wss://example/session/2"}, seen=seen),
            gemini_transport=json_transport({"candidates": [{"content": {"parts": [{"text": "Great job."}]}}]}),
        )

        resp = client.post("/incoming", data=FORM)

        assert_twiml_ok(resp)
        assert b"Great job." in seen[0].content

    def test_summary_failure_still_bridges(self, settings):
        seen = []
        client = build_client(
            settings,
            json_transport({"joinUrl": "wss://example/session/3"}, seen=seen),
            gemini_transport=failing_transport(httpx.ConnectError),
        )

        resp = client.post("/incoming", data=FORM)

        assert_twiml_ok(resp)
        assert "wss://example/session/3" in resp.text
        assert b"Job description is currently unavailable." in seen[0].content

    def test_uploaded_caller_field_still_returns_twiml(self, settings):
        client = build_client(settings, json_transport({"joinUrl": "wss://example/session/1"}))

        resp = client.post("/incoming", data={"CallSid": "CA1"}, files={"From": ("from.txt", b"+1555", "text/plain")})

        assert_twiml_ok(resp)
        assert "<Say>" in resp.text


class TestTwilioSignature:

    def test_valid_signature_accepted(self):
        settings = make_settings(twilio_auth_token="secret-token")
        client = build_client(settings, json_transport({"joinUrl": "wss://example/session/1"}))
        signature = RequestValidator("secret-token").compute_signature("http://testserver/incoming", FORM)

        resp = client.post("/incoming", data=FORM, headers={"X-Twilio-Signature": signature})

        assert_twiml_ok(resp)

    def test_public_base_url_is_signed_url(self):
        settings = make_settings(twilio_auth_token="secret-token", public_base_url="https://calls.example.com/")
        client = build_client(settings, json_transport({"joinUrl": "wss://example/session/1"}))
        signature = RequestValidator("secret-token").compute_signature(
            "https://calls.example.com/incoming", FORM
        )

        resp = client.post("/incoming", data=FORM, headers={"X-Twilio-Signature": signature})

        assert_twiml_ok(resp)

    def test_query_string_is_part_of_signed_url(self):
        settings = make_settings(twilio_auth_token="secret-token", public_base_url="https://calls.example.com")
        client = build_client(settings, json_transport({"joinUrl": "wss://example/session/1"}))
        signature = RequestValidator("secret-token").compute_signature(
            "https://calls.example.com/incoming?tenant=a", FORM
        )

        resp = client.post("/incoming?tenant=a", data=FORM, headers={"X-Twilio-Signature": signature})

        assert_twiml_ok(resp)

    def test_missing_signature_rejected(self):
        settings = make_settings(twilio_auth_token="secret-token")
        client = build_client(settings, json_transport({"joinUrl": "wss://example/session/1"}))

        resp = client.post("/incoming", data=FORM)

        assert resp.status_code == 403

    def test_bad_signature_rejected(self):
        settings = make_settings(twilio_auth_token="secret-token")
        client = build_client(settings, json_transport({"joinUrl": "wss://example/session/1"}))

        resp = client.post("/incoming", data=FORM, headers={"X-Twilio-Signature": "bogus"})

        assert resp.status_code == 403


def test_liveness(settings):
    client = build_client(settings, json_transport({}))

    resp = client.get("/")

    assert resp.status_code == 200
    assert resp.text == LIVENESS_TEXT


def test_health(settings):
    client = build_client(settings, json_transport({}))

    assert client.get("/health").json() == {"status": "ok"}
