"""
Pytest fixtures for call bridge tests.

Outbound Gemini and Ultravox calls are served by httpx.MockTransport
handlers; nothing leaves the process.
"""
import asyncio
import json

import httpx
import pytest

from call_bridge.config import Settings


def make_settings(**overrides) -> Settings:
    values = {
        "ultravox_api_key": "uv-test-key",
        "gemini_api_key": "gm-test-key",
        "summary_timeout_seconds": 1.0,
        "session_timeout_seconds": 1.0,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def json_transport(body, status_code: int = 200, seen: list | None = None) -> httpx.MockTransport:
    """Transport answering every request with ``body`` serialized as JSON."""

    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status_code, content=json.dumps(body).encode("utf-8"))

    return httpx.MockTransport(handler)


def raw_transport(text: str, status_code: int = 200) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, text=text)

    return httpx.MockTransport(handler)


def failing_transport(exc_type=httpx.ReadTimeout) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        raise exc_type("simulated failure", request=request)

    return httpx.MockTransport(handler)


def slow_transport(delay: float, body=None) -> httpx.MockTransport:
    """Transport that answers only after ``delay`` seconds."""

    async def handler(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(delay)
        return httpx.Response(200, content=json.dumps(body or {}).encode("utf-8"))

    return httpx.MockTransport(handler)


@pytest.fixture
def settings() -> Settings:
    return make_settings()
