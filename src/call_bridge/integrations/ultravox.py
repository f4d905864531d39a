"""Ultravox call creation.

One ``POST /api/calls`` per inbound phone call. The response's ``joinUrl``
is the WebSocket address Twilio streams call audio to.
"""

import asyncio
import json
import logging
from typing import Optional

import httpx

from ..config import Settings
from ..exceptions import SessionParseError, SessionTransportError
from ..schemas import SelectedTool, SessionConfig, SessionHandle

logger = logging.getLogger(__name__)


class UltravoxClient:
    """Client for creating Ultravox voice sessions."""

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self.transport = transport
        self.headers = {
            "Content-Type": "application/json",
            "X-API-Key": settings.ultravox_api_key,
        }

    def build_session_config(self, system_prompt: str) -> SessionConfig:
        return SessionConfig(
            system_prompt=system_prompt,
            model=self.settings.ultravox_model,
            temperature=self.settings.ultravox_temperature,
            first_speaker=self.settings.ultravox_first_speaker,
            voice=self.settings.ultravox_voice,
            selected_tools=tuple(SelectedTool(tool_id=tool_id) for tool_id in self.settings.ultravox_tool_ids),
        )

    async def _post(self, body: bytes) -> httpx.Response:
        async with httpx.AsyncClient(
            timeout=self.settings.session_timeout_seconds,
            transport=self.transport,
        ) as client:
            return await client.post(self.settings.ultravox_api_url, content=body, headers=self.headers)

    async def create_call(self, system_prompt: str) -> SessionHandle:
        """Create one Ultravox call. Never retries.

        Raises:
            SessionTransportError: the request failed or timed out.
            SessionParseError: the body is not a JSON object.
        """
        body = self.build_session_config(system_prompt).to_json()

        try:
            resp = await asyncio.wait_for(self._post(body), self.settings.session_timeout_seconds)
        except httpx.HTTPError as exc:
            logger.error("Ultravox request failed: %r", exc)
            raise SessionTransportError(str(exc) or exc.__class__.__name__) from exc
        except asyncio.TimeoutError as exc:
            logger.error("Ultravox request exceeded %ss", self.settings.session_timeout_seconds)
            raise SessionTransportError("Ultravox request timed out") from exc

        raw = resp.text
        try:
            parsed = json.loads(raw)
        except ValueError as exc:
            logger.error("Failed to parse Ultravox response: %s", raw)
            raise SessionParseError(raw) from exc

        if not isinstance(parsed, dict):
            logger.error("Unexpected Ultravox response shape: %s", raw)
            raise SessionParseError(raw)

        handle = SessionHandle.from_response(parsed)
        if resp.status_code >= 400:
            logger.warning("Ultravox returned %s: %s", resp.status_code, raw)
        else:
            logger.info("Ultravox call created: call_id=%s", handle.call_id)
        return handle
