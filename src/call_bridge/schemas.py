"""Pydantic schemas for webhook payloads and voice session records."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class VoiceWebhook(BaseModel):
    """Minimal representation of a Twilio voice webhook."""

    CallSid: str | None = None
    From: str | None = None
    To: str | None = None


class SelectedTool(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    tool_id: str = Field(alias="toolId")


class Medium(BaseModel):
    """Transport marker; an empty ``twilio`` object selects carrier-bridged audio."""

    model_config = ConfigDict(frozen=True)

    twilio: dict[str, Any] = Field(default_factory=dict)


class SessionConfig(BaseModel):
    """Request body for creating an Ultravox call.

    Field order is the wire order, so ``to_json`` yields the same bytes for
    the same prompt and settings.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    system_prompt: str = Field(alias="systemPrompt")
    model: str
    temperature: float
    first_speaker: str = Field(alias="firstSpeaker")
    medium: Medium = Field(default_factory=Medium)
    voice: str
    selected_tools: tuple[SelectedTool, ...] = Field(default=(), alias="selectedTools")

    def to_json(self) -> bytes:
        return self.model_dump_json(by_alias=True).encode("utf-8")


class SessionHandle(BaseModel):
    """Parsed Ultravox call response; ``join_url`` is None when absent."""

    model_config = ConfigDict(frozen=True)

    join_url: str | None = None
    call_id: str | None = None
    raw: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_response(cls, data: dict[str, Any]) -> "SessionHandle":
        join_url = data.get("joinUrl")
        call_id = data.get("callId")
        return cls(
            join_url=join_url if isinstance(join_url, str) and join_url else None,
            call_id=call_id if isinstance(call_id, str) else None,
            raw=data,
        )


class CallSetupState(str, Enum):
    RECEIVED = "received"
    PROMPT_READY = "prompt-ready"
    SESSION_READY = "session-ready"
    RESPONDED = "responded"
    RESPONDED_WITH_FALLBACK = "responded-with-fallback"


class CallSetupResult(BaseModel):
    """Outcome of handling one inbound call webhook."""

    state: CallSetupState
    twiml: str
    join_url: str | None = None
