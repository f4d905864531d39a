"""Voice call handling logic.

Inbound calls go through prompt building and Ultravox call creation, then
get TwiML that bridges the call audio to the session. Any failure on the way
ends in a spoken apology instead; the carrier always gets valid TwiML.
"""
import logging
from typing import Any, Dict

from twilio.twiml.voice_response import VoiceResponse

from ..exceptions import SessionError
from ..integrations.ultravox import UltravoxClient
from ..schemas import CallSetupResult, CallSetupState, VoiceWebhook
from .ai import PromptProvider

logger = logging.getLogger(__name__)

NO_JOIN_URL_MESSAGE = "We are experiencing issues with our assistant. Please try again later."
UNAVAILABLE_MESSAGE = "We're currently unavailable. Please try again later."


def build_stream_twiml(join_url: str) -> str:
    """TwiML that connects the call audio to a media stream at ``join_url``."""
    response = VoiceResponse()
    response.connect().stream(url=join_url)
    return str(response)


def build_apology_twiml(message: str) -> str:
    response = VoiceResponse()
    response.say(message)
    return str(response)


def _fallback(message: str) -> CallSetupResult:
    return CallSetupResult(
        state=CallSetupState.RESPONDED_WITH_FALLBACK,
        twiml=build_apology_twiml(message),
    )


async def handle_incoming_call(
    payload: Dict[str, Any],
    prompt_provider: PromptProvider,
    ultravox: UltravoxClient,
) -> CallSetupResult:
    """Set up the voice session for an inbound call and build its TwiML.

    Args:
        payload: The webhook form fields sent by Twilio.
        prompt_provider: Source of the session's system prompt.
        ultravox: Client used to create the session.

    Returns:
        The terminal state together with the TwiML to send back.
    """
    state = CallSetupState.RECEIVED
    try:
        call = VoiceWebhook.model_validate(payload)
        logger.info("Incoming call from: %s (CallSid=%s)", call.From or "Unknown Caller", call.CallSid)

        system_prompt = await prompt_provider.provide_prompt()
        state = CallSetupState.PROMPT_READY

        handle = await ultravox.create_call(system_prompt)
    except SessionError as exc:
        logger.error("Voice session setup failed after %s: %s", state.value, exc)
        return _fallback(UNAVAILABLE_MESSAGE)
    except Exception:
        logger.exception("Error during call setup after %s", state.value)
        return _fallback(UNAVAILABLE_MESSAGE)

    if not handle.join_url:
        logger.warning("No joinUrl received from Ultravox.")
        return _fallback(NO_JOIN_URL_MESSAGE)

    state = CallSetupState.SESSION_READY
    logger.debug("Call %s reached %s", call.CallSid, state.value)

    return CallSetupResult(
        state=CallSetupState.RESPONDED,
        twiml=build_stream_twiml(handle.join_url),
        join_url=handle.join_url,
    )
