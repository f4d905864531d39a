"""Webhook endpoints for inbound Twilio call events."""

import logging
from typing import Any, Dict

from fastapi import APIRouter, HTTPException, Request, Response
from twilio.request_validator import RequestValidator

from ..config import Settings
from ..handlers import voice as voice_handler

logger = logging.getLogger(__name__)

router = APIRouter()


def _verify_twilio_signature(request: Request, settings: Settings, params: Dict[str, Any]) -> None:
    """Reject requests not signed with TWILIO_AUTH_TOKEN; no-op when unset."""
    if not settings.twilio_auth_token:
        return

    if settings.public_base_url:
        url = settings.public_base_url.rstrip("/") + request.url.path
        if request.url.query:
            url += "?" + request.url.query
    else:
        url = str(request.url)

    signature = request.headers.get("X-Twilio-Signature", "")
    validator = RequestValidator(settings.twilio_auth_token)
    if not signature or not validator.validate(url, params, signature):
        logger.warning("Rejected webhook with invalid Twilio signature for %s", url)
        raise HTTPException(status_code=403, detail="Invalid Twilio signature")


@router.post("/incoming")
async def incoming_call(request: Request) -> Response:
    """Twilio hits this when a call arrives; answers with TwiML.

    Outbound failures never change the status code: the caller hears an
    apology and Twilio gets a 200 with valid TwiML.
    """
    form = await request.form()
    payload: Dict[str, Any] = {k: v for k, v in form.items()}

    _verify_twilio_signature(request, request.app.state.settings, payload)

    result = await voice_handler.handle_incoming_call(
        payload,
        request.app.state.prompt_provider,
        request.app.state.ultravox,
    )
    return Response(content=result.twiml, media_type="text/xml")
