"""System prompt sources for the voice session.

This module handles:
- Job posting summarization (Gemini)
- Static and dynamic screening prompt providers

REQUIREMENTS:
- GEMINI_API_KEY for the dynamic provider
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional, Protocol

import httpx

from ..config import Settings
from ..prompts import build_screening_prompt


logger = logging.getLogger(__name__)

FALLBACK_JOB_SUMMARY = "Job description is currently unavailable."

SUMMARY_INSTRUCTION = (
    "Summarize the job description from this link in a recruiter-friendly tone. "
    "Keep it informative and don't miss any important details:\n\n{url}"
)


class PromptProvider(Protocol):
    async def provide_prompt(self) -> str:
        ...


# ---------------------------------------------------------------------------
# Static prompt
# ---------------------------------------------------------------------------

class StaticPromptProvider:
    """Screening prompt built around the preconfigured job overview."""

    def __init__(self, settings: Settings):
        self.settings = settings

    async def provide_prompt(self) -> str:
        return build_screening_prompt(
            self.settings.static_job_summary,
            company=self.settings.recruiter_company,
            position=self.settings.recruiter_position,
        )


# ---------------------------------------------------------------------------
# Dynamic prompt (Gemini job summary)
# ---------------------------------------------------------------------------

def extract_summary(data: Any) -> Optional[str]:
    """Return ``candidates[0].content.parts[0].text`` or None."""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None

    if not isinstance(text, str) or not text.strip():
        return None
    return text


class GeminiPromptProvider:
    """Summarizes the job posting on every call and renders the screening prompt.

    The summary is never cached; each inbound call issues one request.
    """

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self.transport = transport

    async def _post(self, payload: dict) -> httpx.Response:
        async with httpx.AsyncClient(
            timeout=self.settings.summary_timeout_seconds,
            transport=self.transport,
        ) as client:
            return await client.post(
                self.settings.gemini_api_url,
                params={"key": self.settings.gemini_api_key},
                json=payload,
            )

    async def summarize_job_posting(self) -> str:
        """Return the job summary, or the fallback sentence on any failure."""
        payload = {
            "contents": [
                {"parts": [{"text": SUMMARY_INSTRUCTION.format(url=self.settings.job_description_url)}]}
            ]
        }

        try:
            resp = await asyncio.wait_for(self._post(payload), self.settings.summary_timeout_seconds)
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPStatusError as exc:
            logger.error("Gemini error: %s - %s", exc.response.status_code, exc.response.text)
            return FALLBACK_JOB_SUMMARY
        except httpx.HTTPError as exc:
            logger.error("Gemini request failed: %r", exc)
            return FALLBACK_JOB_SUMMARY
        except asyncio.TimeoutError:
            logger.error("Gemini request exceeded %ss", self.settings.summary_timeout_seconds)
            return FALLBACK_JOB_SUMMARY
        except ValueError:
            logger.error("Gemini returned a non-JSON body: %s", resp.text)
            return FALLBACK_JOB_SUMMARY

        summary = extract_summary(data)
        if summary is None:
            logger.warning("Gemini response had no summary text; using fallback")
            return FALLBACK_JOB_SUMMARY

        logger.info("Gemini summary retrieved.")
        return summary

    async def provide_prompt(self) -> str:
        job_summary = await self.summarize_job_posting()
        return build_screening_prompt(
            job_summary,
            company=self.settings.recruiter_company,
            position=self.settings.recruiter_position,
        )


def select_prompt_provider(
    settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None
) -> PromptProvider:
    if settings.prompt_source == "static":
        return StaticPromptProvider(settings)
    return GeminiPromptProvider(settings, transport=transport)
