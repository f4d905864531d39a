"""Application configuration via Pydantic BaseSettings."""

import logging
import sys
from typing import Literal

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


DEFAULT_STATIC_JOB_SUMMARY = (
    "Full-time Non CDL/L20 delivery driver position with a FedEx contractor. "
    "Candidates must be 21 or older, hold (or be willing to obtain) a DOT "
    "Medical Card, have reliable transportation to the terminal, be available "
    "full-time including weekends, and pass a background check, drug "
    "screening and physical."
)


class Settings(BaseSettings):
    """Typed settings for environment-driven configuration.

    Built once at startup and handed to the app factory; frozen so no
    request can change it.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # Required credentials
    ultravox_api_key: str = Field(min_length=1)
    gemini_api_key: str = Field(min_length=1)

    # Server
    host: str = "0.0.0.0"
    port: int = 10000
    log_level: str = "INFO"

    # Prompt source: "dynamic" summarizes the job posting, "static" uses the
    # preconfigured overview below
    prompt_source: Literal["dynamic", "static"] = "dynamic"
    job_description_url: str = "https://funnl.team/fleetexpinc/noncdll20/Jobdetails"
    static_job_summary: str = DEFAULT_STATIC_JOB_SUMMARY
    recruiter_company: str = "FedEx"
    recruiter_position: str = "Non CDL/L20"

    # Gemini summarization
    gemini_api_url: str = (
        "https://generativelanguage.googleapis.com/v1/models/gemini-2.0-flash:generateContent"
    )
    summary_timeout_seconds: float = 5.0

    # Ultravox session
    ultravox_api_url: str = "https://api.ultravox.ai/api/calls"
    ultravox_model: str = "fixie-ai/ultravox"
    ultravox_temperature: float = 0.3
    ultravox_first_speaker: str = "FIRST_SPEAKER_CALLER"
    ultravox_voice: str = "dae96454-8512-47d5-9248-f5d8c0916d2e"
    ultravox_tool_ids: list[str] = ["aef14f7e-cd13-4ecd-9877-724e4537dd44"]
    session_timeout_seconds: float = 5.0

    # Twilio request signing; validation is skipped when no token is set
    twilio_auth_token: str | None = None
    public_base_url: str | None = None


def load_settings_or_exit(env_file: str | None = ".env") -> Settings:
    """Build settings or terminate the process when credentials are missing."""
    try:
        return Settings(_env_file=env_file)
    except ValidationError as exc:
        for error in exc.errors():
            name = "_".join(str(part) for part in error["loc"]).upper()
            logger.error("Invalid configuration for %s: %s", name, error["msg"])
        sys.exit(1)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    # httpx logs full request URLs at INFO; the Gemini URL carries the API key
    logging.getLogger("httpx").setLevel(logging.WARNING)
