"""ASGI app factory and entrypoint for the call bridge service.

`create_app` wires the settings, the prompt provider and the Ultravox
client into a FastAPI app; `run` is the console entrypoint that loads the
settings (exiting when credentials are missing) and serves the app.
"""

from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from .api import webhooks as webhooks_router
from .config import Settings, configure_logging, load_settings_or_exit
from .handlers.ai import PromptProvider, select_prompt_provider
from .integrations.ultravox import UltravoxClient

LIVENESS_TEXT = "Incoming call handler is running."


# Pydantic model for the /health response to ensure a stable schema
class HealthResponse(BaseModel):
    status: str = "ok"


def create_app(
    settings: Settings,
    prompt_provider: Optional[PromptProvider] = None,
    ultravox: Optional[UltravoxClient] = None,
) -> FastAPI:
    """Create the FastAPI application with its collaborators on ``app.state``."""
    app = FastAPI(title="Call Bridge")

    app.state.settings = settings
    app.state.prompt_provider = prompt_provider or select_prompt_provider(settings)
    app.state.ultravox = ultravox or UltravoxClient(settings)

    app.include_router(webhooks_router.router, tags=["voice"])

    @app.get("/", response_class=PlainTextResponse)
    async def liveness() -> str:
        return LIVENESS_TEXT

    # Minimal health endpoint used for readiness checks
    @app.get("/health", response_model=HealthResponse, status_code=200)
    async def health() -> HealthResponse:
        """Return a simple health status in a predictable JSON schema."""
        return HealthResponse()

    return app


def run() -> None:
    """Load settings and serve the app with uvicorn."""
    settings = load_settings_or_exit()
    configure_logging(settings.log_level)

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
