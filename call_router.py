"""
call_router.py

Twilio voice webhook server that routes callers from a keypad menu:
press 1 to be transferred to a support agent, press 2 to hear an
inspirational quote. Point the phone number's "A call comes in" webhook
at POST /call.

Run locally with:
    python call_router.py
or:
    uvicorn call_router:app --port 8000
"""

import logging
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.responses import HTMLResponse

from modules.config import Settings, get_settings
from modules.twilio_webhook import router as twilio_router

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Configure root logging to stdout, plus LOG_FILE when set."""
    handlers = [logging.StreamHandler(sys.stdout)]
    if settings.log_file:
        handlers.append(logging.FileHandler(settings.log_file))
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=handlers,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Fail fast on bad configuration instead of on the first call.
    settings = app.dependency_overrides.get(get_settings, get_settings)()
    configure_logging(settings)
    logger.info(f"Call router ready; support calls are transferred to {settings.agent_phone_number}")
    yield


app = FastAPI(title="Call Router", lifespan=lifespan)
app.include_router(twilio_router)


@app.api_route("/", methods=["GET", "POST"])
async def index_page():
    """
    A simple endpoint to confirm the server is running.

    Returns:
        HTMLResponse: HTML response indicating server status.
    """
    return HTMLResponse("<h1>Call Router is running</h1>")


if __name__ == "__main__":
    # For production, run behind a process manager such as gunicorn with uvicorn workers.
    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
