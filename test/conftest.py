"""
Shared fixtures: a TestClient over the real app with settings and the quote
source replaced through FastAPI dependency overrides.
"""

import xml.etree.ElementTree as ET

import pytest
from fastapi.testclient import TestClient

from call_router import app
from modules.config import Settings, get_settings
from modules.twilio_webhook import get_quote_generator

AGENT_NUMBER = "+15005550006"
FIXED_QUOTE = "It always seems impossible until it's done. - Nelson Mandela"


class FakeQuoteGenerator:
    def __init__(self, quote: str = FIXED_QUOTE):
        self.quote = quote
        self.calls = 0

    async def generate(self) -> str:
        self.calls += 1
        return self.quote


@pytest.fixture
def settings():
    return Settings(agent_phone_number=AGENT_NUMBER)


@pytest.fixture
def quote_generator():
    return FakeQuoteGenerator()


@pytest.fixture
def client(settings, quote_generator):
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_quote_generator] = lambda: quote_generator
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def parse_twiml():
    """Parse a TwiML HTTP response into its <Response> element."""
    def _parse(response):
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/xml")
        root = ET.fromstring(response.content)
        assert root.tag == "Response"
        return root
    return _parse
