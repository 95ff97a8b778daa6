"""
Configuration for the call router.
Loads settings from environment variables (and a local .env file) with validation.
"""

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()

_TRUTHY = {"1", "true", "yes", "on"}


def _get_required_env(key: str) -> str:
    """Get a required environment variable or raise an error."""
    value = os.getenv(key, "").strip()
    if not value:
        raise ValueError(f"Missing required environment variable: {key}")
    return value


def _get_optional_env(key: str, default: str = "") -> str:
    return os.getenv(key, default).strip()


def _get_optional_int(key: str, default: int) -> int:
    value = os.getenv(key, "").strip()
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"Environment variable {key} must be an integer, got {value!r}")


def _get_optional_bool(key: str, default: bool = False) -> bool:
    value = os.getenv(key, "").strip().lower()
    if not value:
        return default
    return value in _TRUTHY


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the webhook server."""
    agent_phone_number: str
    public_base_url: str = ""
    say_voice: str = "Polly.Salli"
    say_language: str = "en-US"
    groq_api_key: str = ""
    groq_model: str = "llama-3.1-8b-instant"
    groq_timeout: int = 5
    groq_max_retries: int = 1
    twilio_auth_token: str = ""
    validate_signature: bool = False
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    log_file: str = ""


def load_settings() -> Settings:
    """Load and validate all settings from environment variables."""
    settings = Settings(
        agent_phone_number=_get_required_env("AGENT_PHONE_NUMBER"),
        public_base_url=_get_optional_env("PUBLIC_BASE_URL").rstrip("/"),
        say_voice=_get_optional_env("SAY_VOICE", "Polly.Salli"),
        say_language=_get_optional_env("SAY_LANGUAGE", "en-US"),
        groq_api_key=_get_optional_env("GROQ_API_KEY"),
        groq_model=_get_optional_env("GROQ_MODEL", "llama-3.1-8b-instant"),
        groq_timeout=_get_optional_int("GROQ_TIMEOUT", 5),
        groq_max_retries=_get_optional_int("GROQ_MAX_RETRIES", 1),
        twilio_auth_token=_get_optional_env("TWILIO_AUTH_TOKEN"),
        validate_signature=_get_optional_bool("TWILIO_VALIDATE_SIGNATURE"),
        host=_get_optional_env("SERVER_HOST", "0.0.0.0"),
        port=_get_optional_int("SERVER_PORT", 8000),
        log_level=_get_optional_env("LOG_LEVEL", "INFO").upper(),
        log_file=_get_optional_env("LOG_FILE"),
    )
    if settings.validate_signature and not settings.twilio_auth_token:
        raise ValueError("TWILIO_AUTH_TOKEN is required when TWILIO_VALIDATE_SIGNATURE is enabled.")
    return settings


@lru_cache()
def get_settings() -> Settings:
    """Process-wide settings, loaded once. Also used as a FastAPI dependency."""
    return load_settings()
