"""Application configuration."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    app_name: str = "CallGateway"
    debug: bool = False
    log_level: str | None = None

    # CORS
    cors_origins: list[str] = ["http://localhost:5173"]
    cors_origin_regex: str | None = None

    # Twilio (mock by default)
    twilio_account_sid: str = ""
    twilio_auth_token: str = ""
    twilio_api_key_sid: str = ""
    twilio_api_key_secret: str = ""
    twilio_app_sid: str = ""
    twilio_phone_number: str = ""
    twilio_use_mock: bool = True

    # Access tokens
    default_identity: str = "agent_1"
    token_ttl_seconds: int = 3600

    # Call routing
    incoming_target_identity: str = "agent_1"
    incoming_greeting: str = "Connecting you to an agent."
    hold_music_url: str = "http://com.twilio.sounds.music.s3.amazonaws.com/MARKOVICHAMP-B7.mp3"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, list):
            return value
        if not value:
            return []
        if value.strip() == "*":
            return ["*"]
        return [item.strip() for item in value.split(",") if item.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
