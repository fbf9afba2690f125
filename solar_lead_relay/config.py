import logging
import os
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator


class Settings(BaseModel):
    """Process configuration, read once at startup."""

    model_config = {"frozen": True}

    google_api_key: Optional[str] = None
    n8n_webhook_url: Optional[str] = None
    allowed_origins: List[str] = ["*"]
    port: int = 3000
    solar_required_quality: str = "HIGH"
    outbound_timeout: Optional[float] = None
    log_level: str = "INFO"

    @field_validator("log_level", mode="before")
    @classmethod
    def _known_log_level(cls, value):
        # Unknown names fall back to INFO instead of failing logging setup
        name = str(value).strip().upper()
        if not isinstance(logging.getLevelName(name), int):
            return "INFO"
        return name


def _env(name: str) -> Optional[str]:
    value = os.getenv(name, "").strip()
    return value or None


def _split_origins(raw: Optional[str]) -> List[str]:
    if not raw:
        return ["*"]
    origins = [o.strip() for o in raw.split(",") if o.strip()]
    return origins or ["*"]


def load_settings() -> Settings:
    load_dotenv()
    values = {
        "google_api_key": _env("GOOGLE_API_KEY"),
        "n8n_webhook_url": _env("N8N_WEBHOOK_URL"),
        "allowed_origins": _split_origins(_env("ALLOWED_ORIGINS")),
    }
    # Leave unset keys out so the model defaults apply
    optional = {
        "port": _env("PORT"),
        "solar_required_quality": _env("SOLAR_REQUIRED_QUALITY"),
        "outbound_timeout": _env("OUTBOUND_TIMEOUT_SECONDS"),
        "log_level": _env("LOG_LEVEL"),
    }
    values.update({k: v for k, v in optional.items() if v is not None})
    return Settings(**values)
