import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List

from dotenv import load_dotenv

# Load .env from project root
load_dotenv()


DEFAULT_MODEL = "claude-sonnet-4-20250514"
DEFAULT_BASE_URL = "https://api.anthropic.com"
DEFAULT_API_VERSION = "2023-06-01"


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    """Process configuration, read once and passed to whoever needs it."""
    anthropic_api_key: str = ""
    anthropic_model: str = DEFAULT_MODEL
    max_tokens: int = 60000
    anthropic_base_url: str = DEFAULT_BASE_URL
    anthropic_version: str = DEFAULT_API_VERSION
    request_timeout: float = 300.0

    host: str = "0.0.0.0"
    port: int = 5000
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    max_body_bytes: int = 20 * 1024 * 1024
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            anthropic_api_key=os.getenv("ANTHROPIC_API_KEY", ""),
            anthropic_model=os.getenv("ANTHROPIC_MODEL", DEFAULT_MODEL),
            max_tokens=int(os.getenv("ANTHROPIC_MAX_TOKENS", "60000")),
            anthropic_base_url=os.getenv("ANTHROPIC_BASE_URL", DEFAULT_BASE_URL),
            anthropic_version=os.getenv("ANTHROPIC_VERSION", DEFAULT_API_VERSION),
            request_timeout=float(os.getenv("REQUEST_TIMEOUT", "300")),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "5000")),
            cors_origins=_split_csv(os.getenv("CORS_ORIGINS", "*")),
            max_body_bytes=int(os.getenv("MAX_BODY_BYTES", str(20 * 1024 * 1024))),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


@lru_cache
def get_settings() -> Settings:
    """Return cached settings built from the environment."""
    return Settings.from_env()
