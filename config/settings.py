from __future__ import annotations

import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv


load_dotenv()


DEFAULT_FALLBACK_TEXT = (
    "Sorry, I'm having trouble thinking right now. Please try again in a moment."
)


class Settings:
    """Application settings loaded from environment variables.

    Keep all credentials and config centralized here. Nothing is validated at
    import time: a missing token or URL only fails the operation that needs it.
    """

    app_env: str = os.getenv("APP_ENV", "development")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Messenger Platform
    verify_token: Optional[str] = os.getenv("VERIFY_TOKEN") or None
    page_access_token: Optional[str] = os.getenv("PAGE_ACCESS_TOKEN") or None
    graph_api_base: str = os.getenv("GRAPH_API_BASE", "https://graph.facebook.com")
    graph_api_version: str = os.getenv("GRAPH_API_VERSION", "v19.0")

    # AI responder
    ai_api_url: Optional[str] = os.getenv("PYTHON_API_URL") or None
    fallback_text: str = os.getenv("FALLBACK_TEXT", DEFAULT_FALLBACK_TEXT)

    http_timeout: float = float(os.getenv("HTTP_TIMEOUT", "30"))

    @property
    def send_api_url(self) -> str:
        base = self.graph_api_base.rstrip("/")
        return f"{base}/{self.graph_api_version}/me/messages"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
