from __future__ import annotations

import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv


load_dotenv()

DEFAULT_CHAT_COMPLETIONS_URL = "https://integrate.api.nvidia.com/v1/chat/completions"
DEFAULT_CHAT_MODEL = "meta/llama-3.1-70b-instruct"


def _optional_float(name: str) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return float(raw)


class Settings:
    """Application settings loaded from environment variables.

    Keep all credentials and config centralized here. The upstream API key
    is only handed to the completion gateway when it is built.
    """

    def __init__(self) -> None:
        self.app_env: str = os.getenv("APP_ENV", "development")
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO")
        self.nvidia_api_key: Optional[str] = os.getenv("NVIDIA_API_KEY")
        self.chat_completions_url: str = os.getenv(
            "CHAT_COMPLETIONS_URL", DEFAULT_CHAT_COMPLETIONS_URL
        )
        self.chat_model: str = os.getenv("CHAT_MODEL", DEFAULT_CHAT_MODEL)
        # Unset means the upstream call may wait indefinitely.
        self.upstream_timeout: Optional[float] = _optional_float("UPSTREAM_TIMEOUT")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
