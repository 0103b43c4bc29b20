"""
DOCFLOW - Runtime Configuration
Endpoints and credentials, read from .env and the process environment.
"""

import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

# Load env vars
load_dotenv()

DEFAULT_SUMMARIZATION_URL_EN = "https://api-inference.huggingface.co/models/facebook/bart-large-cnn"
DEFAULT_SUMMARIZATION_URL_AR = "https://api-inference.huggingface.co/models/akhooli/arabic-summarization"
DEFAULT_DISPATCH_RELAY_URL = "https://formsubmit.co/ajax/"


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    hf_token: str = ""
    summarization_url_en: str = DEFAULT_SUMMARIZATION_URL_EN
    summarization_url_ar: str = DEFAULT_SUMMARIZATION_URL_AR
    dispatch_relay_url: str = DEFAULT_DISPATCH_RELAY_URL
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            hf_token=os.environ.get("HF_TOKEN", ""),
            summarization_url_en=os.environ.get("HF_SUMMARIZATION_URL_EN", DEFAULT_SUMMARIZATION_URL_EN),
            summarization_url_ar=os.environ.get("HF_SUMMARIZATION_URL_AR", DEFAULT_SUMMARIZATION_URL_AR),
            dispatch_relay_url=os.environ.get("DISPATCH_RELAY_URL", DEFAULT_DISPATCH_RELAY_URL),
            log_level=os.environ.get("DOCFLOW_LOG_LEVEL", "INFO"),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Settings singleton. Tests call ``get_settings.cache_clear()`` after touching the env."""
    return Settings.from_env()
