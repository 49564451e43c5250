"""Centralised configuration handling for VendorSpend."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping

import streamlit as st
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DATA_PATH = Path("data") / "vendor_spend_saas.csv"
DEFAULT_ASSISTANT_BASE_URL = "http://127.0.0.1:11434/v1"
DEFAULT_ASSISTANT_MODEL = "mistral"


def _streamlit_section(name: str) -> Mapping[str, Any] | None:
    """Return a mapping from Streamlit secrets for the given section."""

    try:
        if hasattr(st, "secrets") and name in st.secrets:
            section = st.secrets[name]
            if isinstance(section, Mapping):
                return section
            return dict(section)
    except Exception:  # pragma: no cover - accessing secrets may fail outside streamlit
        return None
    return None


class Settings(BaseSettings):
    """Application settings sourced from env vars and Streamlit secrets."""

    data_path: Path = DEFAULT_DATA_PATH
    assistant_base_url: str = DEFAULT_ASSISTANT_BASE_URL
    assistant_model: str = DEFAULT_ASSISTANT_MODEL
    # Ollama ignores the key but the OpenAI client insists on one.
    assistant_api_key: str = "ollama"
    assistant_max_tokens: int = 400
    assistant_temperature: float = 0.2
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="VENDORSPEND_", extra="ignore")

    @property
    def assistant_client_kwargs(self) -> dict[str, Any]:
        return {"api_key": self.assistant_api_key, "base_url": self.assistant_base_url}


@lru_cache
def get_settings() -> Settings:
    """Load and cache application settings."""

    overrides: dict[str, Any] = {}
    secrets_section = _streamlit_section("assistant")
    if secrets_section:
        overrides = {
            "assistant_api_key": secrets_section.get("api_key"),
            "assistant_base_url": secrets_section.get("base_url"),
            "assistant_model": secrets_section.get("model"),
        }

    return Settings(**{k: v for k, v in overrides.items() if v is not None})
