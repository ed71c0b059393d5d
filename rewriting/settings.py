"""
User settings for the rewriting pipeline and their JSON file store.

RewriteSettings is passed explicitly to the client and the service; there
is no process-wide settings object.

Usage:
    store = SettingsStore("data/settings.json")
    settings = store.load()
    store.save(chunk_size=6000, temperature=0.5)
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from chunking.models import MAX_CHUNK_SIZE, MIN_CHUNK_SIZE

from .prompts import DEFAULT_SYSTEM_PROMPT

logger = logging.getLogger(__name__)

GEMINI_OPENAI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"


class RewriteSettings(BaseModel):
    """
    Settings that control chunking and the rewriting service.

    Out-of-range values are rejected with a pydantic ValidationError.
    """
    api_key: str = Field(
        "",
        description="API key for the rewriting service",
    )
    model: str = Field(
        "gemini-2.5-flash",
        description="Model used for rewriting",
        min_length=1,
    )
    chunk_size: int = Field(
        4000,
        description="Maximum estimated tokens per chunk",
        ge=MIN_CHUNK_SIZE,
        le=MAX_CHUNK_SIZE,
    )
    temperature: float = Field(
        0.7,
        description="Sampling temperature",
        ge=0.0,
        le=2.0,
    )
    max_output_tokens: int = Field(
        2000,
        description="Maximum tokens the model may return per chunk",
        ge=100,
        le=8000,
    )
    system_prompt: str = Field(
        DEFAULT_SYSTEM_PROMPT,
        description="System instruction sent with every chunk",
    )
    base_url: str = Field(
        GEMINI_OPENAI_BASE_URL,
        description="OpenAI-compatible endpoint of the rewriting service",
    )

    @field_validator("api_key")
    @classmethod
    def _strip_api_key(cls, value: str) -> str:
        return value.strip()

    def has_api_key(self) -> bool:
        return bool(self.api_key)

    @classmethod
    def from_env(cls) -> "RewriteSettings":
        mapping = {
            "api_key": "GEMINI_API_KEY",
            "model": "PDF2SPEECH_MODEL",
            "chunk_size": "PDF2SPEECH_CHUNK_SIZE",
            "temperature": "PDF2SPEECH_TEMPERATURE",
            "max_output_tokens": "PDF2SPEECH_MAX_OUTPUT_TOKENS",
            "base_url": "PDF2SPEECH_BASE_URL",
        }
        values = {
            field_name: os.environ[env_name]
            for field_name, env_name in mapping.items()
            if os.environ.get(env_name)
        }
        return cls.model_validate(values)


class SettingsStore:
    """Persists RewriteSettings as a JSON file, merged over defaults on load."""

    def __init__(self, path: str | Path, defaults: RewriteSettings | None = None):
        self.path = Path(path)
        self.defaults = defaults or RewriteSettings()
        self.settings = self.load()

    def load(self) -> RewriteSettings:
        if not self.path.exists():
            return self.defaults.model_copy()
        try:
            stored = json.loads(self.path.read_text(encoding="utf-8"))
            merged = {**self.defaults.model_dump(), **stored}
            return RewriteSettings.model_validate(merged)
        except (OSError, json.JSONDecodeError, ValidationError) as exc:
            logger.error(f"Error loading settings from {self.path}: {exc}")
            return self.defaults.model_copy()

    def save(self, **updates: Any) -> RewriteSettings:
        """
        Merge updates into the current settings and write them to disk.

        Raises:
            pydantic.ValidationError: If an updated value is out of range.
        """
        merged = {**self.settings.model_dump(), **updates}
        self.settings = RewriteSettings.model_validate(merged)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(self.export(), encoding="utf-8")
        return self.settings

    def get(self, key: str) -> Any:
        return getattr(self.settings, key)

    def set(self, key: str, value: Any) -> RewriteSettings:
        return self.save(**{key: value})

    def export(self) -> str:
        return json.dumps(self.settings.model_dump(), ensure_ascii=False, indent=2)

    def clear(self) -> RewriteSettings:
        """Delete the settings file and restore defaults."""
        if self.path.exists():
            self.path.unlink()
        self.settings = self.defaults.model_copy()
        return self.settings

    def reset_system_prompt(self) -> RewriteSettings:
        return self.set("system_prompt", DEFAULT_SYSTEM_PROMPT)
