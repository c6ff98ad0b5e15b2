"""LLM module configuration. Env prefix: LLM_. Keys: LLM_ANTHROPIC_API_KEY, LLM_OPENAI_API_KEY."""
from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from storysprout.llm.types import DEFAULT_BACKEND, BackendName, resolve_backend


class LLMSettings(BaseSettings):
    """Settings for backend selection and request shaping. All overridable via LLM_* env vars.

    Credentials are not validated here: a missing key fails at first use of that backend.
    """

    model_config = SettingsConfigDict(
        env_prefix="LLM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    backend: BackendName = Field(default=DEFAULT_BACKEND, description="Active backend (process scope)")
    max_output_tokens: int = Field(default=1024, ge=1, description="Token ceiling per beat")
    timeout_s: float = Field(default=60.0, gt=0, description="Request timeout")
    temperature: float | None = Field(default=None, ge=0, description="Sampling temperature (backend default if unset)")

    anthropic_api_key: str | None = Field(default=None, description="API key (env: LLM_ANTHROPIC_API_KEY)")
    anthropic_model: str = Field(
        default="anthropic/claude-sonnet-4-5-20250929",
        description="Anthropic model (anthropic/ prefix)",
    )

    openai_api_key: str | None = Field(default=None, description="API key (env: LLM_OPENAI_API_KEY)")
    openai_model: str = Field(default="openai/gpt-4o-mini", description="OpenAI model (openai/ prefix)")

    @field_validator("backend", mode="before")
    @classmethod
    def fallback_to_default_backend(cls, value: object) -> BackendName:
        if value is None or isinstance(value, (str, BackendName)):
            return resolve_backend(value)
        return DEFAULT_BACKEND

    def api_key_for(self, backend: BackendName) -> str | None:
        if backend == BackendName.ANTHROPIC:
            return self.anthropic_api_key
        return self.openai_api_key

    def model_for(self, backend: BackendName) -> str:
        if backend == BackendName.ANTHROPIC:
            return self.anthropic_model
        return self.openai_model
