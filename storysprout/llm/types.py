"""Typed request/result models for the LLM module (Pydantic v2)."""
from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict


class BackendName(str, Enum):
    """Supported LLM backends."""

    ANTHROPIC = "anthropic"
    OPENAI = "openai"


DEFAULT_BACKEND = BackendName.ANTHROPIC


def resolve_backend(value: str | BackendName | None) -> BackendName:
    """Map a configured backend name to BackendName. Unset or unknown -> DEFAULT_BACKEND."""
    if isinstance(value, BackendName):
        return value
    normalized = (value or "").strip().lower()
    for backend in BackendName:
        if backend.value == normalized:
            return backend
    return DEFAULT_BACKEND


class LLMMessage(BaseModel):
    """Single message in OpenAI-style format."""

    role: Literal["system", "user", "assistant"]
    content: str


class GenerationRequest(BaseModel):
    """Prompts for one beat generation. Frozen: owned by the call that built it."""

    model_config = ConfigDict(frozen=True)

    system_prompt: str
    user_message: str

    def to_messages(self) -> list[LLMMessage]:
        return [
            LLMMessage(role="system", content=self.system_prompt),
            LLMMessage(role="user", content=self.user_message),
        ]


class GenerationResult(BaseModel):
    """Normalized non-streaming result from any backend."""

    text: str
    provider: BackendName
    model: str
    latency_ms: int = 0
    finish_reason: str | None = None
