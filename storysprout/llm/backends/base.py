"""Shared backend shape: request kwargs for LiteLLM and plain-text extraction."""
from __future__ import annotations

from typing import Any

from storysprout.llm.settings import LLMSettings
from storysprout.llm.types import BackendName, GenerationRequest


class Backend:
    """One LLM backend. Holds no per-request state, so a single instance is shared process-wide."""

    name: BackendName

    def __init__(self, settings: LLMSettings, api_key: str) -> None:
        self.model = settings.model_for(self.name)
        self.max_tokens = settings.max_output_tokens
        self.timeout_s = settings.timeout_s
        self.temperature = settings.temperature
        self._api_key = api_key

    def completion_kwargs(self, req: GenerationRequest, *, stream: bool = False) -> dict[str, Any]:
        """Build LiteLLM completion kwargs. api_key passed explicitly (no os.environ in backends)."""
        kwargs: dict[str, Any] = {
            "model": self.model,
            "messages": [m.model_dump() for m in req.to_messages()],
            "max_tokens": self.max_tokens,
            "timeout": self.timeout_s,
            "api_key": self._api_key,
        }
        if self.temperature is not None:
            kwargs["temperature"] = self.temperature
        if stream:
            kwargs["stream"] = True
        return kwargs

    def content_text(self, content: Any) -> str:
        return content if isinstance(content, str) else ""

    def text_from_response(self, raw: Any) -> str:
        """Plain text of a non-streaming completion."""
        choices = getattr(raw, "choices", None) or []
        if not choices:
            return ""
        message = getattr(choices[0], "message", None)
        if message is None:
            return getattr(choices[0], "text", None) or ""
        return self.content_text(getattr(message, "content", None))

    def text_from_chunk(self, chunk: Any) -> str:
        """Plain text delta of one stream chunk; empty for role/usage/stop chunks."""
        choices = getattr(chunk, "choices", None) or []
        if not choices:
            return ""
        delta = getattr(choices[0], "delta", None)
        if delta is None:
            return ""
        return self.content_text(getattr(delta, "content", None))

    def finish_reason(self, raw: Any) -> str | None:
        choices = getattr(raw, "choices", None) or []
        if not choices:
            return None
        return getattr(choices[0], "finish_reason", None)
