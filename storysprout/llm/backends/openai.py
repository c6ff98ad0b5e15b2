"""OpenAI backend: chat completions with system + user messages."""
from __future__ import annotations

from typing import Any

from storysprout.llm.backends.base import Backend
from storysprout.llm.types import BackendName, GenerationRequest


class OpenAIBackend(Backend):
    name = BackendName.OPENAI

    def completion_kwargs(self, req: GenerationRequest, *, stream: bool = False) -> dict[str, Any]:
        kwargs = super().completion_kwargs(req, stream=stream)
        if stream:
            # final chunk carries usage; text extraction skips it
            kwargs["stream_options"] = {"include_usage": True}
        return kwargs
