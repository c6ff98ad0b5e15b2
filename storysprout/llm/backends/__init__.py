"""Backend adapters: request shaping and text extraction for Anthropic and OpenAI."""
from storysprout.llm.backends.anthropic import AnthropicBackend
from storysprout.llm.backends.base import Backend
from storysprout.llm.backends.openai import OpenAIBackend
from storysprout.llm.types import BackendName

BACKEND_CLASSES: dict[BackendName, type[Backend]] = {
    BackendName.ANTHROPIC: AnthropicBackend,
    BackendName.OPENAI: OpenAIBackend,
}

__all__ = ["Backend", "AnthropicBackend", "OpenAIBackend", "BACKEND_CLASSES"]
