"""Port interface for the LLM module. The story engine depends on this, not on ProviderClient."""
from __future__ import annotations

from typing import AsyncIterator, Protocol, runtime_checkable

from storysprout.llm.types import BackendName, GenerationResult


@runtime_checkable
class ProviderClientPort(Protocol):
    """Provider-agnostic generation: one blocking call or one lazy fragment stream."""

    @property
    def backend_name(self) -> BackendName:
        ...

    async def generate(self, system_prompt: str, user_message: str) -> GenerationResult:
        """Single round-trip. Raises LLMError on failure."""
        ...

    def stream(self, system_prompt: str, user_message: str) -> AsyncIterator[str]:
        """Lazy sequence of text fragments; ends when the backend signals end-of-response."""
        ...
