"""
ProviderClient: single public entrypoint for LLM calls. Backend is chosen once, at construction.
Other modules import only ProviderClient (and types). Never call LiteLLM directly.
"""
from __future__ import annotations

import threading
import time
from typing import AsyncIterator

from storysprout.llm import client_litellm
from storysprout.llm.backends import BACKEND_CLASSES, Backend
from storysprout.llm.errors import LLMConfigurationError, LLMError
from storysprout.llm.settings import LLMSettings
from storysprout.llm.telemetry import log_llm_call
from storysprout.llm.types import BackendName, GenerationRequest, GenerationResult, resolve_backend

# Process-wide backend handles, created on first use. Keyed by everything that shapes requests
# so tests with different settings never share a handle.
_BACKENDS: dict[tuple, Backend] = {}
_BACKENDS_LOCK = threading.Lock()


def _cache_key(name: BackendName, settings: LLMSettings, api_key: str) -> tuple:
    return (
        name,
        api_key,
        settings.model_for(name),
        settings.max_output_tokens,
        settings.timeout_s,
        settings.temperature,
    )


def get_backend(name: BackendName, settings: LLMSettings) -> Backend:
    """Return the cached handle for this backend, creating it on first use.

    Raises LLMConfigurationError if the backend's API key is missing.
    """
    api_key = settings.api_key_for(name)
    if not api_key:
        raise LLMConfigurationError(
            f"Missing API key for backend {name.value!r} (set LLM_{name.value.upper()}_API_KEY)",
            provider=name,
        )
    key = _cache_key(name, settings, api_key)
    with _BACKENDS_LOCK:
        backend = _BACKENDS.get(key)
        if backend is None:
            backend = BACKEND_CLASSES[name](settings, api_key)
            _BACKENDS[key] = backend
        return backend


def reset_backend_cache() -> None:
    """Drop all cached backend handles (tests, credential rotation)."""
    with _BACKENDS_LOCK:
        _BACKENDS.clear()


class ProviderClient:
    """Provider-agnostic generate/stream over the configured backend."""

    def __init__(self, settings: LLMSettings | None = None, *, backend: BackendName | str | None = None) -> None:
        self._settings = settings or LLMSettings()
        self._backend_name = resolve_backend(backend) if backend is not None else self._settings.backend

    @property
    def backend_name(self) -> BackendName:
        return self._backend_name

    def _backend(self) -> Backend:
        return get_backend(self._backend_name, self._settings)

    async def generate(self, system_prompt: str, user_message: str) -> GenerationResult:
        """Single blocking round-trip. Returns full text and the backend name."""
        backend = self._backend()
        req = GenerationRequest(system_prompt=system_prompt, user_message=user_message)
        try:
            result = await client_litellm.acomplete(backend, req)
        except LLMError as e:
            log_llm_call(
                provider=backend.name.value,
                model=backend.model,
                mode="generate",
                latency_ms=0,
                status="FAILED",
                error_code=e.code,
            )
            raise
        log_llm_call(
            provider=result.provider.value,
            model=result.model,
            mode="generate",
            latency_ms=result.latency_ms,
            status="SUCCEEDED",
        )
        return result

    async def stream(self, system_prompt: str, user_message: str) -> AsyncIterator[str]:
        """Yield text fragments in arrival order. Closing this generator closes the backend stream."""
        backend = self._backend()
        req = GenerationRequest(system_prompt=system_prompt, user_message=user_message)
        t0 = time.perf_counter()
        status = "SUCCEEDED"
        error_code: str | None = None
        fragments = client_litellm.astream(backend, req)
        try:
            async for text in fragments:
                yield text
        except LLMError as e:
            status = "FAILED"
            error_code = e.code
            raise
        finally:
            await fragments.aclose()
            log_llm_call(
                provider=backend.name.value,
                model=backend.model,
                mode="stream",
                latency_ms=int((time.perf_counter() - t0) * 1000),
                status=status,
                error_code=error_code,
            )
