"""
LiteLLM client wrapper: one completion or one token stream per call, normalized to plain text.
Exception mapping (LiteLLM -> LLMError):
  - APITimeoutError / Timeout -> LLMTimeout
  - RateLimitError -> LLMRateLimited
  - AuthenticationError / PermissionDeniedError -> LLMAuthError
  - BadRequestError / InvalidRequestError / NotFoundError -> LLMBadRequest
  - APIError / ServiceUnavailableError / APIConnectionError / InternalServerError -> LLMUnavailable
  - unknown -> LLMUnavailable (5xx or "timeout" in message) or LLMError(UNKNOWN)
No retries here: the beat orchestrator owns the retry policy.
"""
from __future__ import annotations

import time
from typing import Any, AsyncIterator

from litellm import acompletion

from storysprout.llm.backends.base import Backend
from storysprout.llm.errors import (
    LLMAuthError,
    LLMBadRequest,
    LLMError,
    LLMRateLimited,
    LLMTimeout,
    LLMUnavailable,
)
from storysprout.llm.telemetry import emit_error_metric, emit_latency_metric
from storysprout.llm.types import BackendName, GenerationRequest, GenerationResult


def _map_exception(e: Exception, provider: BackendName) -> LLMError:
    """Map LiteLLM/provider exceptions to LLMError. Uses class name so it works across import paths."""
    if isinstance(e, LLMError):
        return e
    exc_name = type(e).__name__
    message = str(e) or exc_name
    if exc_name in ("APITimeoutError", "Timeout"):
        return LLMTimeout(message, details=exc_name, provider=provider)
    if exc_name == "RateLimitError":
        return LLMRateLimited(message, details=exc_name, provider=provider)
    if exc_name in ("AuthenticationError", "PermissionDeniedError"):
        return LLMAuthError(message, details=exc_name, provider=provider)
    if exc_name in ("BadRequestError", "InvalidRequestError", "NotFoundError"):
        return LLMBadRequest(message, details=exc_name, provider=provider)
    if exc_name in ("ServiceUnavailableError", "APIConnectionError", "APIError", "InternalServerError"):
        return LLMUnavailable(message, details=exc_name, provider=provider)
    if getattr(e, "status_code", None) in (500, 502, 503, 504) or "timeout" in message.lower():
        return LLMUnavailable(message, details=exc_name, provider=provider)
    return LLMError(
        message,
        code="UNKNOWN",
        retryable=False,
        provider=provider,
        details=exc_name,
    )


async def acomplete(backend: Backend, req: GenerationRequest) -> GenerationResult:
    """Execute one blocking completion. Raises LLMError on failure."""
    kwargs = backend.completion_kwargs(req)
    t0 = time.perf_counter()
    try:
        raw = await acompletion(**kwargs)
    except Exception as e:  # noqa: BLE001
        err = _map_exception(e, backend.name)
        emit_error_metric(backend.name.value, err.code)
        raise err from e
    latency_ms = int((time.perf_counter() - t0) * 1000)
    emit_latency_metric(backend.name.value, backend.model, float(latency_ms))
    return GenerationResult(
        text=backend.text_from_response(raw),
        provider=backend.name,
        model=backend.model,
        latency_ms=latency_ms,
        finish_reason=backend.finish_reason(raw),
    )


async def astream(backend: Backend, req: GenerationRequest) -> AsyncIterator[str]:
    """Yield non-empty text fragments as the backend produces them.

    The underlying stream is closed when the consumer stops iterating early.
    """
    kwargs = backend.completion_kwargs(req, stream=True)
    t0 = time.perf_counter()
    try:
        stream: Any = await acompletion(**kwargs)
    except Exception as e:  # noqa: BLE001
        err = _map_exception(e, backend.name)
        emit_error_metric(backend.name.value, err.code)
        raise err from e
    try:
        async for chunk in stream:
            text = backend.text_from_chunk(chunk)
            if text:
                yield text
    except LLMError:
        raise
    except Exception as e:  # noqa: BLE001
        err = _map_exception(e, backend.name)
        emit_error_metric(backend.name.value, err.code)
        raise err from e
    finally:
        aclose = getattr(stream, "aclose", None)
        if aclose is not None:
            await aclose()
    emit_latency_metric(backend.name.value, backend.model, (time.perf_counter() - t0) * 1000)
