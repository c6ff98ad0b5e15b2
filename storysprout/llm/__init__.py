"""
LLM module: single typed async interface for all LLM calls.
Public API: ProviderClient, GenerationRequest, GenerationResult, BackendName.
Other modules must not call LiteLLM or provider SDKs directly.
"""
from storysprout.llm.errors import (
    LLMAuthError,
    LLMBadRequest,
    LLMConfigurationError,
    LLMError,
    LLMRateLimited,
    LLMTimeout,
    LLMUnavailable,
)
from storysprout.llm.ports import ProviderClientPort
from storysprout.llm.service import ProviderClient, reset_backend_cache
from storysprout.llm.settings import LLMSettings
from storysprout.llm.types import (
    BackendName,
    GenerationRequest,
    GenerationResult,
    LLMMessage,
    resolve_backend,
)

__all__ = [
    "ProviderClient",
    "ProviderClientPort",
    "LLMSettings",
    "GenerationRequest",
    "GenerationResult",
    "LLMMessage",
    "BackendName",
    "resolve_backend",
    "reset_backend_cache",
    "LLMError",
    "LLMConfigurationError",
    "LLMTimeout",
    "LLMRateLimited",
    "LLMBadRequest",
    "LLMAuthError",
    "LLMUnavailable",
]
