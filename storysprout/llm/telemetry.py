"""Observability: redaction, structured logging, metrics. No ad hoc logs in service/client."""
from __future__ import annotations

import logging
import re
from typing import Any

logger = logging.getLogger(__name__)

# Redaction: patterns to mask (never log or store raw)
_SECRET_PATTERNS = [
    re.compile(r"\b(?:sk-ant-[a-zA-Z0-9_-]{20,})\b"),  # Anthropic
    re.compile(r"\b(?:sk-[a-zA-Z0-9_-]{20,})\b"),  # OpenAI-style
    re.compile(r"\bBearer\s+[a-zA-Z0-9_.-]+\b", re.IGNORECASE),
]
_PII_PATTERN = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")  # email
_PREVIEW_MAX_CHARS = 200


def redact_preview(text: str, max_chars: int = _PREVIEW_MAX_CHARS) -> str:
    """Redact secrets and PII, then truncate. Use for prompt/response previews in logs."""
    if not text:
        return ""
    out = text
    for pat in _SECRET_PATTERNS:
        out = pat.sub("[REDACTED]", out)
    out = _PII_PATTERN.sub("[EMAIL]", out)
    if len(out) > max_chars:
        out = out[:max_chars] + "..."
    return out


def log_llm_call(
    *,
    provider: str,
    model: str,
    mode: str,
    latency_ms: int,
    status: str,
    error_code: str | None = None,
) -> None:
    """Emit structured log for one LLM call. Never log prompt text or API keys."""
    extra: dict[str, Any] = {
        "provider": provider,
        "model": model,
        "mode": mode,
        "latency_ms": latency_ms,
        "status": status,
    }
    if error_code is not None:
        extra["error_code"] = error_code
    logger.info("llm_call", extra=extra)


def emit_latency_metric(provider: str, model: str, latency_ms: float) -> None:
    logger.debug("metric llm_latency_ms %s %s %s", provider, model, latency_ms)


def emit_error_metric(provider: str, code: str) -> None:
    logger.debug("metric llm_errors %s %s", provider, code)
