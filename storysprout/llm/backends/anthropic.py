"""Anthropic backend: replies may arrive as a list of content blocks; only text blocks are kept."""
from __future__ import annotations

from typing import Any

from storysprout.llm.backends.base import Backend
from storysprout.llm.types import BackendName


class AnthropicBackend(Backend):
    name = BackendName.ANTHROPIC

    def content_text(self, content: Any) -> str:
        if content is None or isinstance(content, str):
            return content or ""
        parts: list[str] = []
        for block in content:
            if isinstance(block, dict):
                if block.get("type") == "text":
                    parts.append(block.get("text") or "")
            elif getattr(block, "type", None) == "text":
                parts.append(getattr(block, "text", "") or "")
        return "".join(parts)
