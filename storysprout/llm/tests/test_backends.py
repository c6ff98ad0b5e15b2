"""Backend request shaping and text extraction (no network)."""
from types import SimpleNamespace

from storysprout.llm.backends import AnthropicBackend, OpenAIBackend
from storysprout.llm.settings import LLMSettings
from storysprout.llm.types import GenerationRequest


def _req() -> GenerationRequest:
    return GenerationRequest(system_prompt="You narrate.", user_message="Begin.")


def _settings(**kw) -> LLMSettings:
    return LLMSettings(anthropic_api_key="ak", openai_api_key="ok", **kw)


def test_anthropic_kwargs() -> None:
    backend = AnthropicBackend(_settings(), "ak")
    kwargs = backend.completion_kwargs(_req())
    assert kwargs["model"] == "anthropic/claude-sonnet-4-5-20250929"
    assert kwargs["max_tokens"] == 1024
    assert kwargs["api_key"] == "ak"
    assert kwargs["messages"] == [
        {"role": "system", "content": "You narrate."},
        {"role": "user", "content": "Begin."},
    ]
    assert "stream" not in kwargs
    assert "temperature" not in kwargs


def test_openai_stream_kwargs() -> None:
    backend = OpenAIBackend(_settings(temperature=0.7, max_output_tokens=512), "ok")
    kwargs = backend.completion_kwargs(_req(), stream=True)
    assert kwargs["model"] == "openai/gpt-4o-mini"
    assert kwargs["stream"] is True
    assert kwargs["stream_options"] == {"include_usage": True}
    assert kwargs["max_tokens"] == 512
    assert kwargs["temperature"] == 0.7


def test_text_from_response() -> None:
    raw = SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content='{"beat":1}'), finish_reason="stop")]
    )
    backend = OpenAIBackend(_settings(), "ok")
    assert backend.text_from_response(raw) == '{"beat":1}'
    assert backend.finish_reason(raw) == "stop"


def test_anthropic_joins_text_blocks_only() -> None:
    content = [
        {"type": "text", "text": '{"beat":'},
        {"type": "tool_use", "id": "x"},
        SimpleNamespace(type="text", text="1}"),
    ]
    raw = SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])
    backend = AnthropicBackend(_settings(), "ak")
    assert backend.text_from_response(raw) == '{"beat":1}'


def test_text_from_chunk_skips_empty_deltas() -> None:
    backend = OpenAIBackend(_settings(), "ok")
    assert backend.text_from_chunk(SimpleNamespace(choices=[SimpleNamespace(delta=SimpleNamespace(content="Once"))])) == "Once"
    assert backend.text_from_chunk(SimpleNamespace(choices=[SimpleNamespace(delta=SimpleNamespace(content=None))])) == ""
    assert backend.text_from_chunk(SimpleNamespace(choices=[])) == ""


def test_empty_response() -> None:
    backend = AnthropicBackend(_settings(), "ak")
    assert backend.text_from_response(SimpleNamespace(choices=[])) == ""
