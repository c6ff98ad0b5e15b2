"""Beat engine: stream one beat, validate it, persist it, and report the outcome as stream events."""
from __future__ import annotations

import asyncio
import logging
from contextlib import aclosing
from enum import Enum
from typing import AsyncIterator

from storysprout.db.schemas.story import PersistedBeat
from storysprout.llm.ports import ProviderClientPort
from storysprout.llm.telemetry import redact_preview
from storysprout.story.contracts import StoryStorePort
from storysprout.story.errors import StoryCompleteError, StoryError, StoryNotFoundError
from storysprout.story.events import Complete, Done, Error, StreamEvent, TextChunk, encode_sse
from storysprout.story.extractor import SegmentExtractor
from storysprout.story.prompts import PromptContextBuilder
from storysprout.story.safety import DEFAULT_DENYLIST, Denylist
from storysprout.story.schema import FINAL_BEAT, BeatResponse
from storysprout.story.settings import StorySettings
from storysprout.story.validators import BeatValidationResult, validate_beat_response

logger = logging.getLogger(__name__)


class BeatState(str, Enum):
    STREAMING = "streaming"
    VALIDATING = "validating"
    RETRYING = "retrying"
    PERSISTING = "persisting"
    COMPLETE = "complete"
    FAILED = "failed"


class BeatOrchestrator:
    """Drives one beat: Streaming -> Validating -> (Persisting | Retrying) -> Complete | Failed.

    Every path ends with exactly one Complete or Error event followed by Done, unless the
    consumer stops listening first; then the backend stream is closed and nothing more is pulled.
    """

    def __init__(
        self,
        provider: ProviderClientPort,
        store: StoryStorePort,
        *,
        settings: StorySettings | None = None,
        denylist: Denylist | None = None,
    ) -> None:
        self._provider = provider
        self._store = store
        self._settings = settings or StorySettings()
        base = denylist or DEFAULT_DENYLIST
        self._denylist = base.extend(self._settings.extra_blocked_words) if self._settings.extra_blocked_words else base
        self._pending_retries: set[asyncio.Future] = set()

    def _transition(self, story_id: str, beat_number: int, state: BeatState, **extra: object) -> None:
        logger.info(
            "beat_state",
            extra={"story_id": story_id, "beat_number": beat_number, "state": state.value, **extra},
        )

    def validate(self, raw: str, beat_number: int) -> BeatValidationResult:
        return validate_beat_response(
            raw,
            beat_number,
            min_words=self._settings.min_words,
            max_words=self._settings.max_words,
            denylist=self._denylist,
        )

    async def run_beat(
        self,
        story_id: str,
        beat_number: int,
        system_prompt: str,
        user_message: str,
    ) -> AsyncIterator[StreamEvent]:
        """Yield TextChunk events while streaming, then Complete or Error, then Done."""
        terminal: StreamEvent
        try:
            self._transition(story_id, beat_number, BeatState.STREAMING)
            extractor = SegmentExtractor()
            async with aclosing(self._provider.stream(system_prompt, user_message)) as fragments:
                async for chunk in fragments:
                    text = extractor.feed(chunk)
                    if text:
                        yield TextChunk(text)

            self._transition(story_id, beat_number, BeatState.VALIDATING, raw_chars=len(extractor.raw))
            result = self.validate(extractor.raw, beat_number)
            if result.ok:
                beat = await self._persist(
                    story_id, beat_number, result.data, self._provider.backend_name.value, extractor.raw
                )
                terminal = Complete(beat)
            elif self._settings.retry_on_invalid:
                logger.warning(
                    "stream validation failed, retrying: story_id=%s beat=%s error=%s",
                    story_id,
                    beat_number,
                    redact_preview(result.error or ""),
                )
                # once started, the retry (and its write) finishes even if the listener goes away
                retry = asyncio.ensure_future(self._retry(story_id, beat_number, system_prompt, user_message))
                self._pending_retries.add(retry)
                retry.add_done_callback(self._pending_retries.discard)
                terminal = await asyncio.shield(retry)
            else:
                terminal = Error(result.error or "Beat validation failed")
        except Exception as e:  # noqa: BLE001
            logger.exception("beat failed: story_id=%s beat=%s", story_id, beat_number)
            terminal = Error(str(e) or type(e).__name__)

        if isinstance(terminal, Error):
            self._transition(story_id, beat_number, BeatState.FAILED, error=redact_preview(terminal.message))
        else:
            self._transition(story_id, beat_number, BeatState.COMPLETE)
        yield terminal
        yield Done()

    async def _retry(
        self,
        story_id: str,
        beat_number: int,
        system_prompt: str,
        user_message: str,
    ) -> StreamEvent:
        """One non-streaming generation. Returns Complete or Error; never raises."""
        self._transition(story_id, beat_number, BeatState.RETRYING)
        try:
            generated = await self._provider.generate(system_prompt, user_message)
            result = self.validate(generated.text, beat_number)
            if not result.ok:
                return Error(result.error or "Beat validation failed")
            beat = await self._persist(
                story_id, beat_number, result.data, generated.provider.value, generated.text
            )
            return Complete(beat)
        except Exception as e:  # noqa: BLE001
            logger.exception("beat retry failed: story_id=%s beat=%s", story_id, beat_number)
            return Error(str(e) or "Retry failed")

    async def _persist(
        self,
        story_id: str,
        beat_number: int,
        data: BeatResponse,
        provider: str,
        raw_text: str,
    ) -> PersistedBeat:
        self._transition(story_id, beat_number, BeatState.PERSISTING, provider=provider)
        # the store advances current_beat / is_complete in the same transaction as the insert
        return await asyncio.to_thread(
            self._store.persist_beat,
            story_id,
            beat_number,
            data.content_fields(),
            provider,
            raw_text,
        )


class BeatRequestService:
    """Entry point for `{storyId, chosenOption}` requests: checks the story, commits the choice, streams."""

    def __init__(
        self,
        provider: ProviderClientPort,
        store: StoryStorePort,
        *,
        settings: StorySettings | None = None,
        prompt_builder: PromptContextBuilder | None = None,
    ) -> None:
        self._store = store
        self._prompts = prompt_builder or PromptContextBuilder()
        self._orchestrator = BeatOrchestrator(provider, store, settings=settings)

    async def stream_beat(self, story_id: str, chosen_option: str | None) -> AsyncIterator[StreamEvent]:
        """Raises StoryNotFoundError / StoryCompleteError before the first event; otherwise events only."""
        story = await asyncio.to_thread(self._store.load_story, story_id)
        if story is None:
            raise StoryNotFoundError(story_id)
        if story.is_complete or story.next_beat_number > FINAL_BEAT:
            raise StoryCompleteError(story_id)

        # the previous beat's choice must be stored before the next beat is generated
        if chosen_option and story.beats:
            await asyncio.to_thread(self._store.record_choice, story_id, chosen_option)

        bundle = self._prompts.build(story, chosen_option)
        async with aclosing(
            self._orchestrator.run_beat(
                story_id, bundle.next_beat_number, bundle.system_prompt, bundle.user_message
            )
        ) as events:
            async for event in events:
                yield event

    async def sse_stream(self, story_id: str, chosen_option: str | None) -> AsyncIterator[str]:
        """Same flow encoded as SSE lines. Request errors become a single error event plus [DONE]."""
        try:
            events = self.stream_beat(story_id, chosen_option)
            async with aclosing(events):
                async for event in events:
                    yield encode_sse(event)
        except StoryError as e:
            yield encode_sse(Error(str(e)))
            yield encode_sse(Done())
        except Exception as e:  # noqa: BLE001
            logger.exception("beat request failed: story_id=%s", story_id)
            yield encode_sse(Error(str(e) or type(e).__name__))
            yield encode_sse(Done())
