"""Story and StoryBeat ORM models."""
from __future__ import annotations

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storysprout.db.base import Base, IdMixin, TimestampMixin
from storysprout.db.models.catalog import Style, Theme


class Story(Base, IdMixin, TimestampMixin):
    __tablename__ = "stories"

    style_id: Mapped[str] = mapped_column(String(36), ForeignKey("styles.id"), nullable=False)
    theme_id: Mapped[str] = mapped_column(String(36), ForeignKey("themes.id"), nullable=False)
    current_beat: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_complete: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    style: Mapped[Style] = relationship(Style, lazy="joined")
    theme: Mapped[Theme] = relationship(Theme, lazy="joined")
    beats: Mapped[list["StoryBeat"]] = relationship(
        "StoryBeat",
        back_populates="story",
        cascade="all, delete-orphan",
        order_by="StoryBeat.beat_number",
    )


class StoryBeat(Base, IdMixin, TimestampMixin):
    __tablename__ = "story_beats"

    story_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("stories.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    beat_number: Mapped[int] = mapped_column(Integer, nullable=False)
    segment: Mapped[str] = mapped_column(Text, nullable=False)
    question: Mapped[str | None] = mapped_column(Text, nullable=True)
    options_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    chosen_option: Mapped[str | None] = mapped_column(Text, nullable=True)
    provider: Mapped[str] = mapped_column(String(32), nullable=False)
    raw_json: Mapped[str | None] = mapped_column(Text, nullable=True)

    story: Mapped[Story] = relationship(Story, back_populates="beats")

    __table_args__ = (
        UniqueConstraint("story_id", "beat_number", name="uq_story_beats_story_beat"),
    )
