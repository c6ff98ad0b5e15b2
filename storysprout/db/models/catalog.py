"""Style and Theme ORM models (read-only catalogs from the engine's point of view)."""
from __future__ import annotations

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from storysprout.db.base import Base, IdMixin


class Style(Base, IdMixin):
    __tablename__ = "styles"

    name: Mapped[str] = mapped_column(String(128), nullable=False)
    slug: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    description: Mapped[str] = mapped_column(String(512), nullable=False, default="")
    emoji: Mapped[str] = mapped_column(String(16), nullable=False, default="")


class Theme(Base, IdMixin):
    __tablename__ = "themes"

    name: Mapped[str] = mapped_column(String(128), nullable=False)
    slug: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    description: Mapped[str] = mapped_column(String(512), nullable=False, default="")
    emoji: Mapped[str] = mapped_column(String(16), nullable=False, default="")
