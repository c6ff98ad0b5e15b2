"""Style and Theme repositories."""
from sqlalchemy import select
from sqlalchemy.orm import Session

from storysprout.db.models.catalog import Style, Theme
from storysprout.db.utils import wrap_integrity_error


class StyleRepo:
    @wrap_integrity_error
    def create(self, session: Session, name: str, slug: str, description: str = "", emoji: str = "") -> Style:
        s = Style(name=name, slug=slug, description=description, emoji=emoji)
        session.add(s)
        session.flush()
        return s

    def get_by_slug(self, session: Session, slug: str) -> Style | None:
        return session.execute(select(Style).where(Style.slug == slug)).scalar_one_or_none()


class ThemeRepo:
    @wrap_integrity_error
    def create(self, session: Session, name: str, slug: str, description: str = "", emoji: str = "") -> Theme:
        t = Theme(name=name, slug=slug, description=description, emoji=emoji)
        session.add(t)
        session.flush()
        return t

    def get_by_slug(self, session: Session, slug: str) -> Theme | None:
        return session.execute(select(Theme).where(Theme.slug == slug)).scalar_one_or_none()
