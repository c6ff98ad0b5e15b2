"""DB utilities: stable JSON for TEXT columns, IntegrityError -> ConflictError."""
import functools
import json
from typing import Any

from sqlalchemy.exc import IntegrityError

from storysprout.db.exceptions import ConflictError


def json_serialize(obj: Any) -> str:
    """Stable JSON for DB TEXT columns: no extra whitespace, non-ASCII kept."""
    return json.dumps(obj, ensure_ascii=False, separators=(",", ":"))


def json_list(value: str | None) -> list[str]:
    if not value:
        return []
    return list(json.loads(value))


def wrap_integrity_error(fn):
    """Decorator that wraps IntegrityError in ConflictError."""
    @functools.wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except IntegrityError as e:
            raise ConflictError(f"Constraint violation: {e.orig}") from e
    return wrapper
