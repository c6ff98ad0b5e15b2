"""DB-specific exceptions for clearer error handling."""


class DbError(Exception):
    """Base exception for story storage errors."""


class NotFoundError(DbError):
    """Requested story, beat or catalog entry was not found."""


class ConflictError(DbError):
    """Uniqueness or constraint violation (e.g. the same beat number saved twice)."""
