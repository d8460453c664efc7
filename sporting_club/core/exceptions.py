"""Error kinds raised by the club store."""


class AppError(Exception):
    """Base app exception."""


class NotFoundError(AppError):
    """An id or (member, sport) pair does not exist."""


class ConflictError(AppError):
    """Duplicate member email or duplicate active subscription."""


class NotInitializedError(AppError):
    """Store used before init() or after close()."""
