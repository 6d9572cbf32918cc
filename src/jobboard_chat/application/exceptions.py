from __future__ import annotations


class AppError(Exception):
    """Base application error. `detail` is safe to return to the caller."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(detail)


class NotFoundError(AppError):
    pass


class ForbiddenError(AppError):
    """Caller is not a participant of the conversation."""


class ValidationError(AppError):
    pass
