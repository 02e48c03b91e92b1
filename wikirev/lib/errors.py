"""Error kinds surfaced by the wiki API.

Every failure the service reports on purpose is a :class:`WikiError` tagged
with an :class:`ErrorKind`. The exception handler in
:mod:`wikirev.lib.exceptions` turns the kind into an HTTP status and a
``{code, error, message, statusCode}`` body.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    LOCKED = "LOCKED"
    NOT_ALLOWED = "NOT_ALLOWED"
    NEED_LOGIN = "NEED_LOGIN"
    WIKI_CHANGED = "WIKI_CHANGED"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]

    @property
    def reason(self) -> str:
        return _REASONS[self]


_STATUS_CODES = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INVALID_ARGUMENT: 400,
    ErrorKind.LOCKED: 423,
    ErrorKind.NOT_ALLOWED: 403,
    ErrorKind.NEED_LOGIN: 401,
    ErrorKind.WIKI_CHANGED: 400,
}

_REASONS = {
    ErrorKind.NOT_FOUND: "Not Found",
    ErrorKind.INVALID_ARGUMENT: "Bad Request",
    ErrorKind.LOCKED: "Locked",
    ErrorKind.NOT_ALLOWED: "Forbidden",
    ErrorKind.NEED_LOGIN: "Unauthorized",
    ErrorKind.WIKI_CHANGED: "Bad Request",
}


class WikiError(Exception):
    """Base error carrying an :class:`ErrorKind` and a message."""

    kind: ErrorKind = ErrorKind.INVALID_ARGUMENT

    def __init__(self, message: str, kind: ErrorKind | None = None) -> None:
        if kind is not None:
            self.kind = kind
        self.message = message
        super().__init__(message)

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    def to_dict(self) -> dict:
        return {
            "code": self.kind.value,
            "error": self.kind.reason,
            "message": self.message,
            "statusCode": self.status_code,
        }


class NotFoundError(WikiError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, resource: str) -> None:
        self.resource = resource
        super().__init__(f"{resource} not found")


class InvalidArgumentError(WikiError):
    kind = ErrorKind.INVALID_ARGUMENT


class LockedError(WikiError):
    kind = ErrorKind.LOCKED

    def __init__(self, message: str = "you are not allowed to edit a locked item") -> None:
        super().__init__(message)


class NotAllowedError(WikiError):
    kind = ErrorKind.NOT_ALLOWED

    def __init__(self, action: str) -> None:
        self.action = action
        super().__init__(f"you don't have permission to {action}")


class NeedLoginError(WikiError):
    kind = ErrorKind.NEED_LOGIN

    def __init__(self, action: str) -> None:
        self.action = action
        super().__init__(f"you need to login before {action}")


class WikiChangedError(WikiError):
    """The stored wiki no longer matches what the editor started from."""

    kind = ErrorKind.WIKI_CHANGED

    def __init__(self, diff: str) -> None:
        self.diff = diff
        super().__init__(f"expected data doesn't match\n{diff}")
