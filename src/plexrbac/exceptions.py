"""Domain exceptions raised by repositories and services.

Every DomainError carries a ``kind`` tag; the exception handler in main.py
dispatches on it to pick the status code and the standard error envelope:
{"error": {"code": "...", "message": "..."}}.

Each instance records a best-effort ``stack`` through the capturer installed in
plexrbac.tracing. ``name``, ``message``, ``stack`` and ``kind`` are read-only.
"""

from enum import StrEnum
from typing import ClassVar

from plexrbac.tracing import get_trace_capturer


class ErrorKind(StrEnum):
    """Tag identifying what failed. The value doubles as the error's ``name``."""

    DOMAIN = "DomainError"
    NOT_FOUND = "NotFoundError"
    CONFLICT = "ConflictError"
    PERSISTENCE = "PersistenceError"


DEFAULT_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.DOMAIN: "domain rule violated",
    ErrorKind.NOT_FOUND: "entity not found",
    ErrorKind.CONFLICT: "operation conflicts with existing state",
    ErrorKind.PERSISTENCE: "persistence operation failed",
}


class DomainError(Exception):
    """Base class for all domain exceptions."""

    _kind: ClassVar[ErrorKind] = ErrorKind.DOMAIN

    def __init__(self, message: object) -> None:
        # Non-strings (e.g. a caught driver exception) are stringified; an empty
        # message takes the kind's default so ``message`` is never blank.
        self._message = str(message) if message else DEFAULT_MESSAGES[self._kind]
        self._stack = self._capture_stack()
        super().__init__(self._message)

    def _capture_stack(self) -> str | None:
        try:
            return get_trace_capturer().capture(owner=self)
        except Exception:
            # Construction never fails; a broken capturer just means no trace.
            return None

    @property
    def kind(self) -> ErrorKind:
        return self._kind

    @property
    def name(self) -> str:
        return self._kind.value

    @property
    def message(self) -> str:
        return self._message

    @property
    def stack(self) -> str | None:
        return self._stack

    def __repr__(self) -> str:
        return f"{self.name}({self._message!r})"


class NotFoundError(DomainError):
    """Raised when a requested entity does not exist."""

    _kind = ErrorKind.NOT_FOUND

    def __init__(self, entity: str, identifier: object) -> None:
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} with id {identifier} not found")


class ConflictError(DomainError):
    """Raised when an operation conflicts with existing state (e.g. duplicate)."""

    _kind = ErrorKind.CONFLICT


class PersistenceError(DomainError):
    """Raised when a database operation fails."""

    _kind = ErrorKind.PERSISTENCE
