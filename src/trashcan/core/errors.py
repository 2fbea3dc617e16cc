"""Errors raised by trash operations."""

from __future__ import annotations


class TrashError(Exception):
    """Base class for all trash errors."""


class NotFoundError(TrashError):
    """Raised when an origin path, trashed item or record does not exist."""


class RecursiveRequiredError(TrashError):
    """Raised when a directory is trashed without the recursive flag."""


class DestinationExistsError(TrashError):
    """Raised when a restore target is occupied and overwrite was not requested."""


class TrashIOError(TrashError):
    """Raised when an underlying filesystem or record write operation fails."""


class MalformedRecordError(TrashError):
    """Raised when a .trashinfo record cannot be parsed."""


class EmptyTrashError(TrashIOError):
    """Raised when emptying the trash fails partway.

    ``removed`` holds the names removed from the content store before the
    failure. They are not restored.
    """

    def __init__(self, message: str, removed: list[str]) -> None:
        super().__init__(message)
        self.removed = removed
