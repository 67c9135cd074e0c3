"""Errors raised by the repositories."""

from __future__ import annotations


class StorageError(Exception):
    """Base class for storage-layer exceptions."""


class EntityDoesNotExistError(StorageError):
    """Raised when an update targets a record that is not stored."""


class EntityAlreadyExistsError(StorageError):
    """Raised when a create would break a uniqueness rule."""


class InvalidParametersError(StorageError):
    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("\n".join(self.errors))
