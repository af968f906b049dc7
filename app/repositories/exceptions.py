"""Faults raised by student repositories.

The request handler catches these explicitly and turns them into HTTP
responses; nothing here knows about status codes.
"""

from __future__ import annotations


class RepositoryError(Exception):
    """Base class for repository-related errors."""


class StudentNotFoundError(RepositoryError):
    """Raised when no student exists for the given id."""

    def __init__(self, student_id: int):
        super().__init__(f"student {student_id} not found")
        self.student_id = student_id


class EmptyResultError(RepositoryError):
    """Raised when the backing store signals there is no data to read."""


class PersistenceError(RepositoryError):
    """Raised when a write fails in the store (constraint, flush or commit)."""


__all__ = [
    "RepositoryError",
    "StudentNotFoundError",
    "EmptyResultError",
    "PersistenceError",
]
