from app.repositories.exceptions import (
    EmptyResultError,
    PersistenceError,
    RepositoryError,
    StudentNotFoundError,
)
from app.repositories.memory import InMemoryStudentRepository
from app.repositories.students import SqlAlchemyStudentRepository, StudentRepository

__all__ = [
    "EmptyResultError",
    "InMemoryStudentRepository",
    "PersistenceError",
    "RepositoryError",
    "SqlAlchemyStudentRepository",
    "StudentNotFoundError",
    "StudentRepository",
]
