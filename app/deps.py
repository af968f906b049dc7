from __future__ import annotations

from fastapi import Depends
from sqlalchemy.orm import Session

from app.core.settings import StorageBackend, settings
from app.db import get_db
from app.repositories import (
    InMemoryStudentRepository,
    SqlAlchemyStudentRepository,
    StudentRepository,
)

# lives as long as the process when STORAGE_BACKEND=memory
_memory_repository = InMemoryStudentRepository()


def get_student_repository(db: Session = Depends(get_db)) -> StudentRepository:  # noqa: B008
    if settings.STORAGE_BACKEND == StorageBackend.MEMORY:
        return _memory_repository
    return SqlAlchemyStudentRepository(db)
