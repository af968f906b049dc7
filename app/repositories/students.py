"""Student repository contract and its SQLAlchemy implementation."""

from __future__ import annotations

from typing import Protocol

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.logging import get_logger
from app.models.student import Student as StudentModel
from app.repositories.exceptions import PersistenceError, StudentNotFoundError
from app.schemas.students import Student


class StudentRepository(Protocol):
    def find_all(self) -> list[Student]:
        """Every student in repository order. May raise EmptyResultError."""
        ...

    def find_by_id(self, student_id: int) -> Student | None:
        ...

    def save(self, student: Student) -> Student:
        """Insert when ``student.id`` is None, otherwise replace. May raise PersistenceError."""
        ...

    def delete_by_id(self, student_id: int) -> None:
        """May raise StudentNotFoundError or PersistenceError."""
        ...


# the students.id column is a signed 64-bit INTEGER
ID_MIN, ID_MAX = -(2**63), 2**63 - 1


def _storable_id(student_id: int) -> bool:
    return ID_MIN <= student_id <= ID_MAX


def _to_schema(row: StudentModel) -> Student:
    return Student(id=row.id, name=row.name, passport_number=row.passport_number)


class SqlAlchemyStudentRepository:
    def __init__(self, db: Session):
        self.db = db

    def find_all(self) -> list[Student]:
        rows = self.db.scalars(select(StudentModel).order_by(StudentModel.id.asc()))
        return [_to_schema(r) for r in rows]

    def find_by_id(self, student_id: int) -> Student | None:
        # the driver rejects ids the column cannot hold; no row can have one
        if not _storable_id(student_id):
            return None
        row = self.db.get(StudentModel, student_id)
        return _to_schema(row) if row else None

    def save(self, student: Student) -> Student:
        row = None
        if student.id is not None:
            if not _storable_id(student.id):
                raise PersistenceError("student id out of range")
            row = self.db.get(StudentModel, student.id)
        if row is None:
            row = StudentModel(id=student.id)
            self.db.add(row)
        row.name = student.name
        row.passport_number = student.passport_number

        self._commit()
        self.db.refresh(row)
        return _to_schema(row)

    def delete_by_id(self, student_id: int) -> None:
        row = self.db.get(StudentModel, student_id) if _storable_id(student_id) else None
        if row is None:
            raise StudentNotFoundError(student_id)
        self.db.delete(row)
        self._commit()

    def _commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            get_logger().warning("student.persistence_error", error=type(e).__name__)
            raise PersistenceError("could not persist student") from e
