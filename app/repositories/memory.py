from __future__ import annotations

import threading

from app.repositories.exceptions import PersistenceError, StudentNotFoundError
from app.schemas.students import Student


class InMemoryStudentRepository:
    """Dict-backed repository keeping insertion order.

    Passport numbers are unique, like the ``students`` table, so a duplicate
    raises PersistenceError.
    """

    def __init__(self, students: list[Student] | None = None):
        self._lock = threading.Lock()
        self._rows: dict[int, Student] = {}
        self._next_id = 1
        for student in students or []:
            self.save(student)

    def find_all(self) -> list[Student]:
        with self._lock:
            return [s.model_copy() for s in self._rows.values()]

    def find_by_id(self, student_id: int) -> Student | None:
        with self._lock:
            row = self._rows.get(student_id)
            return row.model_copy() if row else None

    def save(self, student: Student) -> Student:
        with self._lock:
            for other in self._rows.values():
                if (
                    other.passport_number == student.passport_number
                    and other.id != student.id
                ):
                    raise PersistenceError("passport number already registered")

            student_id = student.id
            if student_id is None:
                student_id = self._next_id
            self._next_id = max(self._next_id, student_id + 1)

            saved = student.model_copy(update={"id": student_id})
            self._rows[student_id] = saved
            return saved.model_copy()

    def delete_by_id(self, student_id: int) -> None:
        with self._lock:
            if student_id not in self._rows:
                raise StudentNotFoundError(student_id)
            del self._rows[student_id]
