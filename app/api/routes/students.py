# app/api/routes/students.py
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Response, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from app.core.logging import get_logger
from app.deps import get_student_repository
from app.repositories import (
    EmptyResultError,
    PersistenceError,
    StudentNotFoundError,
    StudentRepository,
)
from app.schemas.students import Student, StudentIn

COLLECTION_PATH = "/student"


class HalJSONResponse(JSONResponse):
    media_type = "application/hal+json"


def _validation_errors(exc: ValidationError) -> list[dict]:
    return [
        {"field": ".".join(str(loc) for loc in e["loc"]), "message": e["msg"]}
        for e in exc.errors()
    ]


class StudentHandler:
    """Maps each student endpoint onto the repository and its faults onto HTTP.

    Holds nothing but the repository, so a new instance serves each request.
    """

    def __init__(self, repository: StudentRepository):
        self.repository = repository
        self.log = get_logger()

    def list_students(self) -> list[dict]:
        try:
            students = self.repository.find_all()
        except EmptyResultError as exc:
            self.log.info("student.list.empty_result")
            raise HTTPException(status.HTTP_404_NOT_FOUND, "No students found") from exc
        return [s.to_json() for s in students]

    def get_student(self, student_id: int) -> HalJSONResponse:
        student = self.repository.find_by_id(student_id)
        if student is None:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "Student not found")

        body = student.to_json()
        body["_links"] = {
            "self": {"href": f"{COLLECTION_PATH}/{student_id}"},
            "all-students": {"href": COLLECTION_PATH},
        }
        return HalJSONResponse(body)

    def create_student(self, payload: Any) -> JSONResponse:
        data = self._validate(payload)
        try:
            saved = self.repository.save(
                Student(name=data.name, passport_number=data.passport_number)
            )
        except PersistenceError as exc:
            self.log.warning("student.create.failed")
            raise HTTPException(
                status.HTTP_400_BAD_REQUEST, "Student could not be saved"
            ) from exc

        self.log.info("student.created", student_id=saved.id)
        return JSONResponse(
            saved.to_json(),
            status_code=status.HTTP_201_CREATED,
            headers={"Location": f"{COLLECTION_PATH}/{saved.id}"},
        )

    def update_student(self, student_id: int, payload: Any) -> JSONResponse:
        # lookup first: a missing student is 404 whatever the body holds
        current = self.repository.find_by_id(student_id)
        if current is None:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "Student not found")

        data = self._validate(payload)
        merged = current.model_copy(
            update={
                "id": student_id,
                "name": data.name,
                "passport_number": data.passport_number,
            }
        )
        try:
            saved = self.repository.save(merged)
        except PersistenceError as exc:
            self.log.warning("student.update.failed", student_id=student_id)
            raise HTTPException(
                status.HTTP_400_BAD_REQUEST, "Student could not be saved"
            ) from exc

        self.log.info("student.updated", student_id=student_id)
        return JSONResponse(saved.to_json())

    def delete_student(self, student_id: int) -> Response:
        try:
            self.repository.delete_by_id(student_id)
        except (StudentNotFoundError, EmptyResultError) as exc:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "Student not found") from exc
        except PersistenceError as exc:
            self.log.warning("student.delete.failed", student_id=student_id)
            raise HTTPException(
                status.HTTP_400_BAD_REQUEST, "Student could not be deleted"
            ) from exc

        self.log.info("student.deleted", student_id=student_id)
        return Response(status_code=status.HTTP_200_OK)

    def _validate(self, payload: Any) -> StudentIn:
        try:
            return StudentIn.model_validate(payload)
        except ValidationError as exc:
            raise HTTPException(
                status.HTTP_400_BAD_REQUEST, _validation_errors(exc)
            ) from exc


def get_student_handler(
    repository: StudentRepository = Depends(get_student_repository),  # noqa: B008
) -> StudentHandler:
    return StudentHandler(repository)


def list_students(handler: StudentHandler = Depends(get_student_handler)):  # noqa: B008
    return handler.list_students()


def get_student(
    student_id: int,
    handler: StudentHandler = Depends(get_student_handler),  # noqa: B008
):
    return handler.get_student(student_id)


def create_student(
    payload: Any = Body(...),  # noqa: B008
    handler: StudentHandler = Depends(get_student_handler),  # noqa: B008
):
    return handler.create_student(payload)


def update_student(
    student_id: int,
    payload: Any = Body(...),  # noqa: B008
    handler: StudentHandler = Depends(get_student_handler),  # noqa: B008
):
    return handler.update_student(student_id, payload)


def delete_student(
    student_id: int,
    handler: StudentHandler = Depends(get_student_handler),  # noqa: B008
):
    return handler.delete_student(student_id)


# (method, path, endpoint, default status)
ROUTES = (
    ("GET", "", list_students, status.HTTP_200_OK),
    ("GET", "/{student_id}", get_student, status.HTTP_200_OK),
    ("POST", "", create_student, status.HTTP_201_CREATED),
    ("PUT", "/{student_id}", update_student, status.HTTP_200_OK),
    ("DELETE", "/{student_id}", delete_student, status.HTTP_200_OK),
)

router = APIRouter(prefix=COLLECTION_PATH, tags=["student"])
for method, path, endpoint, status_code in ROUTES:
    router.add_api_route(path, endpoint, methods=[method], status_code=status_code)
