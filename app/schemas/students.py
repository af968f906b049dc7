from pydantic import BaseModel, ConfigDict, Field, constr

from app.models.student import NAME_MAX_LENGTH, PASSPORT_NUMBER_MAX_LENGTH


class StudentIn(BaseModel):
    """Body of POST/PUT /student. An ``id`` sent in the body is ignored."""

    model_config = ConfigDict(populate_by_name=True)

    name: constr(strip_whitespace=True, min_length=1, max_length=NAME_MAX_LENGTH)
    passport_number: constr(
        strip_whitespace=True, min_length=1, max_length=PASSPORT_NUMBER_MAX_LENGTH
    ) = Field(alias="passportNumber")


class Student(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int | None = None
    name: str
    passport_number: str = Field(alias="passportNumber")

    def to_json(self) -> dict:
        # id is omitted until the repository assigns one
        return self.model_dump(by_alias=True, exclude_none=True)
