from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field
from pymongo.results import DeleteResult, InsertOneResult, UpdateResult


class Company(BaseModel):
    name: str = Field(min_length=1)

    model_config = {"extra": "allow"}


class Poster(BaseModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=1)

    model_config = {"extra": "allow"}


class JobCreate(BaseModel):
    title: str = Field(min_length=1)
    type: str = Field(min_length=1)
    deadline: datetime
    # Zero is a valid salary; only absence is rejected.
    min_salary: int | float
    max_salary: int | float
    company: Company
    created_by: Poster

    model_config = {"extra": "allow"}


class ApplyRequest(BaseModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=1)


class InsertSummary(BaseModel):
    acknowledged: bool
    inserted_id: str

    @classmethod
    def from_result(cls, result: InsertOneResult) -> "InsertSummary":
        return cls(acknowledged=result.acknowledged, inserted_id=str(result.inserted_id))


class UpdateSummary(BaseModel):
    acknowledged: bool
    matched_count: int
    modified_count: int

    @classmethod
    def from_result(cls, result: UpdateResult) -> "UpdateSummary":
        return cls(
            acknowledged=result.acknowledged,
            matched_count=result.matched_count,
            modified_count=result.modified_count,
        )


class DeleteSummary(BaseModel):
    acknowledged: bool
    deleted_count: int

    @classmethod
    def from_result(cls, result: DeleteResult) -> "DeleteSummary":
        return cls(acknowledged=result.acknowledged, deleted_count=result.deleted_count)


class JobCreateResponse(BaseModel):
    success: bool = True
    message: str
    result: InsertSummary


class JobResponse(BaseModel):
    success: bool = True
    message: str
    result: dict[str, Any] | None


class JobUpdateResponse(BaseModel):
    success: bool = True
    message: str
    result: UpdateSummary


class JobDeleteResponse(BaseModel):
    success: bool = True
    message: str
    result: DeleteSummary


class JobListResponse(BaseModel):
    success: bool = True
    message: str
    count: int
    result: list[dict[str, Any]]


class JobPageResponse(JobListResponse):
    total: int
    page: int
    limit: int | None
