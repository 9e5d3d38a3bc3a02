from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException
from pymongo.collection import Collection

from app.database import get_job_collection
from app.dependencies import require_matching_email, require_token
from app.schemas.job import (
    DeleteSummary,
    JobDeleteResponse,
    JobListResponse,
    JobUpdateResponse,
    UpdateSummary,
)
from app.services import job_service
from app.services.job_service import InvalidJobData, InvalidJobId

router = APIRouter(prefix="/me/job", tags=["my jobs"])


def _ensure_owned(collection: Collection, job_id: str, matched: int):
    # Nothing matched the owner-scoped filter: either the job is gone, which is
    # reported as a zero count, or it belongs to someone else.
    if matched == 0 and job_service.job_exists(collection, job_id):
        raise HTTPException(status_code=403, detail="Forbidden access")


@router.get("", response_model=JobListResponse)
async def list_my_jobs(
    email: str | None = None,
    user: str = Depends(require_token),
    collection: Collection = Depends(get_job_collection),
):
    require_matching_email(email, user)
    jobs = job_service.list_owned_jobs(collection, email)
    return JobListResponse(message="Jobs retrieved successful", count=len(jobs), result=jobs)


@router.patch("/{job_id}", response_model=JobUpdateResponse)
async def update_my_job(
    job_id: str,
    payload: dict[str, Any] = Body(...),
    email: str | None = None,
    user: str = Depends(require_token),
    collection: Collection = Depends(get_job_collection),
):
    require_matching_email(email, user)
    try:
        result = job_service.update_job(collection, job_id, payload, owner=user)
    except (InvalidJobId, InvalidJobData) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    _ensure_owned(collection, job_id, result.matched_count)
    return JobUpdateResponse(message="Job update successful", result=UpdateSummary.from_result(result))


@router.delete("/{job_id}", response_model=JobDeleteResponse)
async def delete_my_job(
    job_id: str,
    email: str | None = None,
    user: str = Depends(require_token),
    collection: Collection = Depends(get_job_collection),
):
    require_matching_email(email, user)
    try:
        result = job_service.delete_job(collection, job_id, owner=user)
    except InvalidJobId as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    _ensure_owned(collection, job_id, result.deleted_count)
    return JobDeleteResponse(message="Job delete successful", result=DeleteSummary.from_result(result))
