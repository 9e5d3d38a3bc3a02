from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request
from pydantic import ValidationError
from pymongo.collection import Collection

from app.database import get_job_collection
from app.schemas.job import (
    DeleteSummary,
    InsertSummary,
    JobCreate,
    JobCreateResponse,
    JobDeleteResponse,
    JobPageResponse,
    JobResponse,
    JobUpdateResponse,
    UpdateSummary,
)
from app.services import job_service
from app.services.job_service import InvalidJobData, InvalidJobId, InvalidQuery

router = APIRouter(prefix="/job", tags=["jobs"])


@router.post("", response_model=JobCreateResponse, status_code=201)
async def create_job(
    payload: Any = Body(...),
    collection: Collection = Depends(get_job_collection),
):
    try:
        job = JobCreate.model_validate(payload)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail="Invalid job data") from exc

    result = job_service.create_job(collection, job)
    return JobCreateResponse(
        message="Job added successful",
        result=InsertSummary.from_result(result),
    )


@router.get("", response_model=JobPageResponse)
async def list_jobs(
    request: Request,
    search: str | None = None,
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1),
    sort: str | None = None,
    fields: str | None = None,
    collection: Collection = Depends(get_job_collection),
):
    try:
        query = job_service.build_list_filter(request.query_params.multi_items())
        order = job_service.build_sort(sort)
    except InvalidQuery as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    jobs, total = job_service.list_jobs(
        collection,
        query,
        job_service.build_projection(fields),
        sort=order,
        page=page,
        limit=limit,
    )
    return JobPageResponse(
        message="Jobs retrieved successful",
        count=len(jobs),
        total=total,
        page=page,
        limit=limit,
        result=jobs,
    )


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(job_id: str, collection: Collection = Depends(get_job_collection)):
    try:
        job = job_service.get_job(collection, job_id)
    except InvalidJobId as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    if job is None:
        raise HTTPException(status_code=404, detail="Job not found")
    return JobResponse(message="Job retrieved successful", result=job)


@router.patch("/{job_id}", response_model=JobUpdateResponse)
async def update_job(
    job_id: str,
    payload: dict[str, Any] = Body(...),
    collection: Collection = Depends(get_job_collection),
):
    try:
        result = job_service.update_job(collection, job_id, payload)
    except (InvalidJobId, InvalidJobData) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return JobUpdateResponse(message="Job update successful", result=UpdateSummary.from_result(result))


@router.delete("/{job_id}", response_model=JobDeleteResponse)
async def delete_job(job_id: str, collection: Collection = Depends(get_job_collection)):
    try:
        result = job_service.delete_job(collection, job_id)
    except InvalidJobId as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return JobDeleteResponse(message="Job delete successful", result=DeleteSummary.from_result(result))
