from fastapi import APIRouter, Depends, HTTPException
from pymongo.collection import Collection

from app.database import get_job_collection
from app.dependencies import require_matching_email, require_token
from app.schemas.job import ApplyRequest, JobListResponse, JobUpdateResponse, UpdateSummary
from app.services import job_service
from app.services.job_service import InvalidJobId

router = APIRouter(prefix="/applied-job", tags=["applications"])


@router.patch("/{job_id}", response_model=JobUpdateResponse)
async def apply_to_job(
    job_id: str,
    req: ApplyRequest,
    user: str = Depends(require_token),
    collection: Collection = Depends(get_job_collection),
):
    try:
        if req.email != user:
            # An existing application outranks the body/token mismatch.
            if job_service.has_applied(collection, job_id, user):
                raise HTTPException(status_code=409, detail="You have already applied to this job")
            require_matching_email(req.email, user)
        result = job_service.apply_to_job(collection, job_id, req.name, user)
    except InvalidJobId as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    if result.matched_count == 0:
        if not job_service.job_exists(collection, job_id):
            raise HTTPException(status_code=404, detail="Job not found")
        raise HTTPException(status_code=409, detail="You have already applied to this job")
    return JobUpdateResponse(message="Job update successful", result=UpdateSummary.from_result(result))


@router.get("", response_model=JobListResponse)
@router.get("/", response_model=JobListResponse, include_in_schema=False)
async def list_applied_jobs(
    email: str | None = None,
    user: str = Depends(require_token),
    collection: Collection = Depends(get_job_collection),
):
    require_matching_email(email, user)
    jobs = job_service.list_applied_jobs(collection, email)
    return JobListResponse(message="Jobs applied retrieved successful", count=len(jobs), result=jobs)
