import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from jobboard.core.identity import Identity
from jobboard.database import get_db
from jobboard.dependencies import get_identity
from jobboard.schemas.application import application_to_response
from jobboard.schemas.job import JobCreate, JobUpdate, job_to_response
from jobboard.services import application_service, job_service
from jobboard.services.job_search import search_jobs

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.get("")
def list_jobs(
    query: str | None = None,
    location: str | None = None,
    job_type: str | None = Query(default=None, alias="type"),
    experience: str | None = None,
    skills: list[str] | None = Query(default=None),
    is_remote: bool | None = None,
    min_salary: str | None = None,
    max_salary: str | None = None,
    page: int = 1,
    limit: int | None = None,
    db: Session = Depends(get_db),
):
    """Search active jobs. Every supplied filter must match; salary bounds are accepted but ignored."""
    params = {
        "query": query,
        "location": location,
        "type": job_type,
        "experience": experience,
        "skills": skills,
        "is_remote": is_remote,
        "min_salary": min_salary,
        "max_salary": max_salary,
        "page": page,
    }
    if limit is not None:
        params["limit"] = limit
    jobs, pagination = search_jobs(db, params)
    return {"jobs": [job_to_response(j) for j in jobs], "pagination": pagination.model_dump()}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_job(
    body: JobCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_identity),
):
    job = job_service.create_job(db, identity, body)
    return {"message": "Job created successfully", "job": job_to_response(job)}


@router.get("/my")
def list_my_jobs(
    page: int = 1,
    limit: int | None = None,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_identity),
):
    """Jobs posted by the caller, including deactivated ones."""
    params = {"page": page} if limit is None else {"page": page, "limit": limit}
    jobs, pagination = job_service.list_my_jobs(db, identity, params)
    return {
        "jobs": [job_to_response(j, include_applications=True) for j in jobs],
        "pagination": pagination.model_dump(),
    }


@router.get("/{job_id}")
def get_job(job_id: str, db: Session = Depends(get_db)):
    job = job_service.get_job(db, job_id)
    return {"job": job_to_response(job, include_applications=True)}


@router.put("/{job_id}")
def update_job(
    job_id: str,
    body: JobUpdate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_identity),
):
    job = job_service.update_job(db, identity, job_id, body)
    return {"message": "Job updated successfully", "job": job_to_response(job)}


@router.delete("/{job_id}")
def delete_job(
    job_id: str,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_identity),
):
    result = job_service.delete_job(db, identity, job_id)
    return {"message": "Job deleted successfully", **result}


@router.patch("/{job_id}/toggle")
def toggle_job(
    job_id: str,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_identity),
):
    job = job_service.toggle_job_active(db, identity, job_id)
    state = "activated" if job.is_active else "deactivated"
    return {"message": f"Job {state} successfully", "job": job_to_response(job)}


@router.get("/{job_id}/applications")
def list_job_applications(
    job_id: str,
    status_filter: str | None = Query(default=None, alias="status"),
    page: int = 1,
    limit: int | None = None,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_identity),
):
    """Applications for one of the caller's jobs."""
    params = {"status": status_filter, "page": page}
    if limit is not None:
        params["limit"] = limit
    applications, pagination = application_service.list_job_applications(db, identity, job_id, params)
    return {
        "applications": [application_to_response(a, include_job=False, include_applicant=True) for a in applications],
        "pagination": pagination.model_dump(),
    }
