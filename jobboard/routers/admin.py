import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from jobboard.core.identity import Identity
from jobboard.database import get_db
from jobboard.dependencies import get_current_admin
from jobboard.repos.admin_repo import get_stats
from jobboard.schemas.application import application_to_response
from jobboard.schemas.job import JobModeration, job_to_response
from jobboard.schemas.user import RoleUpdate, user_to_admin_response
from jobboard.services import application_service, job_service, user_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/admin", tags=["admin"])


def _page_params(page: int, limit: int | None, **extra) -> dict:
    params = {"page": page, **extra}
    if limit is not None:
        params["limit"] = limit
    return params


@router.get("/stats")
def get_admin_stats(
    db: Session = Depends(get_db),
    admin: Identity = Depends(get_current_admin),
):
    """Return dashboard stats. Admin only."""
    try:
        return get_stats(db)
    except Exception as e:
        logger.exception("Admin stats failed for admin=%s: %s", admin.user_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to load admin stats") from e


@router.get("/users")
def list_users(
    search: str | None = None,
    page: int = 1,
    limit: int | None = None,
    db: Session = Depends(get_db),
    admin: Identity = Depends(get_current_admin),
):
    """List users with optional email search and pagination. Admin only."""
    users, pagination = user_service.list_users(db, admin, search=search, params=_page_params(page, limit))
    return {"users": [user_to_admin_response(u) for u in users], "pagination": pagination.model_dump()}


@router.patch("/users/{user_id}/role")
def update_user_role(
    user_id: str,
    body: RoleUpdate,
    db: Session = Depends(get_db),
    admin: Identity = Depends(get_current_admin),
):
    user = user_service.update_user_role(db, admin, user_id, body)
    return {"message": "User role updated", "user": user_to_admin_response(user)}


@router.delete("/users/{user_id}")
def delete_user(
    user_id: str,
    db: Session = Depends(get_db),
    admin: Identity = Depends(get_current_admin),
):
    user_service.delete_user(db, admin, user_id)
    return {"message": "User deleted"}


@router.get("/jobs")
def list_all_jobs(
    page: int = 1,
    limit: int | None = None,
    db: Session = Depends(get_db),
    admin: Identity = Depends(get_current_admin),
):
    jobs, pagination = job_service.list_all_jobs(db, admin, _page_params(page, limit))
    return {"jobs": [job_to_response(j) for j in jobs], "pagination": pagination.model_dump()}


@router.patch("/jobs/{job_id}/moderate")
def moderate_job(
    job_id: str,
    body: JobModeration,
    db: Session = Depends(get_db),
    admin: Identity = Depends(get_current_admin),
):
    job = job_service.moderate_job(db, admin, job_id, body.is_active)
    return {"message": "Job moderated", "job": job_to_response(job)}


@router.delete("/jobs/{job_id}")
def delete_job(
    job_id: str,
    db: Session = Depends(get_db),
    admin: Identity = Depends(get_current_admin),
):
    """Remove a job. Refused while the job still has applications."""
    result = job_service.delete_job(db, admin, job_id)
    return {"message": "Job deleted", **result}


@router.get("/applications")
def list_all_applications(
    status_filter: str | None = Query(default=None, alias="status"),
    job_id: str | None = None,
    page: int = 1,
    limit: int | None = None,
    db: Session = Depends(get_db),
    admin: Identity = Depends(get_current_admin),
):
    applications, pagination = application_service.list_all_applications(
        db, admin, _page_params(page, limit, status=status_filter, job_id=job_id)
    )
    return {
        "applications": [application_to_response(a, include_applicant=True) for a in applications],
        "pagination": pagination.model_dump(),
    }
