import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from jobboard.core.identity import Identity
from jobboard.database import get_db
from jobboard.dependencies import get_identity
from jobboard.schemas.application import ApplicationCreate, ApplicationStatusUpdate, application_to_response
from jobboard.services import application_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/applications", tags=["applications"])


def _list_params(status_filter: str | None, page: int, limit: int | None, job_id: str | None = None) -> dict:
    params = {"status": status_filter, "page": page, "job_id": job_id}
    if limit is not None:
        params["limit"] = limit
    return params


@router.post("", status_code=status.HTTP_201_CREATED)
def apply_for_job(
    body: ApplicationCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_identity),
):
    application = application_service.apply(db, identity, body)
    return {"message": "Application submitted successfully", "application": application_to_response(application)}


@router.get("/my")
def list_my_applications(
    status_filter: str | None = Query(default=None, alias="status"),
    page: int = 1,
    limit: int | None = None,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_identity),
):
    applications, pagination = application_service.list_my_applications(
        db, identity, _list_params(status_filter, page, limit)
    )
    return {
        "applications": [application_to_response(a) for a in applications],
        "pagination": pagination.model_dump(),
    }


@router.get("/employer")
def list_employer_applications(
    job_id: str | None = None,
    status_filter: str | None = Query(default=None, alias="status"),
    page: int = 1,
    limit: int | None = None,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_identity),
):
    """Applications received across the caller's jobs; job_id narrows to one of them."""
    applications, pagination = application_service.list_employer_applications(
        db, identity, _list_params(status_filter, page, limit, job_id)
    )
    return {
        "applications": [application_to_response(a, include_applicant=True) for a in applications],
        "pagination": pagination.model_dump(),
    }


@router.get("/{application_id}")
def get_application(
    application_id: str,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_identity),
):
    application = application_service.get_application(db, identity, application_id)
    return {"application": application_to_response(application, include_applicant=True)}


@router.patch("/{application_id}/status")
def update_application_status(
    application_id: str,
    body: ApplicationStatusUpdate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_identity),
):
    application = application_service.update_status(db, identity, application_id, body.status)
    return {
        "message": "Application status updated successfully",
        "application": application_to_response(application, include_applicant=True),
    }


@router.patch("/{application_id}/withdraw")
def withdraw_application(
    application_id: str,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_identity),
):
    application = application_service.withdraw(db, identity, application_id)
    return {"message": "Application withdrawn successfully", "application": application_to_response(application)}
