"""
Application lifecycle: applying, employer status changes, withdrawal and the
application listings for developers, employers and admins.

A developer holds at most one application per job. Status moves follow
jobboard.services.application_states; who may attempt a move is decided by
jobboard.core.policy. Concurrent status updates are last-write-wins.
"""

import logging
from typing import Any, Mapping

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobboard.config import settings
from jobboard.core.enums import ApplicationStatus, Role
from jobboard.core.errors import Conflict, NotFound
from jobboard.core.identity import Identity
from jobboard.core.policy import (
    DenyReason,
    can_administer,
    can_apply,
    can_mutate_application,
    can_view_application,
    can_view_job_applications,
    can_withdraw,
    enforce,
    has_role,
)
from jobboard.database import utcnow
from jobboard.models.application import Application
from jobboard.models.job import Job
from jobboard.repos import application_repo, job_repo
from jobboard.schemas.application import ApplicationCreate, ApplicationListParams, ApplicationStatusUpdate
from jobboard.schemas.common import Pagination, parse_model
from jobboard.services.application_states import Actor, check_transition
from jobboard.services.pagination import paginate

logger = logging.getLogger(__name__)

ALREADY_APPLIED_MESSAGE = "You have already applied for this job"

APPLY_DENIED = {
    DenyReason.NOT_AUTHENTICATED: "Authentication required",
    DenyReason.JOB_INACTIVE: "Cannot apply for inactive job",
    DenyReason.WRONG_ROLE: "Only developers can apply for jobs",
    DenyReason.ALREADY_APPLIED: ALREADY_APPLIED_MESSAGE,
}

WITHDRAW_DENIED = {
    DenyReason.NOT_AUTHENTICATED: "Authentication required",
    DenyReason.WRONG_ROLE: "Only developers can withdraw applications",
    DenyReason.NOT_OWNER: "You can only withdraw your own applications",
    DenyReason.TERMINAL_STATE: "Application has already been processed",
}


def _load_application(db: Session, application_id: str) -> Application:
    application = application_repo.get_by_id(db, application_id)
    if not application:
        raise NotFound("Application not found")
    return application


def _load_job(db: Session, job_id: str) -> Job:
    job = job_repo.get_by_id(db, job_id)
    if not job:
        raise NotFound("Job not found")
    return job


def apply(db: Session, identity: Identity, data: ApplicationCreate | Mapping[str, Any]) -> Application:
    form = parse_model(ApplicationCreate, data)
    job = _load_job(db, form.job_id)
    existing = application_repo.get_existing(db, job.id, identity.user_id) if identity else None
    enforce(
        can_apply(identity, job, existing, allow_reapply=settings.allow_reapply_after_withdrawal),
        APPLY_DENIED,
        identity,
    )
    now = utcnow()
    if existing is not None:
        # Only reachable when re-applying over a WITHDRAWN application is enabled.
        application = application_repo.reopen(
            db,
            existing,
            applied_at=now,
            cover_letter=form.cover_letter,
            resume=form.resume,
            portfolio=form.portfolio,
        )
        logger.info("Application reopened: application=%s job=%s applicant=%s", application.id, job.id, identity.user_id)
        return application
    try:
        application = application_repo.create(
            db,
            job_id=job.id,
            applicant_id=identity.user_id,
            applied_at=now,
            cover_letter=form.cover_letter,
            resume=form.resume,
            portfolio=form.portfolio,
        )
    except IntegrityError as e:
        # Lost a race with a concurrent apply for the same pair.
        db.rollback()
        logger.info("Duplicate application rejected by store: job=%s applicant=%s", job.id, identity.user_id)
        raise Conflict(ALREADY_APPLIED_MESSAGE, reason=DenyReason.ALREADY_APPLIED.value) from e
    logger.info("Application submitted: application=%s job=%s applicant=%s", application.id, job.id, identity.user_id)
    return application


def update_status(
    db: Session,
    identity: Identity,
    application_id: str,
    status: ApplicationStatus | str,
) -> Application:
    target = parse_model(ApplicationStatusUpdate, {"status": status}).status
    application = _load_application(db, application_id)
    job = application.job or _load_job(db, application.job_id)
    enforce(
        can_mutate_application(identity, application, job),
        {
            DenyReason.NOT_AUTHENTICATED: "Authentication required",
            DenyReason.WRONG_ROLE: "Only employers can update application status",
            DenyReason.NOT_OWNER: "You can only update applications for jobs you posted",
        },
        identity,
    )
    previous = application.status
    check_transition(previous, target, Actor.EMPLOYER)
    application = application_repo.set_status(db, application, target, updated_at=utcnow())
    logger.info(
        "Application status changed: application=%s %s -> %s by employer=%s",
        application.id,
        previous,
        application.status,
        identity.user_id,
    )
    return application


def withdraw(db: Session, identity: Identity, application_id: str) -> Application:
    application = _load_application(db, application_id)
    enforce(can_withdraw(identity, application), WITHDRAW_DENIED, identity)
    check_transition(application.status, ApplicationStatus.WITHDRAWN, Actor.APPLICANT)
    application = application_repo.set_status(db, application, ApplicationStatus.WITHDRAWN, updated_at=utcnow())
    logger.info("Application withdrawn: application=%s applicant=%s", application.id, identity.user_id)
    return application


def get_application(db: Session, identity: Identity, application_id: str) -> Application:
    application = _load_application(db, application_id)
    job = application.job or _load_job(db, application.job_id)
    enforce(
        can_view_application(identity, application, job),
        "You do not have permission to view this application",
        identity,
    )
    return application


def _status_filter(params: ApplicationListParams) -> list:
    if params.status is None:
        return []
    return [Application.status == params.status.value]


def _page(db: Session, filters: list, params: ApplicationListParams) -> tuple[list[Application], Pagination]:
    return paginate(
        lambda limit, offset: application_repo.get_paginated(db, filters, limit=limit, offset=offset),
        params,
    )


def list_my_applications(
    db: Session,
    identity: Identity,
    params: ApplicationListParams | Mapping[str, Any] | None = None,
) -> tuple[list[Application], Pagination]:
    enforce(has_role(identity, Role.DEVELOPER), "Only developers can view their applications", identity)
    params = parse_model(ApplicationListParams, params)
    filters = [Application.applicant_id == identity.user_id, *_status_filter(params)]
    return _page(db, filters, params)


def list_job_applications(
    db: Session,
    identity: Identity,
    job_id: str,
    params: ApplicationListParams | Mapping[str, Any] | None = None,
) -> tuple[list[Application], Pagination]:
    params = parse_model(ApplicationListParams, params)
    job = _load_job(db, job_id)
    enforce(
        can_view_job_applications(identity, job),
        "You can only view applications for jobs you posted",
        identity,
    )
    filters = [Application.job_id == job.id, *_status_filter(params)]
    return _page(db, filters, params)


def list_employer_applications(
    db: Session,
    identity: Identity,
    params: ApplicationListParams | Mapping[str, Any] | None = None,
) -> tuple[list[Application], Pagination]:
    """Applications received across the caller's jobs, optionally narrowed to one job."""
    enforce(has_role(identity, Role.EMPLOYER), "Only employers can view received applications", identity)
    params = parse_model(ApplicationListParams, params)
    if params.job_id:
        job = _load_job(db, params.job_id)
        enforce(
            can_view_job_applications(identity, job),
            "You can only view applications for jobs you posted",
            identity,
        )
        filters = [Application.job_id == job.id]
    else:
        filters = [Application.job.has(Job.posted_by_id == identity.user_id)]
    filters.extend(_status_filter(params))
    return _page(db, filters, params)


def list_all_applications(
    db: Session,
    identity: Identity,
    params: ApplicationListParams | Mapping[str, Any] | None = None,
) -> tuple[list[Application], Pagination]:
    enforce(can_administer(identity), "Admin access required", identity)
    params = parse_model(ApplicationListParams, params)
    filters = _status_filter(params)
    if params.job_id:
        filters.append(Application.job_id == params.job_id)
    return _page(db, filters, params)
