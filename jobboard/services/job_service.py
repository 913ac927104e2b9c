"""
Job lifecycle: create, read, update, activation toggle and delete of job postings.
Every mutation is authorized by jobboard.core.policy before the store is touched.
"""

import logging
from typing import Any, Mapping

from sqlalchemy.orm import Session

from jobboard.core.enums import Role
from jobboard.core.errors import Conflict, NotFound
from jobboard.core.identity import Identity
from jobboard.core.policy import can_administer, can_create_job, can_mutate_job, enforce, has_role
from jobboard.models.job import Job
from jobboard.repos import job_repo
from jobboard.schemas.common import PageParams, Pagination, parse_model
from jobboard.schemas.job import JobCreate, JobUpdate
from jobboard.services.pagination import paginate

logger = logging.getLogger(__name__)


def _load_job(db: Session, job_id: str) -> Job:
    job = job_repo.get_by_id(db, job_id)
    if not job:
        raise NotFound("Job not found")
    return job


def create_job(db: Session, identity: Identity, data: JobCreate | Mapping[str, Any]) -> Job:
    enforce(can_create_job(identity), "Only employers can post jobs", identity)
    form = parse_model(JobCreate, data)
    job = job_repo.create(db, identity.user_id, form.model_dump())
    logger.info("Job created: job=%s employer=%s", job.id, identity.user_id)
    return job


def get_job(db: Session, job_id: str) -> Job:
    return _load_job(db, job_id)


def update_job(db: Session, identity: Identity, job_id: str, patch: JobUpdate | Mapping[str, Any]) -> Job:
    job = _load_job(db, job_id)
    enforce(can_mutate_job(identity, job), "You can only update jobs that you posted", identity)
    changes = parse_model(JobUpdate, patch).model_dump(exclude_none=True)
    job = job_repo.update(db, job, changes)
    logger.info("Job updated: job=%s by=%s fields=%s", job.id, identity.user_id, sorted(changes))
    return job


def toggle_job_active(db: Session, identity: Identity, job_id: str) -> Job:
    job = _load_job(db, job_id)
    enforce(can_mutate_job(identity, job), "You can only modify jobs that you posted", identity)
    job = job_repo.set_active(db, job, not job.is_active)
    logger.info("Job %s: job=%s by=%s", "activated" if job.is_active else "deactivated", job.id, identity.user_id)
    return job


def delete_job(db: Session, identity: Identity, job_id: str) -> dict:
    """
    The posting employer's delete takes the job's applications with it. An admin
    deleting someone else's job is refused while applications exist.
    """
    job = _load_job(db, job_id)
    enforce(can_mutate_job(identity, job), "You can only delete jobs that you posted", identity)
    if job.posted_by_id != identity.user_id:
        pending = job_repo.count_applications(db, job.id)
        if pending:
            raise Conflict("Cannot delete job with existing applications", reason="HAS_APPLICATIONS")
    removed = job_repo.delete(db, job)
    logger.info("Job deleted: job=%s by=%s applications_removed=%d", job_id, identity.user_id, removed)
    return {"deleted": True, "applications_removed": removed}


def moderate_job(db: Session, identity: Identity, job_id: str, is_active: bool) -> Job:
    enforce(can_administer(identity), "Admin access required", identity)
    job = _load_job(db, job_id)
    job = job_repo.set_active(db, job, bool(is_active))
    logger.info("Job moderated: job=%s is_active=%s by admin=%s", job.id, job.is_active, identity.user_id)
    return job


def list_my_jobs(
    db: Session,
    identity: Identity,
    params: PageParams | Mapping[str, Any] | None = None,
) -> tuple[list[Job], Pagination]:
    """The caller's own postings, inactive ones included."""
    enforce(has_role(identity, Role.EMPLOYER), "Only employers have posted jobs", identity)
    params = parse_model(PageParams, params)
    filters = [Job.posted_by_id == identity.user_id]
    return paginate(
        lambda limit, offset: job_repo.get_paginated(db, filters, limit=limit, offset=offset),
        params,
    )


def list_all_jobs(
    db: Session,
    identity: Identity,
    params: PageParams | Mapping[str, Any] | None = None,
) -> tuple[list[Job], Pagination]:
    enforce(can_administer(identity), "Admin access required", identity)
    params = parse_model(PageParams, params)
    return paginate(
        lambda limit, offset: job_repo.get_paginated(db, None, limit=limit, offset=offset),
        params,
    )
