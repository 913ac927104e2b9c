import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from jobboard.core.security import generate_id
from jobboard.models.application import Application
from jobboard.models.job import Job

logger = logging.getLogger(__name__)

# Columns a create/update payload may set directly (salary and skills are handled separately).
JOB_FIELDS = (
    "title",
    "description",
    "requirements",
    "responsibilities",
    "benefits",
    "location",
    "type",
    "experience",
    "company_name",
    "company_logo",
    "is_remote",
    "is_active",
)


def _apply_fields(job: Job, fields: dict) -> None:
    for key in JOB_FIELDS:
        if fields.get(key) is not None:
            value = fields[key]
            setattr(job, key, getattr(value, "value", value))
    salary = fields.get("salary")
    if salary is not None:
        job.salary_min = salary["min"]
        job.salary_max = salary["max"]
        job.salary_currency = getattr(salary["currency"], "value", salary["currency"])
    if fields.get("skills") is not None:
        job.skills = list(fields["skills"])


def get_by_id(db: Session, job_id: str) -> Job | None:
    return db.query(Job).filter(Job.id == job_id).first()


def create(db: Session, posted_by_id: str, fields: dict) -> Job:
    job = Job(id=generate_id(), posted_by_id=posted_by_id, is_active=True, is_remote=False)
    _apply_fields(job, fields)
    db.add(job)
    db.commit()
    db.refresh(job)
    return job


def update(db: Session, job: Job, fields: dict) -> Job:
    _apply_fields(job, fields)
    db.commit()
    db.refresh(job)
    return job


def set_active(db: Session, job: Job, is_active: bool) -> Job:
    job.is_active = is_active
    db.commit()
    db.refresh(job)
    return job


def count_applications(db: Session, job_id: str) -> int:
    return db.query(func.count(Application.id)).filter(Application.job_id == job_id).scalar() or 0


def delete(db: Session, job: Job) -> int:
    """Delete a job and its applications. Returns how many applications went with it."""
    # Remove dependents explicitly so this holds even where the DB lacks FK cascades.
    removed = (
        db.query(Application)
        .filter(Application.job_id == job.id)
        .delete(synchronize_session=False)
    )
    # The rows are gone; keep the ORM cascade from deleting them a second time.
    db.expire(job, ["applications"])
    db.delete(job)
    db.commit()
    return removed


def get_paginated(
    db: Session,
    filters: list | None = None,
    limit: int = 10,
    offset: int = 0,
) -> tuple[list[Job], int]:
    """Jobs matching every filter clause, newest first. Returns (items, total)."""
    q = db.query(Job)
    if filters:
        q = q.filter(*filters)
    total = q.count()
    if offset >= total:
        return [], total
    items = (
        q.order_by(Job.created_at.desc(), Job.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )
    return items, total


def count_by_owner(db: Session, owner_id: str, active_only: bool = False) -> int:
    q = db.query(func.count(Job.id)).filter(Job.posted_by_id == owner_id)
    if active_only:
        q = q.filter(Job.is_active.is_(True))
    return q.scalar() or 0
