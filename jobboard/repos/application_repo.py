from datetime import datetime

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from jobboard.core.enums import ApplicationStatus
from jobboard.core.security import generate_id
from jobboard.models.application import Application
from jobboard.models.job import Job


def get_by_id(db: Session, application_id: str) -> Application | None:
    return (
        db.query(Application)
        .options(joinedload(Application.job))
        .filter(Application.id == application_id)
        .first()
    )


def get_existing(db: Session, job_id: str, applicant_id: str) -> Application | None:
    return (
        db.query(Application)
        .filter(
            Application.job_id == job_id,
            Application.applicant_id == applicant_id,
        )
        .first()
    )


def create(
    db: Session,
    job_id: str,
    applicant_id: str,
    applied_at: datetime,
    cover_letter: str | None = None,
    resume: str | None = None,
    portfolio: str | None = None,
) -> Application:
    """Insert a PENDING application. The unique (job, applicant) constraint may raise IntegrityError."""
    application = Application(
        id=generate_id(),
        job_id=job_id,
        applicant_id=applicant_id,
        status=ApplicationStatus.PENDING.value,
        cover_letter=cover_letter,
        resume=resume,
        portfolio=portfolio,
        applied_at=applied_at,
        updated_at=applied_at,
    )
    db.add(application)
    db.commit()
    db.refresh(application)
    return application


def reopen(
    db: Session,
    application: Application,
    applied_at: datetime,
    cover_letter: str | None = None,
    resume: str | None = None,
    portfolio: str | None = None,
) -> Application:
    application.status = ApplicationStatus.PENDING.value
    application.cover_letter = cover_letter
    application.resume = resume
    application.portfolio = portfolio
    application.applied_at = applied_at
    application.updated_at = applied_at
    db.commit()
    db.refresh(application)
    return application


def set_status(db: Session, application: Application, status: ApplicationStatus, updated_at: datetime) -> Application:
    application.status = ApplicationStatus(status).value
    application.updated_at = updated_at
    db.commit()
    db.refresh(application)
    return application


def get_paginated(
    db: Session,
    filters: list | None = None,
    limit: int = 10,
    offset: int = 0,
) -> tuple[list[Application], int]:
    """Applications matching every filter clause, most recent first. Returns (items, total)."""
    q = db.query(Application)
    if filters:
        q = q.filter(*filters)
    total = q.count()
    if offset >= total:
        return [], total
    items = (
        q.options(joinedload(Application.job), joinedload(Application.applicant))
        .order_by(Application.applied_at.desc(), Application.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )
    return items, total


def count_by_status_for_applicant(db: Session, applicant_id: str) -> dict[str, int]:
    rows = (
        db.query(Application.status, func.count(Application.id))
        .filter(Application.applicant_id == applicant_id)
        .group_by(Application.status)
        .all()
    )
    return {status: count for status, count in rows}


def count_received_by_employer(db: Session, employer_id: str) -> int:
    return (
        db.query(func.count(Application.id))
        .join(Job, Job.id == Application.job_id)
        .filter(Job.posted_by_id == employer_id)
        .scalar()
        or 0
    )
