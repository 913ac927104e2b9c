"""Admin-specific repository functions for stats."""

from sqlalchemy import func
from sqlalchemy.orm import Session

from jobboard.core.enums import Role
from jobboard.models.application import Application
from jobboard.models.job import Job
from jobboard.models.user import User


def get_stats(db: Session) -> dict:
    """Return admin dashboard stats."""
    user_count = db.query(func.count(User.id)).scalar() or 0
    job_count = db.query(func.count(Job.id)).scalar() or 0
    active_job_count = db.query(func.count(Job.id)).filter(Job.is_active.is_(True)).scalar() or 0
    application_count = db.query(func.count(Application.id)).scalar() or 0
    admin_count = db.query(func.count(User.id)).filter(User.role == Role.ADMIN.value).scalar() or 0
    return {
        "users": user_count,
        "jobs": job_count,
        "jobs_active": active_job_count,
        "applications": application_count,
        "admins": admin_count,
    }
