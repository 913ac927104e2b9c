from jobboard.models.user import User
from jobboard.models.company import Company
from jobboard.models.job import Job, JobSkill
from jobboard.models.application import Application

__all__ = [
    "User",
    "Company",
    "Job",
    "JobSkill",
    "Application",
]
