from pydantic import BaseModel, Field

from jobboard.core.enums import ApplicationStatus
from jobboard.schemas.common import PageParams, iso


class ApplicationCreate(BaseModel):
    job_id: str = Field(min_length=1)
    cover_letter: str | None = Field(default=None, max_length=2000)
    # Opaque file references (URLs) produced by the upload service.
    resume: str | None = None
    portfolio: str | None = None

    class Config:
        extra = "forbid"


class ApplicationStatusUpdate(BaseModel):
    status: ApplicationStatus


class ApplicationListParams(PageParams):
    status: ApplicationStatus | None = None
    job_id: str | None = None


def application_to_response(application, include_job: bool = True, include_applicant: bool = False) -> dict:
    out = {
        "id": application.id,
        "job_id": application.job_id,
        "applicant_id": application.applicant_id,
        "status": application.status,
        "cover_letter": application.cover_letter,
        "resume": application.resume,
        "portfolio": application.portfolio,
        "applied_at": iso(application.applied_at),
        "updated_at": iso(application.updated_at),
    }
    job = application.job if include_job else None
    if job is not None:
        out["job"] = {
            "id": job.id,
            "title": job.title,
            "company_name": job.company_name,
            "location": job.location,
            "type": job.type,
            "experience": job.experience,
            "is_remote": job.is_remote,
        }
    applicant = application.applicant if include_applicant else None
    if applicant is not None:
        out["applicant"] = {
            "id": applicant.id,
            "first_name": applicant.first_name,
            "last_name": applicant.last_name,
            "email": applicant.email,
            "avatar": applicant.avatar,
            "skills": list(applicant.skills or []),
            "location": applicant.location,
        }
    return out
