from typing import Annotated, Any

from pydantic import BaseModel, Field, field_validator, model_validator

from jobboard.core.enums import Currency, ExperienceLevel, JobType
from jobboard.schemas.common import PageParams, iso

Requirement = Annotated[str, Field(max_length=200)]
Skill = Annotated[str, Field(min_length=1, max_length=50)]
Benefit = Annotated[str, Field(max_length=100)]


class SalaryRange(BaseModel):
    min: float = Field(ge=0)
    max: float = Field(ge=0)
    currency: Currency = Currency.USD

    @model_validator(mode="after")
    def min_not_above_max(self):
        if self.min > self.max:
            raise ValueError("salary.min must be less than or equal to salary.max")
        return self


class JobCreate(BaseModel):
    title: str = Field(min_length=5, max_length=100)
    description: str = Field(min_length=20, max_length=2000)
    requirements: list[Requirement] = Field(min_length=1, max_length=20)
    responsibilities: list[Requirement] = Field(min_length=1, max_length=20)
    salary: SalaryRange
    location: str = Field(min_length=1, max_length=100)
    type: JobType
    experience: ExperienceLevel
    skills: list[Skill] = Field(min_length=1, max_length=20)
    benefits: list[Benefit] = Field(default_factory=list, max_length=20)
    company_name: str = Field(min_length=2, max_length=100)
    company_logo: str | None = None
    is_remote: bool = False
    is_active: bool = True

    class Config:
        extra = "forbid"


class JobUpdate(BaseModel):
    """Partial update; omitted or null fields are left unchanged."""

    title: str | None = Field(default=None, min_length=5, max_length=100)
    description: str | None = Field(default=None, min_length=20, max_length=2000)
    requirements: list[Requirement] | None = Field(default=None, min_length=1, max_length=20)
    responsibilities: list[Requirement] | None = Field(default=None, min_length=1, max_length=20)
    salary: SalaryRange | None = None
    location: str | None = Field(default=None, min_length=1, max_length=100)
    type: JobType | None = None
    experience: ExperienceLevel | None = None
    skills: list[Skill] | None = Field(default=None, min_length=1, max_length=20)
    benefits: list[Benefit] | None = Field(default=None, max_length=20)
    company_name: str | None = Field(default=None, min_length=2, max_length=100)
    company_logo: str | None = None
    is_remote: bool | None = None
    is_active: bool | None = None

    class Config:
        extra = "forbid"


class JobSearchParams(PageParams):
    query: str | None = Field(default=None, max_length=100)
    location: str | None = Field(default=None, max_length=100)
    type: JobType | None = None
    experience: ExperienceLevel | None = None
    skills: list[Skill] | None = None
    is_remote: bool | None = None
    # Accepted for client compatibility; never used to filter.
    min_salary: Any = None
    max_salary: Any = None

    @field_validator("query", "location", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v.strip() if isinstance(v, str) else v

    @field_validator("skills", mode="before")
    @classmethod
    def split_skills(cls, v):
        """Accept ?skills=a&skills=b as well as ?skills=a,b."""
        if v is None:
            return None
        raw = [v] if isinstance(v, str) else list(v)
        out = [part.strip() for item in raw for part in str(item).split(",") if part.strip()]
        return out or None


class JobModeration(BaseModel):
    is_active: bool


def job_to_response(job, include_applications: bool = False) -> dict:
    out = {
        "id": job.id,
        "title": job.title,
        "description": job.description,
        "requirements": list(job.requirements or []),
        "responsibilities": list(job.responsibilities or []),
        "benefits": list(job.benefits or []),
        "salary": job.salary,
        "location": job.location,
        "type": job.type,
        "experience": job.experience,
        "skills": list(job.skills),
        "company_name": job.company_name,
        "company_logo": job.company_logo,
        "is_remote": job.is_remote,
        "is_active": job.is_active,
        "posted_by_id": job.posted_by_id,
        "created_at": iso(job.created_at),
        "updated_at": iso(job.updated_at),
    }
    if include_applications:
        out["applications"] = [
            {
                "id": a.id,
                "status": a.status,
                "applicant_id": a.applicant_id,
                "applied_at": iso(a.applied_at),
            }
            for a in job.applications
        ]
    return out
