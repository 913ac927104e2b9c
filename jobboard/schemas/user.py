from typing import Annotated

from pydantic import BaseModel, Field

from jobboard.core.enums import CompanySize, Role
from jobboard.schemas.common import iso


class UserProfileUpdate(BaseModel):
    first_name: str | None = Field(default=None, min_length=2, max_length=50)
    last_name: str | None = Field(default=None, min_length=2, max_length=50)
    bio: str | None = Field(default=None, max_length=500)
    location: str | None = Field(default=None, max_length=100)
    skills: list[Annotated[str, Field(max_length=50)]] | None = Field(default=None, max_length=20)
    experience: str | None = Field(default=None, max_length=1000)
    education: str | None = Field(default=None, max_length=1000)
    website: str | None = None
    github: str | None = None
    linkedin: str | None = None
    avatar: str | None = None
    resume: str | None = None
    phone: str | None = Field(default=None, max_length=20)
    is_profile_public: bool | None = None

    class Config:
        extra = "forbid"


class CompanyUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=2, max_length=100)
    description: str | None = Field(default=None, max_length=2000)
    website: str | None = None
    size: CompanySize | None = None
    industry: str | None = Field(default=None, max_length=100)
    location: str | None = Field(default=None, max_length=100)
    logo: str | None = None

    class Config:
        extra = "forbid"


class RoleUpdate(BaseModel):
    role: Role


def company_to_response(company) -> dict:
    return {
        "id": company.id,
        "owner_id": company.owner_id,
        "name": company.name,
        "description": company.description,
        "website": company.website,
        "size": company.size,
        "industry": company.industry,
        "location": company.location,
        "logo": company.logo,
        "created_at": iso(company.created_at),
    }


def user_to_admin_response(u) -> dict:
    return {
        "id": u.id,
        "email": u.email,
        "first_name": u.first_name,
        "last_name": u.last_name,
        "role": u.role,
        "created_at": iso(u.created_at),
    }
