from typing import Annotated

from pydantic import BaseModel, EmailStr, Field, field_validator

from jobboard.core.enums import Role

Name = Annotated[str, Field(min_length=2, max_length=50)]


class UserRegister(BaseModel):
    email: EmailStr
    password: str
    first_name: Name
    last_name: Name
    role: Role = Role.DEVELOPER
    bio: str | None = Field(default=None, max_length=500)
    location: str | None = Field(default=None, max_length=100)
    skills: list[Annotated[str, Field(max_length=50)]] = Field(default_factory=list, max_length=20)

    @field_validator("password")
    @classmethod
    def password_min_length(cls, v: str) -> str:
        if len(v) < 6:
            raise ValueError("Password must be at least 6 characters")
        if len(v) > 128:
            raise ValueError("Password must be at most 128 characters")
        return v

    @field_validator("role")
    @classmethod
    def self_service_role(cls, v: Role) -> Role:
        if v == Role.ADMIN:
            raise ValueError("role must be DEVELOPER or EMPLOYER")
        return v


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class UserResponse(BaseModel):
    id: str
    email: str
    first_name: str
    last_name: str
    role: Role
    bio: str | None = None
    location: str | None = None
    skills: list[str] = []
    website: str | None = None
    github: str | None = None
    linkedin: str | None = None
    avatar: str | None = None
    resume: str | None = None
    is_profile_public: bool = True

    class Config:
        from_attributes = True

    @field_validator("skills", mode="before")
    @classmethod
    def none_skills(cls, v):
        return v or []


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
