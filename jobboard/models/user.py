from sqlalchemy import JSON, Boolean, Column, DateTime, String, Text
from sqlalchemy.orm import relationship

from jobboard.core.enums import Role
from jobboard.database import Base, utcnow


class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    role = Column(String(20), nullable=False, default=Role.DEVELOPER.value, index=True)
    bio = Column(Text)
    location = Column(String(100))
    skills = Column(JSON, default=list)
    experience = Column(Text)
    education = Column(Text)
    website = Column(String)
    github = Column(String)
    linkedin = Column(String)
    phone = Column(String(20))
    avatar = Column(String)
    resume = Column(String)
    is_profile_public = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    company = relationship(
        "Company",
        back_populates="owner",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    jobs = relationship("Job", back_populates="posted_by")
    applications = relationship("Application", back_populates="applicant")
