from sqlalchemy import JSON, Boolean, Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.ext.associationproxy import association_proxy
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import relationship

from jobboard.core.enums import Currency
from jobboard.database import Base, utcnow


class JobSkill(Base):
    """One skill tag of a job; kept in its own table so overlap filters stay in SQL."""

    __tablename__ = "job_skills"

    id = Column(Integer, primary_key=True, autoincrement=True)
    job_id = Column(String, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(50), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)

    job = relationship("Job", back_populates="skill_rows")


class Job(Base):
    __tablename__ = "jobs"

    id = Column(String, primary_key=True, index=True)
    title = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    requirements = Column(JSON, nullable=False, default=list)
    responsibilities = Column(JSON, nullable=False, default=list)
    benefits = Column(JSON, default=list)
    salary_min = Column(Float, nullable=False)
    salary_max = Column(Float, nullable=False)
    salary_currency = Column(String(3), nullable=False, default=Currency.USD.value)
    location = Column(String(100), nullable=False)
    type = Column(String(20), nullable=False, index=True)
    experience = Column(String(20), nullable=False, index=True)
    company_name = Column(String(100), nullable=False)
    company_logo = Column(String)
    is_remote = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    posted_by_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    posted_by = relationship("User", back_populates="jobs")
    skill_rows = relationship(
        "JobSkill",
        back_populates="job",
        order_by="JobSkill.position",
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )
    skills = association_proxy("skill_rows", "name", creator=lambda name: JobSkill(name=name))
    applications = relationship(
        "Application",
        back_populates="job",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def salary(self) -> dict:
        return {"min": self.salary_min, "max": self.salary_max, "currency": self.salary_currency}
