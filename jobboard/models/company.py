from sqlalchemy import Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from jobboard.database import Base, utcnow


class Company(Base):
    """Employer profile; at most one per owning user."""

    __tablename__ = "companies"

    id = Column(String, primary_key=True, index=True)
    owner_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    name = Column(String(100), nullable=False)
    description = Column(Text)
    website = Column(String)
    size = Column(String(20))
    industry = Column(String(100))
    location = Column(String(100))
    logo = Column(String)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    owner = relationship("User", back_populates="company")
