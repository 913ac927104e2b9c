from sqlalchemy import func
from sqlalchemy.orm import Session

from jobboard.core.enums import Role
from jobboard.core.security import generate_id, hash_password
from jobboard.models.application import Application
from jobboard.models.job import Job
from jobboard.models.user import User

PROFILE_FIELDS = (
    "first_name",
    "last_name",
    "bio",
    "location",
    "skills",
    "experience",
    "education",
    "website",
    "github",
    "linkedin",
    "phone",
    "avatar",
    "resume",
    "is_profile_public",
)


def get_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(func.lower(User.email) == email.lower()).first()


def get_by_id(db: Session, user_id: str) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def create(
    db: Session,
    email: str,
    password: str,
    first_name: str,
    last_name: str,
    role: Role = Role.DEVELOPER,
    **profile,
) -> User:
    user = User(
        id=generate_id(),
        email=email,
        password_hash=hash_password(password),
        first_name=first_name,
        last_name=last_name,
        role=Role(role).value,
    )
    for key, value in profile.items():
        if key in PROFILE_FIELDS and value is not None:
            setattr(user, key, value)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def update_profile(db: Session, user: User, **fields) -> User:
    for key, value in fields.items():
        if key in PROFILE_FIELDS and value is not None:
            setattr(user, key, value)
    db.commit()
    db.refresh(user)
    return user


def set_role(db: Session, user: User, role: Role) -> User:
    user.role = Role(role).value
    db.commit()
    db.refresh(user)
    return user


def get_all_users_paginated(
    db: Session,
    search: str | None = None,
    limit: int = 20,
    offset: int = 0,
) -> tuple[list[User], int]:
    """List users with optional email/name search and pagination. Returns (items, total)."""
    from sqlalchemy import or_

    q = db.query(User).order_by(User.created_at.desc(), User.id.desc())
    if search and search.strip():
        term = f"%{search.strip()}%"
        q = q.filter(
            or_(
                User.email.ilike(term),
                User.first_name.ilike(term),
                User.last_name.ilike(term),
            )
        )
    total = q.count()
    if offset >= total:
        return [], total
    items = q.offset(offset).limit(limit).all()
    return items, total


def count_dependents(db: Session, user_id: str) -> tuple[int, int]:
    """Return (posted jobs, submitted applications) for a user."""
    jobs = db.query(func.count(Job.id)).filter(Job.posted_by_id == user_id).scalar() or 0
    applications = db.query(func.count(Application.id)).filter(Application.applicant_id == user_id).scalar() or 0
    return jobs, applications


def delete_user(db: Session, user: User) -> None:
    """Delete a user; the company profile goes with it."""
    db.delete(user)
    db.commit()
