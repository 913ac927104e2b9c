"""Accounts, company profiles, per-user stats and admin user management."""

import logging
from typing import Any, Mapping

from sqlalchemy.orm import Session

from jobboard.core.enums import Role
from jobboard.core.errors import Conflict, NotFound, Unauthenticated, ValidationFailed
from jobboard.core.identity import Identity
from jobboard.core.policy import can_administer, enforce, has_role
from jobboard.core.security import verify_password
from jobboard.models.company import Company
from jobboard.models.user import User
from jobboard.repos import application_repo, company_repo, job_repo, user_repo
from jobboard.schemas.auth import UserLogin, UserRegister
from jobboard.schemas.common import PageParams, Pagination, parse_model
from jobboard.schemas.user import CompanyUpdate, RoleUpdate, UserProfileUpdate
from jobboard.services.pagination import paginate

logger = logging.getLogger(__name__)


def register(db: Session, data: UserRegister | Mapping[str, Any]) -> User:
    form = parse_model(UserRegister, data)
    if user_repo.get_by_email(db, form.email):
        raise Conflict("User already exists with this email")
    user = user_repo.create(
        db,
        email=form.email,
        password=form.password,
        first_name=form.first_name,
        last_name=form.last_name,
        role=form.role,
        bio=form.bio,
        location=form.location,
        skills=form.skills,
    )
    logger.info("User registered: user=%s role=%s", user.id, user.role)
    return user


def authenticate(db: Session, data: UserLogin | Mapping[str, Any]) -> User:
    form = parse_model(UserLogin, data)
    user = user_repo.get_by_email(db, form.email)
    if not user or not verify_password(form.password, user.password_hash):
        raise Unauthenticated("Invalid email or password")
    logger.info("User logged in: user=%s", user.id)
    return user


def update_profile(db: Session, user: User, data: UserProfileUpdate | Mapping[str, Any]) -> User:
    changes = parse_model(UserProfileUpdate, data).model_dump(exclude_none=True)
    return user_repo.update_profile(db, user, **changes)


def upsert_company(db: Session, identity: Identity, data: CompanyUpdate | Mapping[str, Any]) -> Company:
    """Update the caller's company profile, creating it on first write."""
    enforce(has_role(identity, Role.EMPLOYER), "Only employers can update company profiles", identity)
    changes = parse_model(CompanyUpdate, data).model_dump(exclude_none=True, mode="json")
    company = company_repo.get_by_owner(db, identity.user_id)
    if company is None:
        company = company_repo.create(db, identity.user_id, **changes)
        logger.info("Company created: company=%s owner=%s", company.id, identity.user_id)
        return company
    return company_repo.update(db, company, **changes)


def get_company(db: Session, owner_id: str) -> Company | None:
    return company_repo.get_by_owner(db, owner_id)


def get_user_stats(db: Session, identity: Identity) -> dict:
    if identity.role == Role.DEVELOPER:
        by_status = application_repo.count_by_status_for_applicant(db, identity.user_id)
        return {
            "total_applications": sum(by_status.values()),
            "applications_by_status": by_status,
        }
    if identity.role == Role.EMPLOYER:
        return {
            "total_jobs": job_repo.count_by_owner(db, identity.user_id),
            "active_jobs": job_repo.count_by_owner(db, identity.user_id, active_only=True),
            "total_applications_received": application_repo.count_received_by_employer(db, identity.user_id),
        }
    return {}


def _delete_if_unreferenced(db: Session, user: User) -> None:
    jobs, applications = user_repo.count_dependents(db, user.id)
    if jobs or applications:
        raise Conflict(
            "Cannot delete user with existing applications or posted jobs",
            reason="HAS_DEPENDENTS",
        )
    user_repo.delete_user(db, user)


def delete_account(db: Session, identity: Identity) -> None:
    user = user_repo.get_by_id(db, identity.user_id)
    if not user:
        raise NotFound("User not found")
    _delete_if_unreferenced(db, user)
    logger.info("Account deleted: user=%s", identity.user_id)


def list_users(
    db: Session,
    identity: Identity,
    search: str | None = None,
    params: PageParams | Mapping[str, Any] | None = None,
) -> tuple[list[User], Pagination]:
    enforce(can_administer(identity), "Admin access required", identity)
    params = parse_model(PageParams, params)
    return paginate(
        lambda limit, offset: user_repo.get_all_users_paginated(db, search=search, limit=limit, offset=offset),
        params,
    )


def update_user_role(db: Session, identity: Identity, user_id: str, data: RoleUpdate | Mapping[str, Any]) -> User:
    enforce(can_administer(identity), "Admin access required", identity)
    role = parse_model(RoleUpdate, data).role
    target = user_repo.get_by_id(db, user_id)
    if not target:
        raise NotFound("User not found")
    if target.id == identity.user_id and role != Role.ADMIN:
        raise ValidationFailed("Cannot remove your own admin role")
    previous = target.role
    target = user_repo.set_role(db, target, role)
    logger.info("User role changed: user=%s %s -> %s by admin=%s", target.id, previous, target.role, identity.user_id)
    return target


def delete_user(db: Session, identity: Identity, user_id: str) -> None:
    enforce(can_administer(identity), "Admin access required", identity)
    target = user_repo.get_by_id(db, user_id)
    if not target:
        raise NotFound("User not found")
    _delete_if_unreferenced(db, target)
    logger.info("User deleted: user=%s by admin=%s", user_id, identity.user_id)
