"""
Authorization policy for jobs and applications.

Every check is a pure function of the caller's Identity and the records involved and
returns a Decision. Services call enforce() to turn a denial into the matching typed
error; nothing here touches the database.
"""

import logging
from enum import Enum
from typing import Mapping, NamedTuple

from jobboard.core.enums import ApplicationStatus, Role
from jobboard.core.errors import Conflict, Forbidden, InvalidTransition, JobInactive, Unauthenticated
from jobboard.core.identity import Identity

logger = logging.getLogger(__name__)


class DenyReason(str, Enum):
    NOT_AUTHENTICATED = "NOT_AUTHENTICATED"
    WRONG_ROLE = "WRONG_ROLE"
    NOT_OWNER = "NOT_OWNER"
    ALREADY_APPLIED = "ALREADY_APPLIED"
    JOB_INACTIVE = "JOB_INACTIVE"
    TERMINAL_STATE = "TERMINAL_STATE"


class Decision(NamedTuple):
    allowed: bool
    reason: DenyReason | None = None

    def __bool__(self) -> bool:
        return self.allowed


ALLOW = Decision(True)

# Statuses the applicant can no longer back out of.
APPLICANT_LOCKED_STATUSES = frozenset({ApplicationStatus.ACCEPTED, ApplicationStatus.REJECTED})


def _deny(reason: DenyReason) -> Decision:
    return Decision(False, reason)


def _owns(identity: Identity, job) -> bool:
    return job.posted_by_id == identity.user_id


def can_create_job(identity: Identity | None) -> Decision:
    if identity is None:
        return _deny(DenyReason.NOT_AUTHENTICATED)
    if identity.role != Role.EMPLOYER:
        return _deny(DenyReason.WRONG_ROLE)
    return ALLOW


def can_mutate_job(identity: Identity | None, job) -> Decision:
    """Update, delete and active-toggle: the posting employer, or any admin."""
    if identity is None:
        return _deny(DenyReason.NOT_AUTHENTICATED)
    if identity.role == Role.ADMIN:
        return ALLOW
    if identity.role != Role.EMPLOYER:
        return _deny(DenyReason.WRONG_ROLE)
    if not _owns(identity, job):
        return _deny(DenyReason.NOT_OWNER)
    return ALLOW


def can_view_job_applications(identity: Identity | None, job) -> Decision:
    if identity is None:
        return _deny(DenyReason.NOT_AUTHENTICATED)
    if identity.role != Role.EMPLOYER:
        return _deny(DenyReason.WRONG_ROLE)
    if not _owns(identity, job):
        return _deny(DenyReason.NOT_OWNER)
    return ALLOW


def can_apply(identity: Identity | None, job, existing=None, allow_reapply: bool = False) -> Decision:
    """
    A developer may apply to an active job once. `existing` is the caller's prior
    application for this job, if any. With allow_reapply a WITHDRAWN one does not count.
    """
    if identity is None:
        return _deny(DenyReason.NOT_AUTHENTICATED)
    if not job.is_active:
        return _deny(DenyReason.JOB_INACTIVE)
    if identity.role != Role.DEVELOPER:
        return _deny(DenyReason.WRONG_ROLE)
    if existing is not None:
        reopenable = allow_reapply and ApplicationStatus(existing.status) == ApplicationStatus.WITHDRAWN
        if not reopenable:
            return _deny(DenyReason.ALREADY_APPLIED)
    return ALLOW


def can_mutate_application(identity: Identity | None, application, job) -> Decision:
    """Status changes belong to the employer who posted the application's job."""
    if identity is None:
        return _deny(DenyReason.NOT_AUTHENTICATED)
    if identity.role != Role.EMPLOYER:
        return _deny(DenyReason.WRONG_ROLE)
    if application.job_id != job.id or not _owns(identity, job):
        return _deny(DenyReason.NOT_OWNER)
    return ALLOW


def can_withdraw(identity: Identity | None, application) -> Decision:
    if identity is None:
        return _deny(DenyReason.NOT_AUTHENTICATED)
    if identity.role != Role.DEVELOPER:
        return _deny(DenyReason.WRONG_ROLE)
    if application.applicant_id != identity.user_id:
        return _deny(DenyReason.NOT_OWNER)
    if ApplicationStatus(application.status) in APPLICANT_LOCKED_STATUSES:
        return _deny(DenyReason.TERMINAL_STATE)
    return ALLOW


def can_view_application(identity: Identity | None, application, job) -> Decision:
    if identity is None:
        return _deny(DenyReason.NOT_AUTHENTICATED)
    if application.applicant_id == identity.user_id or _owns(identity, job):
        return ALLOW
    return _deny(DenyReason.NOT_OWNER)


def can_administer(identity: Identity | None) -> Decision:
    if identity is None:
        return _deny(DenyReason.NOT_AUTHENTICATED)
    if identity.role != Role.ADMIN:
        return _deny(DenyReason.WRONG_ROLE)
    return ALLOW


def has_role(identity: Identity | None, role: Role) -> Decision:
    if identity is None:
        return _deny(DenyReason.NOT_AUTHENTICATED)
    if identity.role != role:
        return _deny(DenyReason.WRONG_ROLE)
    return ALLOW


_ERRORS = {
    DenyReason.NOT_AUTHENTICATED: Unauthenticated,
    DenyReason.WRONG_ROLE: Forbidden,
    DenyReason.NOT_OWNER: Forbidden,
    DenyReason.ALREADY_APPLIED: Conflict,
    DenyReason.JOB_INACTIVE: JobInactive,
    DenyReason.TERMINAL_STATE: InvalidTransition,
}


def enforce(
    decision: Decision,
    message: str | Mapping[DenyReason, str] | None = None,
    identity: Identity | None = None,
) -> None:
    """
    Raise the typed error for a denied decision; no-op when allowed.
    `message` may be a single string or a per-reason mapping.
    """
    if decision.allowed:
        return
    if isinstance(message, Mapping):
        message = message.get(decision.reason)
    logger.info(
        "Authorization denied: user=%s reason=%s",
        identity.user_id if identity else None,
        decision.reason.value,
    )
    raise _ERRORS[decision.reason](message, reason=decision.reason.value)
