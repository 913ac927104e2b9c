"""
Application status state machine.

Two actors move an application: the employer who owns the job, and the applicant.
ACCEPTED, REJECTED and WITHDRAWN are terminal.
"""

from enum import Enum

from jobboard.core.enums import ApplicationStatus
from jobboard.core.errors import InvalidTransition

S = ApplicationStatus


class Actor(str, Enum):
    EMPLOYER = "EMPLOYER"
    APPLICANT = "APPLICANT"


TERMINAL_STATUSES = frozenset({S.ACCEPTED, S.REJECTED, S.WITHDRAWN})

TRANSITIONS: dict[Actor, dict[ApplicationStatus, frozenset[ApplicationStatus]]] = {
    Actor.EMPLOYER: {
        S.PENDING: frozenset({S.REVIEWING, S.ACCEPTED, S.REJECTED}),
        # REVIEWING -> REVIEWING is an accepted no-op
        S.REVIEWING: frozenset({S.REVIEWING, S.INTERVIEWING, S.ACCEPTED, S.REJECTED}),
        S.INTERVIEWING: frozenset({S.ACCEPTED, S.REJECTED}),
    },
    Actor.APPLICANT: {
        S.PENDING: frozenset({S.WITHDRAWN}),
        S.REVIEWING: frozenset({S.WITHDRAWN}),
        S.INTERVIEWING: frozenset({S.WITHDRAWN}),
    },
}


def allowed_targets(current: ApplicationStatus | str, actor: Actor) -> frozenset[ApplicationStatus]:
    return TRANSITIONS[actor].get(ApplicationStatus(current), frozenset())


def is_terminal(status: ApplicationStatus | str) -> bool:
    return ApplicationStatus(status) in TERMINAL_STATUSES


def check_transition(current: ApplicationStatus | str, target: ApplicationStatus | str, actor: Actor) -> ApplicationStatus:
    """Return the target status, or raise InvalidTransition if actor may not make this move."""
    current = ApplicationStatus(current)
    target = ApplicationStatus(target)
    if target not in allowed_targets(current, actor):
        raise InvalidTransition(
            f"Cannot move application from {current.value} to {target.value}",
            reason="TERMINAL_STATE" if current in TERMINAL_STATUSES else None,
        )
    return target
