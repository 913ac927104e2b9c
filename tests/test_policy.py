import pytest

from jobboard.core.enums import ApplicationStatus, Role
from jobboard.core.errors import Conflict, Forbidden, InvalidTransition, JobInactive, Unauthenticated
from jobboard.core.identity import Identity
from jobboard.core.policy import (
    DenyReason,
    can_administer,
    can_apply,
    can_create_job,
    can_mutate_application,
    can_mutate_job,
    can_view_application,
    can_view_job_applications,
    can_withdraw,
    enforce,
    has_role,
)

EMPLOYER = Identity("emp-1", Role.EMPLOYER)
OTHER_EMPLOYER = Identity("emp-2", Role.EMPLOYER)
DEVELOPER = Identity("dev-1", Role.DEVELOPER)
ADMIN = Identity("admin-1", Role.ADMIN)


class _Job:
    def __init__(self, job_id="job-1", posted_by_id="emp-1", is_active=True):
        self.id = job_id
        self.posted_by_id = posted_by_id
        self.is_active = is_active


class _Application:
    def __init__(self, status=ApplicationStatus.PENDING.value, applicant_id="dev-1", job_id="job-1"):
        self.id = "app-1"
        self.status = status
        self.applicant_id = applicant_id
        self.job_id = job_id


def test_only_employers_create_jobs():
    assert can_create_job(EMPLOYER)
    assert can_create_job(DEVELOPER).reason == DenyReason.WRONG_ROLE
    assert can_create_job(ADMIN).reason == DenyReason.WRONG_ROLE
    assert can_create_job(None).reason == DenyReason.NOT_AUTHENTICATED


def test_job_mutation_owner_or_admin():
    job = _Job()
    assert can_mutate_job(EMPLOYER, job)
    assert can_mutate_job(ADMIN, job)
    assert can_mutate_job(OTHER_EMPLOYER, job).reason == DenyReason.NOT_OWNER
    assert can_mutate_job(DEVELOPER, job).reason == DenyReason.WRONG_ROLE


def test_viewing_job_applications_has_no_admin_bypass():
    job = _Job()
    assert can_view_job_applications(EMPLOYER, job)
    assert not can_view_job_applications(OTHER_EMPLOYER, job)
    assert not can_view_job_applications(ADMIN, job)


def test_apply_checks_activity_before_role_and_duplicates():
    inactive = _Job(is_active=False)
    assert can_apply(EMPLOYER, inactive).reason == DenyReason.JOB_INACTIVE
    assert can_apply(EMPLOYER, _Job()).reason == DenyReason.WRONG_ROLE
    assert can_apply(DEVELOPER, _Job())
    assert can_apply(None, _Job()).reason == DenyReason.NOT_AUTHENTICATED


@pytest.mark.parametrize("status", list(ApplicationStatus))
def test_any_existing_application_blocks_apply(status):
    decision = can_apply(DEVELOPER, _Job(), existing=_Application(status=status.value))
    assert decision.reason == DenyReason.ALREADY_APPLIED


def test_withdrawn_application_reopenable_only_when_enabled():
    withdrawn = _Application(status=ApplicationStatus.WITHDRAWN.value)
    assert not can_apply(DEVELOPER, _Job(), existing=withdrawn)
    assert can_apply(DEVELOPER, _Job(), existing=withdrawn, allow_reapply=True)
    rejected = _Application(status=ApplicationStatus.REJECTED.value)
    assert not can_apply(DEVELOPER, _Job(), existing=rejected, allow_reapply=True)


def test_application_status_mutation_requires_job_owner():
    job, application = _Job(), _Application()
    assert can_mutate_application(EMPLOYER, application, job)
    assert can_mutate_application(OTHER_EMPLOYER, application, job).reason == DenyReason.NOT_OWNER
    assert can_mutate_application(DEVELOPER, application, job).reason == DenyReason.WRONG_ROLE
    assert can_mutate_application(ADMIN, application, job).reason == DenyReason.WRONG_ROLE
    mismatched = _Application(job_id="job-other")
    assert can_mutate_application(EMPLOYER, mismatched, job).reason == DenyReason.NOT_OWNER


@pytest.mark.parametrize(
    "status,allowed",
    [
        (ApplicationStatus.PENDING, True),
        (ApplicationStatus.REVIEWING, True),
        (ApplicationStatus.INTERVIEWING, True),
        (ApplicationStatus.ACCEPTED, False),
        (ApplicationStatus.REJECTED, False),
    ],
)
def test_withdraw_locked_after_decision(status, allowed):
    decision = can_withdraw(DEVELOPER, _Application(status=status.value))
    assert bool(decision) is allowed
    if not allowed:
        assert decision.reason == DenyReason.TERMINAL_STATE


def test_withdraw_requires_the_applicant():
    application = _Application(applicant_id="dev-other")
    assert can_withdraw(DEVELOPER, application).reason == DenyReason.NOT_OWNER
    assert can_withdraw(EMPLOYER, _Application()).reason == DenyReason.WRONG_ROLE


def test_view_application_applicant_or_job_owner():
    job, application = _Job(), _Application()
    assert can_view_application(DEVELOPER, application, job)
    assert can_view_application(EMPLOYER, application, job)
    assert not can_view_application(OTHER_EMPLOYER, application, job)


def test_role_checks():
    assert can_administer(ADMIN)
    assert can_administer(EMPLOYER).reason == DenyReason.WRONG_ROLE
    assert has_role(DEVELOPER, Role.DEVELOPER)
    assert not has_role(DEVELOPER, Role.EMPLOYER)


@pytest.mark.parametrize(
    "decision,error",
    [
        (can_create_job(None), Unauthenticated),
        (can_create_job(DEVELOPER), Forbidden),
        (can_mutate_job(OTHER_EMPLOYER, _Job()), Forbidden),
        (can_apply(DEVELOPER, _Job(), existing=_Application()), Conflict),
        (can_apply(DEVELOPER, _Job(is_active=False)), JobInactive),
        (can_withdraw(DEVELOPER, _Application(status="ACCEPTED")), InvalidTransition),
    ],
)
def test_enforce_maps_reason_to_error(decision, error):
    with pytest.raises(error) as ex:
        enforce(decision, "denied")
    assert ex.value.reason == decision.reason.value
    assert ex.value.message == "denied"


def test_enforce_picks_message_per_reason_and_allows():
    enforce(can_create_job(EMPLOYER), "never raised")
    with pytest.raises(Forbidden) as ex:
        enforce(can_create_job(DEVELOPER), {DenyReason.WRONG_ROLE: "Only employers can post jobs"})
    assert ex.value.message == "Only employers can post jobs"
    assert ex.value.status_code == 403
