import pytest
from pydantic import ValidationError

from jobboard.core.enums import Role
from jobboard.schemas.auth import UserRegister, UserResponse
from jobboard.schemas.job import JobSearchParams, SalaryRange


def test_salary_range_invariant():
    assert SalaryRange(min=0, max=0).currency == "USD"
    with pytest.raises(ValidationError):
        SalaryRange(min=10, max=5)
    with pytest.raises(ValidationError):
        SalaryRange(min=1, max=5, currency="JPY")


def test_search_params_normalize_input():
    params = JobSearchParams(query="  ", location=" Berlin ", skills=["a, b", "c"])
    assert params.query is None
    assert params.location == "Berlin"
    assert params.skills == ["a", "b", "c"]
    assert JobSearchParams(skills=" , ").skills is None


def test_search_params_accept_any_salary_bounds():
    params = JobSearchParams(min_salary="lots", max_salary=-3)
    assert params.min_salary == "lots"


def test_register_password_bounds_and_role():
    base = {"email": "u@example.com", "first_name": "Al", "last_name": "Bo"}
    with pytest.raises(ValidationError):
        UserRegister(password="short", **base)
    with pytest.raises(ValidationError):
        UserRegister(password="x" * 129, **base)
    with pytest.raises(ValidationError):
        UserRegister(password="longenough", role="ADMIN", **base)
    assert UserRegister(password="longenough", **base).role == Role.DEVELOPER


def test_user_response_tolerates_missing_skills():
    class _User:
        id = "u1"
        email = "u@example.com"
        first_name = "Al"
        last_name = "Bo"
        role = "EMPLOYER"
        bio = None
        location = None
        skills = None
        website = github = linkedin = avatar = resume = None
        is_profile_public = True

    out = UserResponse.model_validate(_User())
    assert out.skills == []
    assert out.role == Role.EMPLOYER
