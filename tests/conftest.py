import itertools

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import jobboard.models  # noqa: F401
from jobboard.core.enums import Role
from jobboard.core.identity import Identity
from jobboard.core.rate_limiter import rate_limiter
from jobboard.core.security import create_access_token
from jobboard.database import Base, build_engine, get_db
from jobboard.main import app
from jobboard.repos import user_repo
from jobboard.services import job_service

_emails = itertools.count(1)


def build_job_payload(**overrides) -> dict:
    payload = {
        "title": "Backend Engineer",
        "description": "Build and operate the services behind our hiring platform.",
        "requirements": ["3+ years of Python"],
        "responsibilities": ["Own the API layer"],
        "salary": {"min": 90000, "max": 120000, "currency": "USD"},
        "location": "Berlin, Germany",
        "type": "FULL_TIME",
        "experience": "MID",
        "skills": ["python", "sql"],
        "company_name": "Acme Corp",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def engine():
    eng = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield session
    session.close()


@pytest.fixture(autouse=True)
def _reset_rate_limiter():
    rate_limiter.reset()
    yield
    rate_limiter.reset()


@pytest.fixture
def make_user(db):
    def _make(role: Role = Role.DEVELOPER, email: str | None = None, password: str = "secret123", **profile):
        email = email or f"user{next(_emails)}@example.com"
        return user_repo.create(
            db,
            email=email,
            password=password,
            first_name="Test",
            last_name="User",
            role=role,
            **profile,
        )

    return _make


@pytest.fixture
def developer(make_user):
    return make_user(Role.DEVELOPER)


@pytest.fixture
def employer(make_user):
    return make_user(Role.EMPLOYER)


@pytest.fixture
def other_employer(make_user):
    return make_user(Role.EMPLOYER)


@pytest.fixture
def admin(make_user):
    return make_user(Role.ADMIN)


@pytest.fixture
def make_job(db):
    def _make(owner, **overrides):
        return job_service.create_job(db, Identity.from_user(owner), build_job_payload(**overrides))

    return _make


@pytest.fixture
def identity_of():
    return Identity.from_user


@pytest.fixture
def auth_headers():
    def _headers(user) -> dict:
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}

    return _headers


@pytest.fixture
def client(db):
    def _db_override():
        yield db

    app.dependency_overrides[get_db] = _db_override
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def job_payload():
    return build_job_payload
