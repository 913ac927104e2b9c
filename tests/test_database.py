import pytest
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.pool import StaticPool

import jobboard.database as dbmod


def test_get_db_closes_session(monkeypatch):
    class _DB:
        def __init__(self):
            self.closed = False

        def close(self):
            self.closed = True

    inst = _DB()
    monkeypatch.setattr(dbmod, "SessionLocal", lambda: inst)
    gen = dbmod.get_db()
    got = next(gen)
    assert got is inst
    with pytest.raises(StopIteration):
        next(gen)
    assert inst.closed is True


def test_init_db_success_and_failure(monkeypatch):
    class _Meta:
        def create_all(self, bind):
            return None

    monkeypatch.setattr(dbmod.Base, "metadata", _Meta())
    dbmod.init_db()

    class _MetaFail:
        def create_all(self, bind):
            raise RuntimeError("db fail")

    monkeypatch.setattr(dbmod.Base, "metadata", _MetaFail())
    with pytest.raises(RuntimeError):
        dbmod.init_db()


def test_ensure_tables_exist_creates_only_missing(monkeypatch):
    eng = dbmod.build_engine("sqlite://", poolclass=StaticPool)
    monkeypatch.setattr(dbmod, "engine", eng)

    dbmod.ensure_tables_exist()
    dbmod.ensure_tables_exist()

    with eng.connect() as conn:
        names = {row[0] for row in conn.execute(text("SELECT name FROM sqlite_master WHERE type='table'"))}
    assert {"users", "companies", "jobs", "job_skills", "applications"} <= names


def test_ensure_tables_exist_failure(monkeypatch):
    def _boom(_engine):
        raise RuntimeError("inspect failed")

    monkeypatch.setattr(dbmod, "inspect", _boom)
    with pytest.raises(RuntimeError):
        dbmod.ensure_tables_exist()


def test_sqlite_engine_enforces_foreign_keys(engine):
    with engine.connect() as conn:
        assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1
        with pytest.raises(IntegrityError):
            conn.execute(
                text(
                    "INSERT INTO companies (id, owner_id, name) VALUES ('c1', 'no-such-user', 'Ghost Co')"
                )
            )


def test_unique_application_per_job_and_applicant(db, identity_of, employer, developer, make_job):
    from jobboard.core.security import generate_id
    from jobboard.models.application import Application

    job = make_job(employer)
    now = dbmod.utcnow()
    db.add(Application(id=generate_id(), job_id=job.id, applicant_id=developer.id, status="PENDING", applied_at=now))
    db.commit()
    db.add(Application(id=generate_id(), job_id=job.id, applicant_id=developer.id, status="PENDING", applied_at=now))
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()


def test_utcnow_is_timezone_aware():
    assert dbmod.utcnow().tzinfo is not None
