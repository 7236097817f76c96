"""Shared fixtures: in-memory SQLite database, seed helpers, and an API client."""

import os

os.environ.setdefault("SQLALCHEMY_DATABASE_URI", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from jobboard.core.security import create_access_token
from jobboard.database import Base, get_db, get_session_factory
from jobboard.main import app
from jobboard.models import Application, Company, JobPost, JobSkill, SavedJob, Skill, User
from jobboard.services.predicate_builder import utcnow

FIXED_NOW = datetime(2024, 6, 1, 12, 0, 0)


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def clock():
    """Fixed clock for engine-level tests."""
    return lambda: FIXED_NOW


class RecordingScheduler:
    """Collects scheduled background calls instead of running them."""

    def __init__(self):
        self.calls = []

    def __call__(self, func, *args, **kwargs):
        self.calls.append((func, args, kwargs))

    def run_all(self):
        for func, args, kwargs in self.calls:
            func(*args, **kwargs)


@pytest.fixture()
def scheduler():
    return RecordingScheduler()


@pytest.fixture()
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    yield TestClient(app)
    app.dependency_overrides.clear()


# === seed helpers ===
def make_company(db, **kw) -> Company:
    data = {
        "company_name": "Acme",
        "industry": "Technology",
        "company_size": "51-200",
        "city": "Seoul",
        "country": "KR",
    }
    data.update(kw)
    company = Company(**data)
    db.add(company)
    db.commit()
    db.refresh(company)
    return company


def make_job(db, company: Company, now: datetime = None, **kw) -> JobPost:
    now = now or utcnow()
    data = {
        "company_id": company.id,
        "title": "Backend Engineer",
        "description": "Build APIs.",
        "location": "Seoul",
        "remote_work_option": "No",
        "job_type": "Full-time",
        "experience_level": "Mid-level",
        "industry": "Technology",
        "status": "active",
        "posted_date": now - timedelta(days=1),
        "views_count": 0,
        "current_applications": 0,
    }
    data.update(kw)
    job = JobPost(**data)
    db.add(job)
    db.commit()
    db.refresh(job)
    return job


def make_user(db, email: str = "seeker@example.com", user_type: str = "jobseeker", is_verified: bool = True) -> User:
    user = User(email=email, user_type=user_type, is_verified=is_verified)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_application(db, user: User, job: JobPost) -> Application:
    application = Application(user_id=user.id, job_post_id=job.id)
    db.add(application)
    db.commit()
    return application


def make_saved_job(db, user: User, job: JobPost) -> SavedJob:
    saved = SavedJob(user_id=user.id, job_post_id=job.id)
    db.add(saved)
    db.commit()
    return saved


def make_skill(db, name: str, category: str = None) -> Skill:
    skill = Skill(name=name, category=category)
    db.add(skill)
    db.commit()
    db.refresh(skill)
    return skill


def make_job_skill(db, job: JobPost, skill: Skill, required_level: str = None, is_required: bool = True) -> JobSkill:
    job_skill = JobSkill(job_post_id=job.id, skill_id=skill.id, required_level=required_level, is_required=is_required)
    db.add(job_skill)
    db.commit()
    return job_skill


def auth_header(user: User) -> dict:
    token = create_access_token({"sub": str(user.id)})
    return {"Authorization": f"Bearer {token}"}


def views_of(db, job_id: int) -> int:
    return db.query(JobPost.views_count).filter(JobPost.id == job_id).scalar()
