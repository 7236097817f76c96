"""Tests for the sample data seed script."""

from jobboard.models import Company, JobPost, JobSkill, Skill, User
from jobboard.schemas.search import FilterSpec
from jobboard.scripts.init_data import (
    initial_job_posts,
    initial_job_skills,
    initial_skills,
    insert_companies,
    insert_job_posts,
    insert_job_skills,
    insert_skills,
    insert_users,
)
from jobboard.services.search_engine import SearchEngine


def _seed(db):
    insert_users(db)
    insert_companies(db)
    insert_job_posts(db)
    insert_skills(db)
    insert_job_skills(db)


def test_seed_is_idempotent(db) -> None:
    _seed(db)
    _seed(db)
    assert db.query(User).count() == 2
    assert db.query(Company).count() == 3
    assert db.query(JobPost).count() == len(initial_job_posts)
    assert db.query(Skill).count() == len(initial_skills)
    assert db.query(JobSkill).count() == sum(len(skills) for skills in initial_job_skills.values())


def test_seeded_jobs_are_searchable(db) -> None:
    _seed(db)
    page = SearchEngine(db).search(FilterSpec(keywords="python"))
    assert {item.title for item in page.items} == {"Python Backend Engineer", "Data Engineer"}


def test_seeded_detail_lists_required_skills_first(db) -> None:
    _seed(db)
    job = db.query(JobPost).filter(JobPost.title == "Python Backend Engineer").first()
    skills = SearchEngine(db).get_detail(job.id).skills
    assert [s.skill_name for s in skills] == ["FastAPI", "PostgreSQL", "Python", "Docker"]
    assert skills[-1].is_required is False
