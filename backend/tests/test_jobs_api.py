"""End-to-end tests for the /jobs routes."""

from sqlalchemy.exc import OperationalError

from jobboard.database import get_db
from jobboard.main import app
from conftest import (
    auth_header,
    make_application,
    make_company,
    make_job,
    make_job_skill,
    make_saved_job,
    make_skill,
    make_user,
    views_of,
)


class TestListJobs:
    def test_anonymous_listing(self, client, db) -> None:
        company = make_company(db)
        make_job(db, company, title="Python Developer")

        res = client.get("/jobs/")
        assert res.status_code == 200
        body = res.json()
        assert body["pagination"] == {"page": 1, "limit": 20, "total": 1, "total_pages": 1}
        item = body["items"][0]
        assert item["title"] == "Python Developer"
        assert item["company"]["company_name"] == "Acme"
        assert "has_applied" not in item
        assert "is_saved" not in item

    def test_query_filters(self, client, db) -> None:
        company = make_company(db)
        remote = make_job(db, company, title="Remote Dev", remote_work_option="Yes", job_type="Contract")
        make_job(db, company, title="Office Dev", remote_work_option="No")

        res = client.get("/jobs/", params={"remote_work_option": "Yes", "job_type": "Contract"})
        assert [item["id"] for item in res.json()["items"]] == [remote.id]
        assert res.json()["filters"]["remote_work_options"] == ["Yes"]

    def test_all_violations_reported(self, client) -> None:
        res = client.get("/jobs/", params={"page": 0, "limit": 100})
        assert res.status_code == 400
        error = res.json()["error"]
        assert error["code"] == "VALIDATION_FAILED"
        assert {e["field"] for e in error["details"]["errors"]} == {"page", "limit"}

    def test_jobseeker_sees_annotations(self, client, db) -> None:
        company = make_company(db)
        applied = make_job(db, company, title="Applied")
        saved = make_job(db, company, title="Saved")
        user = make_user(db)
        make_application(db, user, applied)
        make_saved_job(db, user, saved)

        res = client.get("/jobs/", headers=auth_header(user))
        flags = {item["id"]: (item["has_applied"], item["is_saved"]) for item in res.json()["items"]}
        assert flags == {applied.id: (True, False), saved.id: (False, True)}

    def test_bad_token_is_treated_as_anonymous(self, client, db) -> None:
        company = make_company(db)
        make_job(db, company)

        res = client.get("/jobs/", headers={"Authorization": "Bearer not-a-token"})
        assert res.status_code == 200
        assert "has_applied" not in res.json()["items"][0]

    def test_unverified_user_is_treated_as_anonymous(self, client, db) -> None:
        company = make_company(db)
        make_job(db, company)
        user = make_user(db, is_verified=False)

        res = client.get("/jobs/", headers=auth_header(user))
        assert "has_applied" not in res.json()["items"][0]

    def test_views_are_counted_after_response(self, client, db) -> None:
        company = make_company(db)
        job = make_job(db, company)

        client.get("/jobs/")
        assert views_of(db, job.id) == 1

    def test_backend_failure_is_503(self, client) -> None:
        class BrokenSession:
            def query(self, *args, **kwargs):
                raise OperationalError("SELECT ...", {}, Exception("timeout"))

            def close(self):
                pass

        app.dependency_overrides[get_db] = lambda: BrokenSession()
        res = client.get("/jobs/", params={"search": "secret"})
        assert res.status_code == 503
        assert res.json()["error"]["code"] == "BACKEND_UNAVAILABLE"
        assert "secret" not in res.text

    def test_identity_lookup_failure_is_503(self, client, db) -> None:
        headers = auth_header(make_user(db))

        class BrokenSession:
            def query(self, *args, **kwargs):
                raise OperationalError("SELECT ...", {}, Exception("connection lost"))

            def close(self):
                pass

        app.dependency_overrides[get_db] = lambda: BrokenSession()
        res = client.get("/jobs/", headers=headers)
        assert res.status_code == 503
        assert res.json()["error"]["code"] == "BACKEND_UNAVAILABLE"

    def test_range_and_salary_violations_reported_together(self, client) -> None:
        res = client.get("/jobs/", params={"page": 0, "salary_min": 10, "salary_max": 5})
        assert res.status_code == 400
        fields = {e["field"] for e in res.json()["error"]["details"]["errors"]}
        assert fields == {"page", "salary_range"}

    def test_negative_salary_is_rejected(self, client) -> None:
        res = client.get("/jobs/", params={"salary_min": -1})
        assert res.status_code == 400
        fields = [e["field"] for e in res.json()["error"]["details"]["errors"]]
        assert fields == ["salary_min"]


class TestSearchJobs:
    def test_combined_filters(self, client, db) -> None:
        small = make_company(db, company_name="Small", company_size="1-10")
        big = make_company(db, company_name="Big", company_size="1000+")
        match = make_job(db, small, title="Python Engineer", experience_level="Senior-level",
                         salary_min=90000, salary_max=120000, remote_work_option="Hybrid")
        make_job(db, big, title="Python Engineer", experience_level="Senior-level")
        make_job(db, small, title="Python Engineer", experience_level="Entry-level")

        res = client.post("/jobs/search", json={
            "keywords": "python",
            "experience_levels": ["Senior-level"],
            "company_size": ["1-10"],
            "salary_range": {"min": 80000},
            "remote_only": True,
        })
        assert res.status_code == 200
        assert [item["id"] for item in res.json()["items"]] == [match.id]
        assert res.json()["filters"]["sort_by"] == "relevance"

    def test_inverted_salary_range(self, client) -> None:
        res = client.post("/jobs/search", json={"salary_range": {"min": 100, "max": 10}})
        assert res.status_code == 400
        fields = [e["field"] for e in res.json()["error"]["details"]["errors"]]
        assert fields == ["salary_range"]

    def test_body_violations_reported_together(self, client) -> None:
        res = client.post("/jobs/search", json={"limit": 0, "posted_within_days": 0, "radius": 1000})
        assert res.status_code == 400
        fields = {e["field"] for e in res.json()["error"]["details"]["errors"]}
        assert fields == {"limit", "posted_within_days", "radius"}

    def test_page_and_salary_range_reported_together(self, client) -> None:
        res = client.post("/jobs/search", json={"page": 0, "salary_range": {"min": 10, "max": 5}})
        assert res.status_code == 400
        fields = {e["field"] for e in res.json()["error"]["details"]["errors"]}
        assert fields == {"page", "salary_range"}

    def test_blank_keywords_are_ignored(self, client, db) -> None:
        company = make_company(db)
        make_job(db, company)
        res = client.post("/jobs/search", json={"keywords": "   "})
        assert res.json()["pagination"]["total"] == 1


class TestTrending:
    def test_ranked_by_score(self, client, db) -> None:
        company = make_company(db)
        second = make_job(db, company, views_count=80, current_applications=40)
        first = make_job(db, company, views_count=100, current_applications=10)

        res = client.get("/jobs/trending/popular")
        assert res.status_code == 200
        body = res.json()
        assert [job["id"] for job in body] == [first.id, second.id]
        assert [job["trending_score"] for job in body] == [73.0, 68.0]
        assert views_of(db, first.id) == 100


class TestDetail:
    def test_detail_and_view_count(self, client, db) -> None:
        company = make_company(db)
        job = make_job(db, company, requirements="3+ years")

        res = client.get(f"/jobs/{job.id}")
        assert res.status_code == 200
        assert res.json()["requirements"] == "3+ years"
        assert res.json()["similar_jobs"] == []
        assert views_of(db, job.id) == 1

    def test_detail_includes_skills(self, client, db) -> None:
        company = make_company(db)
        job = make_job(db, company)
        python = make_skill(db, "Python", "Backend")
        docker = make_skill(db, "Docker", "DevOps")
        make_job_skill(db, job, docker, is_required=False)
        make_job_skill(db, job, python, required_level="Advanced")

        skills = client.get(f"/jobs/{job.id}").json()["skills"]
        assert [s["skill_name"] for s in skills] == ["Python", "Docker"]
        assert skills[0] == {
            "skill_id": python.id,
            "skill_name": "Python",
            "category": "Backend",
            "required_level": "Advanced",
            "is_required": True,
        }

    def test_not_found(self, client) -> None:
        res = client.get("/jobs/9999")
        assert res.status_code == 404
        assert res.json()["error"]["code"] == "NOT_FOUND"


class TestCompanyJobs:
    def test_company_listing(self, client, db) -> None:
        company = make_company(db)
        job = make_job(db, company)

        res = client.get(f"/jobs/company/{company.id}")
        assert res.status_code == 200
        assert res.json()["company"]["company_name"] == "Acme"
        assert [item["id"] for item in res.json()["items"]] == [job.id]

    def test_unknown_company(self, client) -> None:
        assert client.get("/jobs/company/9999").status_code == 404


class TestFilterOptionsAndStats:
    def test_filter_options(self, client, db) -> None:
        company = make_company(db)
        make_job(db, company, industry="Finance", experience_level="Senior-level", salary_min=1000, salary_max=3000)
        make_job(db, company, industry="Technology", experience_level="Entry-level", location="Busan")

        body = client.get("/jobs/filters/options").json()
        assert body["industries"] == ["Finance", "Technology"]
        assert body["locations"] == ["Busan", "Seoul"]
        assert body["experience_levels"] == ["Entry-level", "Senior-level"]
        assert body["companies"] == [{"id": company.id, "company_name": "Acme"}]
        assert body["salary_ranges"]["max_salary"] == 3000

    def test_overview(self, client, db) -> None:
        company = make_company(db)
        make_job(db, company)
        make_job(db, company, status="closed")

        body = client.get("/jobs/stats/overview").json()
        assert body["active_jobs"] == 1
        assert body["active_companies"] == 1
        assert body["top_industry"] == "Technology"


class TestSkills:
    def test_all_skills_grouped_by_category(self, client, db) -> None:
        make_skill(db, "Python", "Backend")
        make_skill(db, "Go", "Backend")
        make_skill(db, "Docker", "DevOps")
        make_skill(db, "Communication", None)

        res = client.get("/jobs/skills/all")
        assert res.status_code == 200
        body = res.json()
        assert len(body["skills"]) == 4
        grouped = {
            category: [s["name"] for s in skills]
            for category, skills in body["skills_by_category"].items()
        }
        assert grouped == {
            "Backend": ["Go", "Python"],
            "DevOps": ["Docker"],
            "Other": ["Communication"],
        }

    def test_category_filter(self, client, db) -> None:
        make_skill(db, "Python", "Backend")
        make_skill(db, "Docker", "DevOps")

        body = client.get("/jobs/skills/all", params={"category": "DevOps"}).json()
        assert [s["name"] for s in body["skills"]] == ["Docker"]
        assert list(body["skills_by_category"]) == ["DevOps"]

    def test_not_shadowed_by_job_detail_route(self, client) -> None:
        res = client.get("/jobs/skills/all")
        assert res.status_code == 200
        assert res.json() == {"skills": [], "skills_by_category": {}}
