"""Tests for the saved-job and application routes that feed search annotations."""

from datetime import timedelta

from sqlalchemy.exc import OperationalError

from jobboard.database import get_db
from jobboard.main import app
from jobboard.models import JobPost
from jobboard.routers import application as application_router
from jobboard.routers import saved_job as saved_job_router
from jobboard.services.predicate_builder import utcnow
from conftest import auth_header, make_application, make_company, make_job, make_saved_job, make_user


class TestSavedJobs:
    def test_save_list_and_delete(self, client, db) -> None:
        company = make_company(db)
        job = make_job(db, company)
        user = make_user(db)
        headers = auth_header(user)

        res = client.post("/saved-jobs/", json={"job_post_id": job.id}, headers=headers)
        assert res.status_code == 201
        assert res.json()["job_post"]["id"] == job.id

        listed = client.get("/saved-jobs/", headers=headers).json()
        assert [s["job_post_id"] for s in listed] == [job.id]

        search = client.get("/jobs/", headers=headers).json()
        assert search["items"][0]["is_saved"] is True

        assert client.delete(f"/saved-jobs/{job.id}", headers=headers).status_code == 204
        assert client.get("/saved-jobs/", headers=headers).json() == []

    def test_duplicate_and_missing(self, client, db) -> None:
        company = make_company(db)
        job = make_job(db, company)
        headers = auth_header(make_user(db))

        client.post("/saved-jobs/", json={"job_post_id": job.id}, headers=headers)
        assert client.post("/saved-jobs/", json={"job_post_id": job.id}, headers=headers).status_code == 400
        assert client.post("/saved-jobs/", json={"job_post_id": 9999}, headers=headers).status_code == 404
        assert client.delete("/saved-jobs/9999", headers=headers).status_code == 404

    def test_requires_jobseeker(self, client, db) -> None:
        company_user = make_user(db, email="hr@example.com", user_type="company")
        assert client.get("/saved-jobs/").status_code == 401
        assert client.get("/saved-jobs/", headers=auth_header(company_user)).status_code == 403

    def test_concurrent_duplicate_save_is_400(self, client, db, monkeypatch) -> None:
        company = make_company(db)
        job = make_job(db, company)
        user = make_user(db)
        make_saved_job(db, user, job)
        # 앞선 중복 확인을 통과한 뒤 유니크 제약에 걸리는 경우
        monkeypatch.setattr(saved_job_router, "_find_saved", lambda *args: None)

        res = client.post("/saved-jobs/", json={"job_post_id": job.id}, headers=auth_header(user))
        assert res.status_code == 400
        assert res.json()["error"]["code"] == "ALREADY_SAVED"

    def test_user_lookup_failure_is_503(self, client, db) -> None:
        headers = auth_header(make_user(db))

        class BrokenSession:
            def query(self, *args, **kwargs):
                raise OperationalError("SELECT ...", {}, Exception("connection lost"))

            def close(self):
                pass

        app.dependency_overrides[get_db] = lambda: BrokenSession()
        res = client.get("/saved-jobs/", headers=headers)
        assert res.status_code == 503
        assert res.json()["error"]["code"] == "BACKEND_UNAVAILABLE"


class TestApplications:
    def test_apply_increments_count(self, client, db) -> None:
        company = make_company(db)
        job = make_job(db, company)
        headers = auth_header(make_user(db))

        res = client.post(f"/applications/{job.id}", json={"cover_letter": "Hello"}, headers=headers)
        assert res.status_code == 201
        assert res.json()["status"] == "pending"

        detail = client.get(f"/jobs/{job.id}", headers=headers).json()
        assert detail["current_applications"] == 1
        assert detail["has_applied"] is True

        again = client.post(f"/applications/{job.id}", json={}, headers=headers)
        assert again.status_code == 400
        assert again.json()["error"]["code"] == "ALREADY_APPLIED"

    def test_rejects_closed_applications(self, client, db) -> None:
        company = make_company(db)
        expired = make_job(db, company, application_deadline=(utcnow() - timedelta(days=2)).date())
        full = make_job(db, company, max_applications=1, current_applications=1)
        headers = auth_header(make_user(db))

        res = client.post(f"/applications/{expired.id}", json={}, headers=headers)
        assert res.json()["error"]["code"] == "DEADLINE_PASSED"
        res = client.post(f"/applications/{full.id}", json={}, headers=headers)
        assert res.json()["error"]["code"] == "APPLICATIONS_FULL"
        assert client.post("/applications/9999", json={}, headers=headers).status_code == 404

    def test_concurrent_duplicate_application_is_400(self, client, db, monkeypatch) -> None:
        company = make_company(db)
        job = make_job(db, company, current_applications=1)
        user = make_user(db)
        make_application(db, user, job)
        monkeypatch.setattr(application_router, "_find_application", lambda *args: None)

        res = client.post(f"/applications/{job.id}", json={}, headers=auth_header(user))
        assert res.status_code == 400
        assert res.json()["error"]["code"] == "ALREADY_APPLIED"
        # 실패한 지원은 지원자 수를 늘리지 않음
        db.expire_all()
        assert db.query(JobPost.current_applications).filter(JobPost.id == job.id).scalar() == 1
