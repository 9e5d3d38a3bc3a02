from bson import ObjectId


class TestListMyJobs:
    def test_owner_sees_only_own_jobs(self, client, login, create_job):
        create_job(title="Mine", created_by={"name": "Owner", "email": "owner@x.com"})
        create_job(title="Theirs", created_by={"name": "Other", "email": "other@x.com"})
        login("owner@x.com")

        r = client.get("/me/job?email=owner@x.com")
        assert r.status_code == 200
        data = r.json()
        assert data["count"] == 1
        assert data["result"][0]["title"] == "Mine"
        # owner view is not a summary
        assert data["result"][0]["company"]["name"] == "Acme Corp"

    def test_other_identity_forbidden(self, client, login, create_job):
        create_job()
        login("intruder@x.com")
        for email in ("owner@x.com", "someone@x.com", ""):
            r = client.get(f"/me/job?email={email}")
            assert r.status_code == 403
            assert r.json() == {"success": False, "message": "Forbidden access"}

    def test_missing_email_param_forbidden(self, client, login):
        login("owner@x.com")
        r = client.get("/me/job")
        assert r.status_code == 403

    def test_requires_token(self, client):
        r = client.get("/me/job?email=owner@x.com")
        assert r.status_code == 401


class TestUpdateMyJob:
    def test_owner_updates(self, client, collection, login, create_job):
        job_id = create_job()
        login("owner@x.com")
        r = client.patch(f"/me/job/{job_id}?email=owner@x.com", json={"title": "Renamed"})
        assert r.status_code == 200
        assert r.json()["result"]["modified_count"] == 1
        assert collection.find_one({"_id": ObjectId(job_id)})["title"] == "Renamed"

    def test_query_email_mismatch_forbidden(self, client, collection, login, create_job):
        job_id = create_job()
        login("owner@x.com")
        r = client.patch(f"/me/job/{job_id}?email=other@x.com", json={"title": "Renamed"})
        assert r.status_code == 403
        assert collection.find_one({"_id": ObjectId(job_id)})["title"] == "Backend Engineer"

    def test_cannot_update_someone_elses_job(self, client, collection, login, create_job):
        job_id = create_job()
        login("intruder@x.com")
        r = client.patch(f"/me/job/{job_id}?email=intruder@x.com", json={"title": "Hijacked"})
        assert r.status_code == 403
        assert collection.find_one({"_id": ObjectId(job_id)})["title"] == "Backend Engineer"

    def test_missing_job_reports_zero(self, client, login):
        login("owner@x.com")
        r = client.patch(f"/me/job/{ObjectId()}?email=owner@x.com", json={"title": "x"})
        assert r.status_code == 200
        assert r.json()["result"]["matched_count"] == 0


class TestDeleteMyJob:
    def test_owner_deletes(self, client, collection, login, create_job):
        job_id = create_job()
        login("owner@x.com")
        r = client.delete(f"/me/job/{job_id}?email=owner@x.com")
        assert r.status_code == 200
        assert r.json()["result"]["deleted_count"] == 1
        assert collection.count_documents({}) == 0

        r = client.delete(f"/me/job/{job_id}?email=owner@x.com")
        assert r.status_code == 200
        assert r.json()["result"]["deleted_count"] == 0

    def test_cannot_delete_someone_elses_job(self, client, collection, login, create_job):
        job_id = create_job()
        login("intruder@x.com")
        r = client.delete(f"/me/job/{job_id}?email=intruder@x.com")
        assert r.status_code == 403
        assert collection.count_documents({}) == 1

    def test_invalid_id(self, client, login):
        login("owner@x.com")
        r = client.delete("/me/job/123?email=owner@x.com")
        assert r.status_code == 400
