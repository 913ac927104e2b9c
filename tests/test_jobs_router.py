from jobboard.core.enums import Role


def test_list_jobs_public_with_envelope(client, employer, make_job):
    make_job(employer, type="CONTRACT", is_remote=True, skills=["python"])
    make_job(employer, type="FULL_TIME", skills=["java"])

    resp = client.get("/jobs", params={"type": "CONTRACT", "is_remote": "true", "limit": 5})

    assert resp.status_code == 200
    body = resp.json()
    assert len(body["jobs"]) == 1
    assert body["jobs"][0]["type"] == "CONTRACT"
    assert body["pagination"] == {
        "current_page": 1,
        "total_pages": 1,
        "total": 1,
        "has_next_page": False,
        "has_prev_page": False,
    }


def test_list_jobs_skills_repeated_or_comma_separated(client, employer, make_job):
    make_job(employer, skills=["python"])
    make_job(employer, skills=["go"])
    make_job(employer, skills=["java"])

    repeated = client.get("/jobs?skills=python&skills=go")
    comma = client.get("/jobs", params={"skills": "python,go"})

    assert repeated.json()["pagination"]["total"] == 2
    assert comma.json()["pagination"]["total"] == 2


def test_list_jobs_bad_limit_is_400(client):
    resp = client.get("/jobs", params={"limit": 100})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Validation error"


def test_create_job_as_employer(client, employer, auth_headers, job_payload):
    resp = client.post("/jobs", json=job_payload(), headers=auth_headers(employer))
    assert resp.status_code == 201
    job = resp.json()["job"]
    assert job["posted_by_id"] == employer.id
    assert job["is_active"] is True
    assert job["salary"] == {"min": 90000, "max": 120000, "currency": "USD"}


def test_create_job_status_mapping(client, developer, employer, auth_headers, job_payload):
    assert client.post("/jobs", json=job_payload()).status_code == 401
    forbidden = client.post("/jobs", json=job_payload(), headers=auth_headers(developer))
    assert forbidden.status_code == 403
    assert forbidden.json()["reason"] == "WRONG_ROLE"
    invalid = client.post(
        "/jobs",
        json=job_payload(salary={"min": 200, "max": 100}),
        headers=auth_headers(employer),
    )
    assert invalid.status_code == 400
    assert invalid.json()["errors"]


def test_get_job_includes_applications_summary(client, db, identity_of, employer, developer, make_job):
    from jobboard.services import application_service

    job = make_job(employer)
    application_service.apply(db, identity_of(developer), {"job_id": job.id})

    resp = client.get(f"/jobs/{job.id}")

    assert resp.status_code == 200
    summary = resp.json()["job"]["applications"]
    assert summary[0]["applicant_id"] == developer.id
    assert summary[0]["status"] == "PENDING"
    assert client.get("/jobs/missing").status_code == 404


def test_update_toggle_delete_by_owner(client, employer, auth_headers, make_job):
    job = make_job(employer)
    headers = auth_headers(employer)

    updated = client.put(f"/jobs/{job.id}", json={"title": "Staff Backend Engineer"}, headers=headers)
    assert updated.status_code == 200
    assert updated.json()["job"]["title"] == "Staff Backend Engineer"

    toggled = client.patch(f"/jobs/{job.id}/toggle", headers=headers)
    assert toggled.json()["job"]["is_active"] is False

    deleted = client.delete(f"/jobs/{job.id}", headers=headers)
    assert deleted.status_code == 200
    assert deleted.json()["deleted"] is True


def test_non_owner_gets_403(client, employer, other_employer, auth_headers, make_job):
    job = make_job(employer)
    headers = auth_headers(other_employer)
    assert client.put(f"/jobs/{job.id}", json={"title": "Hijacked title"}, headers=headers).status_code == 403
    assert client.delete(f"/jobs/{job.id}", headers=headers).status_code == 403
    assert client.patch(f"/jobs/{job.id}/toggle", headers=headers).status_code == 403
    assert client.get(f"/jobs/{job.id}/applications", headers=headers).status_code == 403


def test_my_jobs(client, employer, make_user, auth_headers, make_job):
    make_job(employer)
    resp = client.get("/jobs/my", headers=auth_headers(employer))
    assert resp.status_code == 200
    assert resp.json()["pagination"]["total"] == 1

    developer = make_user(Role.DEVELOPER)
    assert client.get("/jobs/my", headers=auth_headers(developer)).status_code == 403


def test_huge_page_number_returns_empty_page(client, employer, make_job):
    make_job(employer)
    resp = client.get("/jobs", params={"page": 10**19})
    assert resp.status_code == 200
    body = resp.json()
    assert body["jobs"] == []
    assert body["pagination"]["total"] == 1
    assert body["pagination"]["total_pages"] == 1
    assert body["pagination"]["has_prev_page"] is True
