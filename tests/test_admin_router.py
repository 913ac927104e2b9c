import jobboard.routers.admin as admin_mod


def test_admin_routes_require_admin(client, employer, auth_headers):
    assert client.get("/admin/stats").status_code == 401
    resp = client.get("/admin/stats", headers=auth_headers(employer))
    assert resp.status_code == 403
    assert resp.json()["detail"] == "Admin access required"


def test_stats(client, admin, employer, auth_headers, make_job):
    make_job(employer)
    resp = client.get("/admin/stats", headers=auth_headers(admin))
    assert resp.status_code == 200
    assert resp.json() == {"users": 2, "jobs": 1, "jobs_active": 1, "applications": 0, "admins": 1}


def test_stats_failure_returns_500(monkeypatch, client, admin, auth_headers):
    monkeypatch.setattr(admin_mod, "get_stats", lambda db: (_ for _ in ()).throw(RuntimeError("boom")))
    resp = client.get("/admin/stats", headers=auth_headers(admin))
    assert resp.status_code == 500
    assert "Failed to load admin stats" in resp.json()["detail"]


def test_user_management(client, admin, developer, auth_headers):
    headers = auth_headers(admin)

    listed = client.get("/admin/users", params={"search": developer.email}, headers=headers)
    assert listed.status_code == 200
    assert [u["id"] for u in listed.json()["users"]] == [developer.id]

    role = client.patch(f"/admin/users/{developer.id}/role", json={"role": "EMPLOYER"}, headers=headers)
    assert role.status_code == 200
    assert role.json()["user"]["role"] == "EMPLOYER"

    demote_self = client.patch(f"/admin/users/{admin.id}/role", json={"role": "DEVELOPER"}, headers=headers)
    assert demote_self.status_code == 400

    bad_role = client.patch(f"/admin/users/{developer.id}/role", json={"role": "OWNER"}, headers=headers)
    assert bad_role.status_code == 400

    assert client.delete(f"/admin/users/{developer.id}", headers=headers).status_code == 200
    assert client.delete(f"/admin/users/{developer.id}", headers=headers).status_code == 404


def test_role_change_applies_on_next_request(client, admin, developer, auth_headers):
    client.patch(f"/admin/users/{developer.id}/role", json={"role": "EMPLOYER"}, headers=auth_headers(admin))
    resp = client.get("/jobs/my", headers=auth_headers(developer))
    assert resp.status_code == 200


def test_delete_user_with_jobs_conflicts(client, admin, employer, auth_headers, make_job):
    make_job(employer)
    resp = client.delete(f"/admin/users/{employer.id}", headers=auth_headers(admin))
    assert resp.status_code == 409


def test_job_moderation_and_delete(client, db, identity_of, admin, employer, developer, auth_headers, make_job):
    from jobboard.services import application_service

    headers = auth_headers(admin)
    job = make_job(employer)
    application_service.apply(db, identity_of(developer), {"job_id": job.id})

    hidden = client.patch(f"/admin/jobs/{job.id}/moderate", json={"is_active": False}, headers=headers)
    assert hidden.status_code == 200
    assert hidden.json()["job"]["is_active"] is False

    listed = client.get("/admin/jobs", headers=headers)
    assert listed.json()["pagination"]["total"] == 1

    blocked = client.delete(f"/admin/jobs/{job.id}", headers=headers)
    assert blocked.status_code == 409
    assert blocked.json()["reason"] == "HAS_APPLICATIONS"

    apps = client.get("/admin/applications", params={"status": "PENDING"}, headers=headers)
    assert apps.json()["pagination"]["total"] == 1


def test_user_listing_past_the_end(client, admin, auth_headers):
    resp = client.get("/admin/users", params={"page": 10**19}, headers=auth_headers(admin))
    assert resp.status_code == 200
    assert resp.json()["users"] == []
    assert resp.json()["pagination"]["total"] == 1
