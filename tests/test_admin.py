from app.models.enums import UserRole
from conftest import seed_user


def admin_headers(client, db_session):
    seed_user(db_session, email="root@example.com", username="root", role=UserRole.ADMIN)
    resp = client.post("/auth/login", json={"email": "root@example.com", "password": "correct-password"})
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


def test_admin_routes_require_admin(client, db_session):
    member = seed_user(db_session)
    resp = client.post("/auth/login", json={"email": member.email, "password": "correct-password"})
    headers = {"Authorization": f"Bearer {resp.json()['access_token']}"}

    assert client.get("/admin/users").status_code == 401
    assert client.get("/admin/users", headers=headers).status_code == 403


def test_toggle_blocked_twice(client, db_session):
    headers = admin_headers(client, db_session)
    member = seed_user(db_session)

    resp = client.post(f"/admin/users/{member.user_id}/toggle-blocked", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["blocked"] is True
    assert resp.json()["activated"] is True

    resp = client.post(f"/admin/users/{member.user_id}/toggle-blocked", headers=headers)
    assert resp.json()["blocked"] is False


def test_toggle_verified(client, db_session):
    headers = admin_headers(client, db_session)
    member = seed_user(db_session)

    resp = client.post(f"/admin/users/{member.user_id}/toggle-verified", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["verified"] is True


def test_toggle_unknown_user(client, db_session):
    headers = admin_headers(client, db_session)
    resp = client.post("/admin/users/999/toggle-blocked", headers=headers)
    assert resp.status_code == 404
    assert resp.json()["kind"] == "NOT_FOUND"


def test_list_and_count_users(client, db_session):
    headers = admin_headers(client, db_session)
    seed_user(db_session)
    seed_user(db_session, email="carol@example.com", username="carol", activated=False)

    resp = client.get("/admin/users", params={"page_index": 1, "page_size": 2}, headers=headers)
    assert resp.status_code == 200
    body = resp.json()
    assert body["total_count"] == 3
    assert len(body["users"]) == 2

    resp = client.get("/admin/users", params={"page_index": 2, "page_size": 2}, headers=headers)
    assert len(resp.json()["users"]) == 1

    resp = client.get("/admin/users/count", params={"activated": "false"}, headers=headers)
    assert resp.json() == {"count": 1}


def test_blocked_user_token_is_rejected(client, db_session):
    headers = admin_headers(client, db_session)
    member = seed_user(db_session)
    resp = client.post("/auth/login", json={"email": member.email, "password": "correct-password"})
    member_headers = {"Authorization": f"Bearer {resp.json()['access_token']}"}

    client.post(f"/admin/users/{member.user_id}/toggle-blocked", headers=headers)
    assert client.get("/auth/me", headers=member_headers).status_code == 401
