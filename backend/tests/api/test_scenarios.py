"""
End-to-end flows through the whole app: login, task ownership, logout.
"""

from fastapi.testclient import TestClient

from tests.conftest import login


SESSION_COOKIE = "tasker_session"


def test_login_creates_account_and_session(client, oauth, identity_store, session_store):
    response = login(client, oauth, subject="g-1", email="a@x.com", display_name="A")

    assert response.status_code == 302
    assert len(identity_store.accounts) == 1
    assert len(session_store) == 1

    status = client.get("/auth/status").json()
    account = identity_store.get_by_subject("g-1")
    assert status["authenticated"] is True
    assert status["user"]["id"] == account.id
    assert status["user"]["email"] == "a@x.com"


def test_second_login_reuses_account(app, oauth, identity_store):
    first = TestClient(app)
    second = TestClient(app)

    login(first, oauth, code="code-1", subject="g-1", email="a@x.com")
    login(second, oauth, code="code-2", subject="g-1", email="a@x.com")

    assert len(identity_store.accounts) == 1
    assert first.get("/auth/profile").json()["user"]["id"] == second.get("/auth/profile").json()["user"]["id"]


def test_task_is_invisible_to_other_account(app, oauth):
    alice = TestClient(app)
    bob = TestClient(app)
    login(alice, oauth, code="code-a", subject="g-a", email="a@x.com")
    login(bob, oauth, code="code-b", subject="g-b", email="b@x.com")

    created = alice.post(
        "/api/tasks",
        json={"title": "T1", "description": "D", "dueDate": "2025-12-01"},
    )
    assert created.status_code == 201
    task = created.json()["data"]
    assert task["status"] == "pending"

    response = bob.get(f"/api/tasks/{task['id']}")
    assert response.status_code == 404
    assert bob.get("/api/tasks").json()["count"] == 0


def test_old_cookie_is_rejected_after_logout(auth_client):
    old_cookie = auth_client.cookies[SESSION_COOKIE]
    assert auth_client.get("/api/tasks").status_code == 200

    auth_client.get("/auth/logout")
    auth_client.cookies.set(SESSION_COOKIE, old_cookie)
    response = auth_client.get("/api/tasks")

    assert response.status_code == 401
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "INVALID_SESSION"
    assert body["redirectTo"] == "/auth/login"


def test_expired_session_is_rejected(auth_client, container, session_store):
    old_cookie = auth_client.cookies[SESSION_COOKIE]
    handle = container.session_codec.loads(old_cookie)
    binding = session_store.get(handle)
    session_store.save(binding.model_copy(update={"expires_at": binding.issued_at}))

    response = auth_client.get("/api/tasks")

    assert response.status_code == 401
    assert response.json()["error"] == "SESSION_EXPIRED"
    assert session_store.get(handle) is None


def test_deleted_account_loses_access(auth_client, identity_store):
    account = identity_store.get_by_subject("google-1")
    identity_store.remove(account.id)

    response = auth_client.get("/api/tasks")

    assert response.status_code == 401
    assert response.json()["error"] == "ACCOUNT_NOT_FOUND"
