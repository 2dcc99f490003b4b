"""Tests de l'API FastAPI (SQLite en mémoire, dépendances surchargées)."""

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app import app
from application.services.task_service import TaskService
from domain.repositories.errors import RepositoryError
from infrastructure.database.init_db import init_db
from infrastructure.database.session import create_db_engine
from infrastructure.dependencies import get_db, get_jwt_service, get_task_service
from infrastructure.security.jwt_service import JWTService

PASSWORD = "longenough1"


@pytest.fixture
def client():
    engine = create_db_engine("sqlite://", poolclass=StaticPool)
    init_db(engine)
    testing_session = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    jwt_service = JWTService(secret_key="api-test-secret", issuer="taskery-api")

    def override_get_db():
        db = testing_session()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_jwt_service] = lambda: jwt_service
    yield TestClient(app)
    app.dependency_overrides.clear()
    engine.dispose()


def _register(client, username="alice", email="alice@x.com", password=PASSWORD):
    return client.post("/api/auth/register", json={
        "username": username, "email": email, "password": password
    })


def _login_headers(client, email="alice@x.com", password=PASSWORD) -> dict:
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def auth(client) -> dict:
    assert _register(client).status_code == 201
    return _login_headers(client)


def _future(days: int = 1) -> str:
    return (datetime.now(timezone.utc) + timedelta(days=days)).isoformat()

# ============================================================================
# SERVICE
# ============================================================================

def test_root_endpoint_returns_service_info(client):
    response = client.get("/")
    assert response.status_code == 200

    data = response.json()
    assert data.get("service") == "taskery-api"
    assert data.get("status") == "operational"


def test_health_check_endpoint_ok(client):
    response = client.get("/health")
    assert response.status_code == 200

    data = response.json()
    assert data.get("status") == "healthy"
    assert data.get("service") == "taskery-api"

# ============================================================================
# AUTHENTIFICATION
# ============================================================================

def test_register_and_login(client):
    response = _register(client)
    assert response.status_code == 201
    body = response.json()
    assert body["username"] == "alice"
    assert body["email"] == "alice@x.com"
    assert "password" not in body and "password_hash" not in body

    assert _register(client, username="other").status_code == 409

    response = client.post("/api/auth/login", json={"email": "alice@x.com", "password": PASSWORD})
    assert response.status_code == 200
    assert response.json()["token_type"] == "bearer"
    assert response.json()["access_token"]


def test_register_validation_error(client):
    response = _register(client, password="short")
    assert response.status_code == 400
    assert response.json()["field"] == "password"


def test_register_malformed_payload(client):
    response = client.post("/api/auth/register", json={"username": "alice"})
    assert response.status_code == 400
    fields = {d["field"] for d in response.json()["details"]}
    assert "body.email" in fields


def test_login_failures_are_indistinguishable(client):
    _register(client)

    wrong_password = client.post("/api/auth/login", json={"email": "alice@x.com", "password": "wrong"})
    unknown_user = client.post("/api/auth/login", json={"email": "ghost@x.com", "password": PASSWORD})

    assert wrong_password.status_code == unknown_user.status_code == 401
    assert wrong_password.json() == unknown_user.json() == {"error": "invalid credentials"}

# ============================================================================
# COMPTE UTILISATEUR
# ============================================================================

def test_me_requires_authentication(client):
    assert client.get("/api/users/me").status_code == 401
    response = client.get("/api/users/me", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == 401


def test_read_me(client, auth):
    response = client.get("/api/users/me", headers=auth)
    assert response.status_code == 200
    assert response.json()["email"] == "alice@x.com"


def test_update_me(client, auth):
    response = client.patch("/api/users/me", headers=auth, json={
        "username": "alicia", "email": "alicia@x.com", "password": PASSWORD
    })
    assert response.status_code == 200
    assert response.json()["username"] == "alicia"
    assert response.json()["email"] == "alicia@x.com"


def test_update_me_conflicts_and_errors(client, auth):
    _register(client, username="bob", email="bob@x.com")

    response = client.patch("/api/users/me", headers=auth, json={"email": "bob@x.com", "password": PASSWORD})
    assert response.status_code == 409

    response = client.patch("/api/users/me", headers=auth, json={"username": "alicia", "password": "wrong-pass"})
    assert response.status_code == 401

    response = client.patch("/api/users/me", headers=auth, json={"password": PASSWORD})
    assert response.status_code == 400


def test_update_me_with_taken_email_keeps_username(client, auth):
    _register(client, username="bob", email="bob@x.com")

    response = client.patch("/api/users/me", headers=auth, json={
        "username": "alicia", "email": "bob@x.com", "password": PASSWORD
    })
    assert response.status_code == 409

    me = client.get("/api/users/me", headers=auth).json()
    assert me["username"] == "alice"
    assert me["email"] == "alice@x.com"


def test_change_password(client, auth):
    response = client.put("/api/users/me/password", headers=auth, json={
        "old_password": PASSWORD, "new_password": "a-new-password"
    })
    assert response.status_code == 204

    _login_headers(client, password="a-new-password")
    response = client.post("/api/auth/login", json={"email": "alice@x.com", "password": PASSWORD})
    assert response.status_code == 401


def test_delete_me_removes_tasks(client, auth):
    task_id = client.post("/api/tasks", headers=auth, json={"title": "T"}).json()["id"]

    response = client.request("DELETE", "/api/users/me", headers=auth, json={"password": PASSWORD})
    assert response.status_code == 204

    assert client.get("/api/users/me", headers=auth).status_code == 404
    assert client.get(f"/api/tasks/{task_id}", headers=auth).status_code == 404

# ============================================================================
# TÂCHES
# ============================================================================

def test_task_lifecycle(client, auth):
    response = client.post("/api/tasks", headers=auth, json={"title": "T", "description": "first"})
    assert response.status_code == 201
    task = response.json()
    assert task["is_completed"] is False
    assert task["deadline"] is None
    assert task["is_overdue"] is False

    task_id = task["id"]
    response = client.put(f"/api/tasks/{task_id}/title", headers=auth, json={"title": "New title"})
    assert response.json()["title"] == "New title"

    response = client.put(f"/api/tasks/{task_id}/description", headers=auth, json={"description": "second"})
    assert response.json()["description"] == "second"

    response = client.put(f"/api/tasks/{task_id}/deadline", headers=auth, json={"deadline": _future()})
    assert response.status_code == 200
    assert response.json()["deadline"] is not None

    response = client.delete(f"/api/tasks/{task_id}/deadline", headers=auth)
    assert response.json()["deadline"] is None

    response = client.post(f"/api/tasks/{task_id}/complete", headers=auth)
    completed_at = response.json()["completed_at"]
    assert response.json()["is_completed"] is True
    assert completed_at is not None

    response = client.post(f"/api/tasks/{task_id}/complete", headers=auth)
    assert response.json()["completed_at"] == completed_at

    response = client.post(f"/api/tasks/{task_id}/reopen", headers=auth)
    assert response.json()["is_completed"] is False
    assert response.json()["completed_at"] is None

    assert client.delete(f"/api/tasks/{task_id}", headers=auth).status_code == 204
    assert client.get(f"/api/tasks/{task_id}", headers=auth).status_code == 404


def test_list_tasks(client, auth):
    client.post("/api/tasks", headers=auth, json={"title": "One"})
    client.post("/api/tasks", headers=auth, json={"title": "Two", "deadline": _future(2)})

    response = client.get("/api/tasks", headers=auth)
    assert response.status_code == 200
    assert sorted(t["title"] for t in response.json()) == ["One", "Two"]


def test_task_validation_errors(client, auth):
    response = client.post("/api/tasks", headers=auth, json={"title": "   "})
    assert response.status_code == 400
    assert response.json()["field"] == "title"

    past = (datetime.now(timezone.utc) - timedelta(hours=1)).isoformat()
    response = client.post("/api/tasks", headers=auth, json={"title": "T", "deadline": past})
    assert response.status_code == 400
    assert response.json()["field"] == "deadline"


def test_task_of_another_user_is_forbidden(client, auth):
    task_id = client.post("/api/tasks", headers=auth, json={"title": "T"}).json()["id"]

    _register(client, username="bob", email="bob@x.com")
    bob = _login_headers(client, email="bob@x.com")

    assert client.get(f"/api/tasks/{task_id}", headers=bob).status_code == 403
    assert client.put(f"/api/tasks/{task_id}/title", headers=bob, json={"title": "x"}).status_code == 403
    assert client.delete(f"/api/tasks/{task_id}", headers=bob).status_code == 403
    assert client.get("/api/tasks", headers=bob).json() == []


def test_unknown_task(client, auth):
    response = client.get(f"/api/tasks/{uuid.uuid4()}", headers=auth)
    assert response.status_code == 404
    assert response.json() == {"error": "task was not found"}


def test_storage_failure_does_not_leak_details(client, auth):
    class BrokenTaskRepository:
        def find_by_owner(self, owner_id):
            raise RepositoryError("password=hunter2 connection refused")

    app.dependency_overrides[get_task_service] = lambda: TaskService(BrokenTaskRepository())

    response = client.get("/api/tasks", headers=auth)
    assert response.status_code == 500
    assert response.json() == {"error": "internal server error"}
