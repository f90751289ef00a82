import os
import tempfile
from pathlib import Path

import mongomock
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import text

# Must be set before skillbridge is imported: settings and the SQL engine
# are created at import time.
TEST_DB_PATH = Path(tempfile.mkdtemp(prefix="skillbridge-tests-")) / "test.sqlite3"
os.environ["DATABASE_URL"] = f"sqlite+pysqlite:///{TEST_DB_PATH}"
os.environ["JWT_SECRET_KEY"] = "test-secret"
# Never talk to EmailJS from tests.
os.environ["EMAILJS_SERVICE_ID"] = ""
os.environ["EMAILJS_PUBLIC_KEY"] = ""
os.environ["LOG_FILE"] = ""

from skillbridge.db import mongodb  # noqa: E402
from skillbridge.db.postgres import get_db_session, init_sql_schema  # noqa: E402


@pytest.fixture()
def mongo(monkeypatch):
    """Fresh in-memory document store per test."""
    monkeypatch.setattr(mongodb, "_client", mongomock.MongoClient())
    monkeypatch.setattr(mongodb, "_db", None)
    mongodb.init_mongo_indexes()
    return mongodb.get_mongo_db()


@pytest.fixture()
def sql():
    init_sql_schema()
    with get_db_session() as db:
        db.execute(text("DELETE FROM users"))
    yield


@pytest.fixture()
def client(mongo, sql):
    from skillbridge.main import app

    return TestClient(app)


@pytest.fixture()
def sent_emails(monkeypatch):
    """Record status/welcome emails instead of sending them."""
    from skillbridge.services.notification_service import NotificationService

    sent = []

    def fake_welcome(self, to_email, user_name):
        sent.append({"template": "welcome", "to_email": to_email, "user_name": user_name})
        return True

    def fake_status(self, to_email, user_name, company_name, internship_role, application_id, status):
        sent.append({
            "template": "status",
            "to_email": to_email,
            "user_name": user_name,
            "company_name": company_name,
            "internship_role": internship_role,
            "application_id": application_id,
            "status": status
        })
        return True

    monkeypatch.setattr(NotificationService, "send_welcome_email", fake_welcome)
    monkeypatch.setattr(NotificationService, "send_status_email", fake_status)
    return sent


def signup(client, *, email, role, name="Test User", password="Testpass123!"):
    r = client.post(
        "/api/auth/signup",
        json={"email": email, "password": password, "role": role, "name": name},
    )
    assert r.status_code == 201, r.text
    return r.json()


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def student(client):
    data = signup(client, email="student@example.com", role="student", name="Asha Rao")
    return {"uid": data["uid"], "headers": auth_headers(data["access_token"])}


@pytest.fixture()
def company(client):
    data = signup(client, email="hr@acme.example.com", role="company", name="Acme Labs")
    return {"uid": data["uid"], "headers": auth_headers(data["access_token"])}


@pytest.fixture()
def evaluator(client):
    data = signup(client, email="mentor@example.com", role="evaluator", name="Mentor")
    return {"uid": data["uid"], "headers": auth_headers(data["access_token"])}
