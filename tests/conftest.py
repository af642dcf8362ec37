import os
import tempfile

# Settings are read once at import time, so configure before importing app
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["STORAGE_BACKEND"] = "local"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="jobboard-uploads-")
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["DEBUG"] = "false"

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.db.postgres import engine
from app.db.schema import drop_schema, init_schema
from app.services.blob_storage import reset_blob_storage


@pytest.fixture(autouse=True)
def fresh_database():
    drop_schema(engine)
    init_schema(engine)
    reset_blob_storage()
    yield
    reset_blob_storage()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def signup(client):
    """POST /signup and return the JSON body."""
    def _signup(email="a@b.com", password="x", user_type="student", **fields):
        data = {"email": email, "password": password, "userType": user_type, **fields}
        response = client.post("/signup", data=data)
        assert response.status_code == 200, response.text
        return response.json()
    return _signup


@pytest.fixture
def job_payload():
    def _payload(user_id, **overrides):
        payload = {
            "jobTitle": "Data Analyst",
            "numPeople": 2,
            "jobLocation": "Ottawa",
            "streetAddress": "1 Main St",
            "jobDescription": "Analyse data.",
            "competitionId": "C-100",
            "internalClosingDate": "2026-11-01",
            "externalClosingDate": "2026-11-15",
            "payLevel": "EC-04",
            "employmentType": "Full-time",
            "travelFrequency": "Rarely",
            "jobCategory": "IT",
            "companyName": "Acme",
            "contactInformation": "hr@acme.com",
            "userId": user_id,
        }
        payload.update(overrides)
        return payload
    return _payload


@pytest.fixture
def employer(signup):
    return signup(email="boss@acme.com", user_type="employer", companyName="Acme")


@pytest.fixture
def posted_job(client, employer, job_payload):
    response = client.post("/post-job", json=job_payload(employer["userId"]))
    assert response.status_code == 200, response.text
    return response.json()["job"]
