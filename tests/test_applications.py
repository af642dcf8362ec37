import json
import os

import pytest
from sqlalchemy import text

from app.db.postgres import get_db_session


APPLICANT = {
    "firstName": "Ada",
    "lastName": "Lovelace",
    "email": "ada@b.com",
    "phoneNumber": "555-0100",
    "address": "12 Engine Rd",
    "position": "Analyst",
    "desiredCompensation": "70000",
}


@pytest.fixture
def apply(client):
    def _apply(job_id, form=None, files=None):
        data = {"formData": json.dumps(APPLICANT if form is None else form)}
        return client.post(f"/apply-job/{job_id}", data=data, files=files)
    return _apply


@pytest.fixture
def application_id(apply, posted_job):
    response = apply(posted_job["id"])
    assert response.status_code == 200, response.text
    return response.json()["applicationId"]


def test_apply_without_files(client, apply, posted_job, employer):
    response = apply(posted_job["id"])
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Application submitted successfully!"

    stored = client.get(f"/applications/{body['applicationId']}").json()
    assert stored["status"] == "Pending"
    assert stored["jobId"] == posted_job["id"]
    assert stored["resumePath"] is None
    assert stored["coverLetterPath"] is None
    for key, value in APPLICANT.items():
        assert stored[key] == value


def test_apply_with_files(client, apply, posted_job):
    response = apply(posted_job["id"], files={
        "resume": ("cv.pdf", b"%PDF-resume", "application/pdf"),
        "coverLetter": ("letter.txt", b"Dear hiring manager", "text/plain"),
    })
    assert response.status_code == 200

    stored = client.get(f"/applications/{response.json()['applicationId']}").json()
    assert stored["resumePath"].endswith("cv.pdf")
    assert stored["coverLetterPath"].endswith("letter.txt")
    assert stored["resumePath"] != stored["coverLetterPath"]
    assert client.get(stored["resumePath"]).content == b"%PDF-resume"


def test_numeric_compensation_is_accepted(client, apply, posted_job):
    response = apply(posted_job["id"], form={**APPLICANT, "desiredCompensation": 70000})
    assert response.status_code == 200
    stored = client.get(f"/applications/{response.json()['applicationId']}").json()
    assert stored["desiredCompensation"] == "70000"


@pytest.mark.parametrize("field", list(APPLICANT))
def test_apply_missing_field(apply, posted_job, field):
    form = {k: v for k, v in APPLICANT.items() if k != field}
    response = apply(posted_job["id"], form=form)
    assert response.status_code == 400
    assert response.json() == {"message": "Missing required fields."}


def test_apply_without_form_data(client, posted_job):
    response = client.post(f"/apply-job/{posted_job['id']}", data={})
    assert response.status_code == 400


def test_apply_with_malformed_form_data(client, posted_job):
    response = client.post(f"/apply-job/{posted_job['id']}", data={"formData": "{not json"})
    assert response.status_code == 400
    assert response.json() == {"message": "Invalid application form data."}


def test_apply_to_missing_job(apply):
    response = apply(999)
    assert response.status_code == 404


def test_list_applications_for_owner(client, apply, posted_job, employer):
    apply(posted_job["id"])
    apply(posted_job["id"], form={**APPLICANT, "firstName": "Grace"})

    response = client.get(f"/applications/job/{posted_job['id']}", params={"userId": employer["userId"]})
    assert response.status_code == 200
    assert [a["firstName"] for a in response.json()] == ["Ada", "Grace"]


def test_list_applications_requires_user_id(client, posted_job):
    response = client.get(f"/applications/job/{posted_job['id']}")
    assert response.status_code == 400
    assert response.json() == {"message": "Job ID and User ID are required."}


def test_list_applications_not_owner_or_empty(client, signup, apply, posted_job, employer):
    # no applications yet
    response = client.get(f"/applications/job/{posted_job['id']}", params={"userId": employer["userId"]})
    assert response.status_code == 404
    assert response.json() == {"message": "No applications found for this job."}

    apply(posted_job["id"])
    stranger = signup(email="stranger@b.com", user_type="employer", companyName="Rival")
    response = client.get(f"/applications/job/{posted_job['id']}", params={"userId": stranger["userId"]})
    assert response.status_code == 404


def test_get_application_ownership_is_optional(client, signup, application_id, employer):
    assert client.get(f"/applications/{application_id}").status_code == 200
    assert client.get(
        f"/applications/{application_id}", params={"userId": employer["userId"]}
    ).status_code == 200

    stranger = signup(email="stranger@b.com", user_type="employer", companyName="Rival")
    response = client.get(f"/applications/{application_id}", params={"userId": stranger["userId"]})
    assert response.status_code == 404
    assert response.json() == {"message": "Application not found."}


def test_update_status(client, application_id):
    response = client.patch(f"/applications/{application_id}/status", json={"status": "Accepted"})
    assert response.status_code == 200
    assert response.json() == {"message": "Application status updated successfully!"}
    assert client.get(f"/applications/{application_id}").json()["status"] == "Accepted"


@pytest.mark.parametrize("status", ["accepted", "Hired", "", None])
def test_invalid_status_leaves_application_unchanged(client, application_id, status):
    response = client.patch(f"/applications/{application_id}/status", json={"status": status})
    assert response.status_code == 400
    assert response.json() == {"message": "Invalid status value."}
    assert client.get(f"/applications/{application_id}").json()["status"] == "Pending"


def test_update_status_of_missing_application(client):
    response = client.patch("/applications/999/status", json={"status": "Rejected"})
    assert response.status_code == 404


def test_applied_jobs_for_user(client, signup, apply, posted_job):
    student = signup(email="ada@b.com", fullName="Ada")
    apply(posted_job["id"], form={**APPLICANT, "userId": student["userId"]})
    apply(posted_job["id"])  # anonymous application

    response = client.get("/applied-jobs", params={"userId": student["userId"]})
    assert response.status_code == 200
    rows = response.json()
    assert len(rows) == 1
    assert rows[0]["jobId"] == posted_job["id"]
    assert rows[0]["jobTitle"] == posted_job["jobTitle"]
    assert rows[0]["companyName"] == posted_job["companyName"]
    assert rows[0]["jobLocation"] == posted_job["jobLocation"]
    assert rows[0]["status"] == "Pending"


def test_applied_jobs_requires_user_id(client):
    response = client.get("/applied-jobs")
    assert response.status_code == 400
    assert response.json() == {"message": "User ID is required."}


def test_deleting_job_removes_its_applications(client, application_id, posted_job):
    client.delete(f"/jobs/{posted_job['id']}")
    assert client.get(f"/applications/{application_id}").status_code == 404


def test_oversized_upload_is_rejected(client, apply, posted_job, monkeypatch):
    from app.core.config import get_settings

    monkeypatch.setattr(get_settings(), "max_upload_size_mb", 0)
    response = apply(posted_job["id"], files={"resume": ("cv.pdf", b"x", "application/pdf")})
    assert response.status_code == 413
    assert response.json()["message"].startswith("File too large")


def test_apply_with_unknown_user_is_not_found(client, apply, posted_job):
    from app.core.config import get_settings

    upload_dir = get_settings().upload_dir
    before = set(os.listdir(upload_dir)) if os.path.isdir(upload_dir) else set()

    response = apply(
        posted_job["id"],
        form={**APPLICANT, "userId": 999},
        files={"resume": ("cv.pdf", b"%PDF-resume", "application/pdf")},
    )
    assert response.status_code == 404
    assert response.json() == {"message": "User not found."}

    after = set(os.listdir(upload_dir)) if os.path.isdir(upload_dir) else set()
    assert after == before
    with get_db_session() as db:
        assert db.execute(text("SELECT COUNT(*) FROM applications")).scalar() == 0


def test_apply_with_known_user_links_application(client, signup, apply, posted_job):
    student = signup(email="s@b.com", fullName="Stu")
    response = apply(posted_job["id"], form={**APPLICANT, "userId": student["userId"]})
    assert response.status_code == 200

    stored = client.get(f"/applications/{response.json()['applicationId']}").json()
    assert stored["userId"] == student["userId"]
