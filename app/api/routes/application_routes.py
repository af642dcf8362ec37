"""
Application Routes

POST  /apply-job/{jobId}                  - Apply (multipart: formData JSON, resume, coverLetter)
GET   /applications/job/{jobId}?userId=   - Applications for a job owned by userId
GET   /applications/{applicationId}       - One application (?userId= restricts to owner)
PATCH /applications/{applicationId}/status - Set Pending/Accepted/Rejected
GET   /applied-jobs?userId=               - Jobs a user has applied to
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, File, Form, Query, UploadFile
from pydantic import ValidationError
from sqlalchemy import text

from app.db.postgres import get_db_session, execute_raw_sql
from app.core.errors import BadRequest, NotFound, internal_error_boundary
from app.services.blob_storage import upload_file
from app.utils.file_upload import read_upload
from app.utils.validation import is_blank, require_fields
from app.schemas.schemas import (
    ApplicationForm, ApplicationResponse, ApplicationSubmitted, ApplicationStatus,
    ApplicationStatusUpdate, AppliedJobResponse, MessageResponse,
    APPLICATION_REQUIRED_FIELDS
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Applications"])


async def _store_optional(file: Optional[UploadFile]) -> Optional[str]:
    upload = await read_upload(file)
    return await upload_file(*upload) if upload else None


@router.post("/apply-job/{job_id}", response_model=ApplicationSubmitted)
async def apply_to_job(
    job_id: int,
    form_data: Optional[str] = Form(None, alias="formData"),
    resume: Optional[UploadFile] = File(None),
    cover_letter: Optional[UploadFile] = File(None, alias="coverLetter")
):
    """
    Submit an application.

    Applicant fields arrive as a JSON document in `formData`. Resume and
    cover letter are optional and uploaded separately. A `userId` in
    formData links the application to an account for /applied-jobs; an
    unknown job or user is a 404 before any file is uploaded.
    """
    if is_blank(form_data):
        raise BadRequest("Missing required fields.")
    try:
        application = ApplicationForm.model_validate_json(form_data)
    except ValidationError:
        raise BadRequest("Invalid application form data.")
    require_fields(application, APPLICATION_REQUIRED_FIELDS, "Missing required fields.")

    with internal_error_boundary("Error applying for job."):
        if not execute_raw_sql("SELECT id FROM jobs WHERE id = :jid", {"jid": job_id}):
            raise NotFound("Job not found.")
        if application.user_id is not None and not execute_raw_sql(
            "SELECT id FROM users WHERE id = :uid", {"uid": application.user_id}
        ):
            raise NotFound("User not found.")

        resume_path = await _store_optional(resume)
        cover_letter_path = await _store_optional(cover_letter)

        with get_db_session() as db:
            application_id = db.execute(
                text("""
                    INSERT INTO applications (job_id, user_id, first_name, last_name, email, phone_number,
                        address, position, desired_compensation, resume_path, cover_letter_path, status)
                    VALUES (:job_id, :user_id, :first_name, :last_name, :email, :phone_number,
                        :address, :position, :desired_compensation, :resume_path, :cover_letter_path, :status)
                    RETURNING id
                """),
                {
                    **application.model_dump(),
                    "job_id": job_id,
                    "resume_path": resume_path,
                    "cover_letter_path": cover_letter_path,
                    "status": ApplicationStatus.pending.value
                }
            ).scalar_one()

    logger.info("Application %s submitted for job %s", application_id, job_id)
    return ApplicationSubmitted(message="Application submitted successfully!", application_id=application_id)


@router.get("/applications/job/{job_id}", response_model=List[ApplicationResponse])
async def list_job_applications(job_id: int, user_id: Optional[int] = Query(None, alias="userId")):
    """
    Applications for a job, only if the job was posted by userId.

    An unknown job, a job with no applications and a job owned by
    someone else all answer 404.
    """
    if user_id is None:
        raise BadRequest("Job ID and User ID are required.")

    with internal_error_boundary("Internal server error while fetching applications."):
        results = execute_raw_sql("""
            SELECT a.* FROM applications a
            JOIN jobs j ON a.job_id = j.id
            WHERE a.job_id = :jid AND j.user_id = :uid
            ORDER BY a.id
        """, {"jid": job_id, "uid": user_id})

    if not results:
        raise NotFound("No applications found for this job.")
    return [ApplicationResponse.model_validate(r) for r in results]


@router.get("/applications/{application_id}", response_model=ApplicationResponse)
async def get_application(application_id: int, user_id: Optional[int] = Query(None, alias="userId")):
    """Get one application; with ?userId= only if that user owns the job."""
    sql = """
        SELECT a.* FROM applications a
        JOIN jobs j ON a.job_id = j.id
        WHERE a.id = :aid
    """
    params = {"aid": application_id}
    if user_id is not None:
        sql += " AND j.user_id = :uid"
        params["uid"] = user_id

    with internal_error_boundary("Internal server error while fetching application details."):
        results = execute_raw_sql(sql, params)

    if not results:
        raise NotFound("Application not found.")
    return ApplicationResponse.model_validate(results[0])


@router.patch("/applications/{application_id}/status", response_model=MessageResponse)
async def update_application_status(application_id: int, update: ApplicationStatusUpdate):
    """Move an application to Pending, Accepted or Rejected."""
    try:
        new_status = ApplicationStatus(update.status)
    except ValueError:
        raise BadRequest("Invalid status value.")

    with internal_error_boundary("Error updating application status."):
        with get_db_session() as db:
            result = db.execute(
                text("UPDATE applications SET status = :status WHERE id = :aid"),
                {"status": new_status.value, "aid": application_id}
            )
            if result.rowcount == 0:
                raise NotFound("Application not found.")

    return MessageResponse(message="Application status updated successfully!")


@router.get("/applied-jobs", response_model=List[AppliedJobResponse])
async def list_applied_jobs(user_id: Optional[int] = Query(None, alias="userId")):
    """Jobs the user applied to while signed in (applications carrying their userId)."""
    if user_id is None:
        raise BadRequest("User ID is required.")

    with internal_error_boundary("Error fetching applied jobs."):
        results = execute_raw_sql("""
            SELECT j.id AS job_id, j.job_title, j.company_name, j.job_location,
                   a.resume_path, a.cover_letter_path, a.apply_date, a.status
            FROM applications a
            JOIN jobs j ON a.job_id = j.id
            WHERE a.user_id = :uid
            ORDER BY a.apply_date DESC, a.id DESC
        """, {"uid": user_id})

    return [AppliedJobResponse.model_validate(r) for r in results]
