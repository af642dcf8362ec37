"""
Job Routes

POST   /post-job                - Create job posting
GET    /jobs                    - List all jobs
GET    /jobs/employer/{userId}  - Jobs posted by one employer
GET    /jobs/{jobId}            - Get job details
PUT    /jobs/{jobId}            - Update job
DELETE /jobs/{jobId}            - Delete job (and its applications)
"""

import logging
from typing import List

from fastapi import APIRouter
from sqlalchemy import text

from app.db.postgres import get_db_session, execute_raw_sql
from app.core.errors import BadRequest, NotFound, internal_error_boundary
from app.utils.validation import is_blank, require_fields
from app.schemas.schemas import (
    JobCreate, JobUpdate, JobResponse, JobPostedResponse, MessageResponse,
    JOB_REQUIRED_FIELDS, JOB_UPDATABLE_FIELDS
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Jobs"])

JOB_INSERT_COLUMNS = JOB_UPDATABLE_FIELDS + ["user_id"]


@router.post("/post-job", response_model=JobPostedResponse)
async def post_job(job: JobCreate):
    """Create a job posting. Competition id and closing dates are optional."""
    require_fields(job, JOB_REQUIRED_FIELDS, "All fields are required.")

    with internal_error_boundary("Error posting job."):
        with get_db_session() as db:
            job_id = db.execute(
                text(f"""
                    INSERT INTO jobs ({', '.join(JOB_INSERT_COLUMNS)})
                    VALUES ({', '.join(':' + c for c in JOB_INSERT_COLUMNS)})
                    RETURNING id
                """),
                job.model_dump(mode="json", include=set(JOB_INSERT_COLUMNS))
            ).scalar_one()

            row = db.execute(
                text("SELECT * FROM jobs WHERE id = :id"), {"id": job_id}
            ).mappings().fetchone()

    logger.info("Job %s posted by user %s", job_id, job.user_id)
    return JobPostedResponse(message="Job posted successfully!", job=JobResponse.model_validate(dict(row)))


@router.get("/jobs", response_model=List[JobResponse])
async def list_jobs():
    """List every job posting."""
    with internal_error_boundary("Error fetching jobs."):
        results = execute_raw_sql("SELECT * FROM jobs ORDER BY id")
    return [JobResponse.model_validate(r) for r in results]


@router.get("/jobs/employer/{user_id}", response_model=List[JobResponse])
async def list_employer_jobs(user_id: int):
    """All jobs posted by one employer account."""
    with internal_error_boundary("Error fetching jobs."):
        results = execute_raw_sql(
            "SELECT * FROM jobs WHERE user_id = :uid ORDER BY id", {"uid": user_id}
        )
    return [JobResponse.model_validate(r) for r in results]


@router.get("/jobs/{job_id}", response_model=JobResponse)
async def get_job(job_id: int):
    """Get details of a specific job."""
    with internal_error_boundary("Error fetching job data."):
        results = execute_raw_sql("SELECT * FROM jobs WHERE id = :jid", {"jid": job_id})

    if not results:
        raise NotFound("Job not found.")
    return JobResponse.model_validate(results[0])


@router.put("/jobs/{job_id}", response_model=MessageResponse)
async def update_job(job_id: int, update: JobUpdate):
    """
    Update the fields that were sent.

    Optional fields may be cleared with null; required ones may not.
    There is no ownership check.
    """
    values = update.model_dump(mode="json", exclude_unset=True)
    if not values:
        raise BadRequest("No fields to update")
    if any(is_blank(values[f]) for f in values if f in JOB_REQUIRED_FIELDS):
        raise BadRequest("All fields are required.")

    with internal_error_boundary("Error updating job."):
        with get_db_session() as db:
            result = db.execute(
                text(f"UPDATE jobs SET {', '.join(f'{f} = :{f}' for f in values)} WHERE id = :jid"),
                {**values, "jid": job_id}
            )
            if result.rowcount == 0:
                raise NotFound("Job not found.")

    return MessageResponse(message="Job updated successfully!")


@router.delete("/jobs/{job_id}", response_model=MessageResponse)
async def delete_job(job_id: int):
    """Delete a job posting together with its applications."""
    with internal_error_boundary("Error deleting job."):
        with get_db_session() as db:
            db.execute(text("DELETE FROM applications WHERE job_id = :jid"), {"jid": job_id})
            result = db.execute(text("DELETE FROM jobs WHERE id = :jid"), {"jid": job_id})
            if result.rowcount == 0:
                raise NotFound("Job not found.")

    logger.info("Job %s deleted", job_id)
    return MessageResponse(message="Job deleted successfully!")
