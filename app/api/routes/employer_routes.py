"""
Employer Directory Routes

GET /employers              - All employers with contact email
GET /employers/{employerId} - One employer, looked up by user id
"""

from typing import List

from fastapi import APIRouter

from app.db.postgres import execute_raw_sql
from app.core.errors import NotFound, internal_error_boundary
from app.schemas.schemas import EmployerResponse

router = APIRouter(prefix="/employers", tags=["Employers"])

EMPLOYER_SQL = """
    SELECT e.id, e.user_id, e.company_name, u.email
    FROM employers e
    JOIN users u ON e.user_id = u.id
"""


@router.get("", response_model=List[EmployerResponse])
async def list_employers():
    with internal_error_boundary("Error fetching employers."):
        results = execute_raw_sql(EMPLOYER_SQL + " ORDER BY e.id")
    return [EmployerResponse.model_validate(r) for r in results]


@router.get("/{employer_id}", response_model=EmployerResponse)
async def get_employer(employer_id: int):
    """`employer_id` is the employer's user id."""
    with internal_error_boundary("Error fetching employer details."):
        results = execute_raw_sql(EMPLOYER_SQL + " WHERE e.user_id = :uid", {"uid": employer_id})

    if not results:
        raise NotFound("Employer not found.")
    return EmployerResponse.model_validate(results[0])
