"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
Python attributes are snake_case (matching the table columns); the JSON
contract is camelCase.
"""

from pydantic import BaseModel, ConfigDict, PositiveInt
from pydantic.alias_generators import to_camel
from typing import Optional
from datetime import date, datetime
from enum import Enum


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True
    )


# ============================================================
# ENUMS
# ============================================================

class UserType(str, Enum):
    student = "student"
    employer = "employer"
    admin = "admin"

    @property
    def profile(self) -> "ProfileTable":
        return PROFILE_TABLES[self]


class ApplicationStatus(str, Enum):
    pending = "Pending"
    accepted = "Accepted"
    rejected = "Rejected"


class ProfileTable:
    """Where a user type keeps its display name."""

    def __init__(self, table: str, column: str, field: str):
        self.table = table
        self.column = column
        self.field = field  # JSON key in the signup response


PROFILE_TABLES = {
    UserType.student: ProfileTable("students", "full_name", "fullName"),
    UserType.employer: ProfileTable("employers", "company_name", "companyName"),
    UserType.admin: ProfileTable("admins", "admin_name", "adminName"),
}


# ============================================================
# AUTH / PROFILE SCHEMAS
# ============================================================

class LoginRequest(CamelModel):
    email: str
    password: str
    user_type: str

class LoginResponse(CamelModel):
    user_id: int
    user_type: UserType
    name: Optional[str] = None

class ProfileResponse(CamelModel):
    user_id: int
    email: str
    user_type: UserType
    address: Optional[str] = None
    phone: Optional[str] = None
    profile_picture_url: Optional[str] = None
    name: Optional[str] = None

class ProfileUpdate(CamelModel):
    name: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None


# ============================================================
# JOB SCHEMAS
# ============================================================

class JobFields(CamelModel):
    job_title: Optional[str] = None
    num_people: Optional[PositiveInt] = None
    job_location: Optional[str] = None
    street_address: Optional[str] = None
    job_description: Optional[str] = None
    competition_id: Optional[str] = None
    internal_closing_date: Optional[date] = None
    external_closing_date: Optional[date] = None
    pay_level: Optional[str] = None
    employment_type: Optional[str] = None
    travel_frequency: Optional[str] = None
    job_category: Optional[str] = None
    company_name: Optional[str] = None
    contact_information: Optional[str] = None

class JobCreate(JobFields):
    user_id: Optional[int] = None

class JobUpdate(JobFields):
    pass

class JobResponse(JobFields):
    id: int
    user_id: int
    created_at: Optional[datetime] = None

class JobPostedResponse(CamelModel):
    message: str
    job: JobResponse

JOB_REQUIRED_FIELDS = [
    "job_title", "num_people", "job_location", "street_address", "job_description",
    "pay_level", "employment_type", "travel_frequency", "job_category",
    "company_name", "contact_information", "user_id"
]

# Columns a PUT may touch; user_id (the owner) is fixed at creation
JOB_UPDATABLE_FIELDS = list(JobFields.model_fields)


# ============================================================
# APPLICATION SCHEMAS
# ============================================================

class ApplicationForm(CamelModel):
    """The JSON document sent in the `formData` multipart field."""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    address: Optional[str] = None
    position: Optional[str] = None
    desired_compensation: Optional[str] = None
    user_id: Optional[int] = None

APPLICATION_REQUIRED_FIELDS = [
    "first_name", "last_name", "email", "phone_number", "address",
    "position", "desired_compensation"
]

class ApplicationResponse(CamelModel):
    id: int
    job_id: int
    user_id: Optional[int] = None
    first_name: str
    last_name: str
    email: str
    phone_number: str
    address: str
    position: str
    desired_compensation: str
    resume_path: Optional[str] = None
    cover_letter_path: Optional[str] = None
    status: ApplicationStatus
    apply_date: Optional[datetime] = None

class ApplicationSubmitted(CamelModel):
    message: str
    application_id: int

class ApplicationStatusUpdate(CamelModel):
    status: Optional[str] = None

class AppliedJobResponse(CamelModel):
    job_id: int
    job_title: str
    company_name: str
    job_location: str
    resume_path: Optional[str] = None
    cover_letter_path: Optional[str] = None
    apply_date: Optional[datetime] = None
    status: ApplicationStatus


# ============================================================
# EMPLOYER / COURSE / ADMIN SCHEMAS
# ============================================================

class EmployerResponse(CamelModel):
    id: int
    user_id: int
    company_name: Optional[str] = None
    email: str

class CourseCreate(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None

class CourseResponse(CamelModel):
    id: int
    title: str
    description: Optional[str] = None
    category: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None

class CourseCreated(CamelModel):
    message: str
    course_id: int

class UserStatsResponse(CamelModel):
    students: int
    employers: int
    admins: int

class ActiveCoursesResponse(CamelModel):
    active_courses: int


# ============================================================
# COMMON
# ============================================================

class MessageResponse(BaseModel):
    message: str

class HealthResponse(BaseModel):
    status: str
    database: str
