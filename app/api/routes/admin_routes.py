"""
Admin & Course Routes

POST /admin/courses        - Add a course
GET  /courses              - List courses
GET  /admin/user-stats     - User counts per user type
GET  /admin/active-courses - Number of active courses
"""

from typing import List

from fastapi import APIRouter
from sqlalchemy import text

from app.db.postgres import get_db_session, execute_raw_sql
from app.core.errors import internal_error_boundary
from app.schemas.schemas import (
    CourseCreate, CourseCreated, CourseResponse, UserStatsResponse, ActiveCoursesResponse
)

router = APIRouter(tags=["Admin"])


@router.post("/admin/courses", response_model=CourseCreated, status_code=201)
async def create_course(course: CourseCreate):
    """Add a course. Only the database's NOT NULL on title is enforced."""
    with internal_error_boundary("Error adding course."):
        with get_db_session() as db:
            course_id = db.execute(
                text("""
                    INSERT INTO courses (title, description, category)
                    VALUES (:title, :description, :category)
                    RETURNING id
                """),
                course.model_dump()
            ).scalar_one()

    return CourseCreated(message="Course added successfully!", course_id=course_id)


@router.get("/courses", response_model=List[CourseResponse])
async def list_courses():
    with internal_error_boundary("Error fetching courses."):
        results = execute_raw_sql("SELECT * FROM courses ORDER BY id")
    return [CourseResponse.model_validate(r) for r in results]


@router.get("/admin/user-stats", response_model=UserStatsResponse)
async def get_user_stats():
    """Count users per type in a single pass over users."""
    with internal_error_boundary("Error fetching user stats."):
        results = execute_raw_sql("""
            SELECT
                COALESCE(SUM(CASE WHEN user_type = 'student' THEN 1 ELSE 0 END), 0) AS students,
                COALESCE(SUM(CASE WHEN user_type = 'employer' THEN 1 ELSE 0 END), 0) AS employers,
                COALESCE(SUM(CASE WHEN user_type = 'admin' THEN 1 ELSE 0 END), 0) AS admins
            FROM users
        """)
    return UserStatsResponse.model_validate(results[0])


@router.get("/admin/active-courses", response_model=ActiveCoursesResponse)
async def get_active_courses():
    with internal_error_boundary("Error fetching active courses."):
        results = execute_raw_sql("SELECT COUNT(*) AS active_courses FROM courses WHERE is_active = TRUE")
    return ActiveCoursesResponse.model_validate(results[0])
