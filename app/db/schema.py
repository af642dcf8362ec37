"""
Relational schema for the job board.

Tables are declared with SQLAlchemy Core so the same definitions create
the schema on PostgreSQL in production and on SQLite in the test suite.
Route handlers still talk to these tables with raw SQL.
"""

import logging

from sqlalchemy import (
    Boolean, Column, Date, DateTime, ForeignKey, Integer, MetaData, String,
    Table, Text, func, text
)

logger = logging.getLogger(__name__)

metadata = MetaData()

users = Table(
    "users", metadata,
    Column("id", Integer, primary_key=True),
    Column("email", String(255), nullable=False, unique=True),
    Column("password_hash", String(255), nullable=False),
    Column("user_type", String(20), nullable=False),
    Column("address", String(255)),
    Column("phone", String(50)),
    Column("profile_picture_url", Text),
    Column("created_at", DateTime, server_default=func.current_timestamp()),
)

students = Table(
    "students", metadata,
    Column("id", Integer, primary_key=True),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True),
    Column("full_name", String(255)),
)

employers = Table(
    "employers", metadata,
    Column("id", Integer, primary_key=True),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True),
    Column("company_name", String(255)),
)

admins = Table(
    "admins", metadata,
    Column("id", Integer, primary_key=True),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True),
    Column("admin_name", String(255)),
)

jobs = Table(
    "jobs", metadata,
    Column("id", Integer, primary_key=True),
    Column("job_title", String(255), nullable=False),
    Column("num_people", Integer, nullable=False),
    Column("job_location", String(255), nullable=False),
    Column("street_address", String(255), nullable=False),
    Column("job_description", Text, nullable=False),
    Column("competition_id", String(100)),
    Column("internal_closing_date", Date),
    Column("external_closing_date", Date),
    Column("pay_level", String(100), nullable=False),
    Column("employment_type", String(100), nullable=False),
    Column("travel_frequency", String(100), nullable=False),
    Column("job_category", String(100), nullable=False),
    Column("company_name", String(255), nullable=False),
    Column("contact_information", String(255), nullable=False),
    Column("user_id", Integer, ForeignKey("users.id"), nullable=False),
    Column("created_at", DateTime, server_default=func.current_timestamp()),
)

applications = Table(
    "applications", metadata,
    Column("id", Integer, primary_key=True),
    Column("job_id", Integer, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False),
    Column("user_id", Integer, ForeignKey("users.id")),
    Column("first_name", String(100), nullable=False),
    Column("last_name", String(100), nullable=False),
    Column("email", String(255), nullable=False),
    Column("phone_number", String(50), nullable=False),
    Column("address", String(255), nullable=False),
    Column("position", String(255), nullable=False),
    Column("desired_compensation", String(100), nullable=False),
    Column("resume_path", Text),
    Column("cover_letter_path", Text),
    Column("status", String(20), nullable=False, server_default=text("'Pending'")),
    Column("apply_date", DateTime, server_default=func.current_timestamp()),
)

courses = Table(
    "courses", metadata,
    Column("id", Integer, primary_key=True),
    Column("title", String(255), nullable=False),
    Column("description", Text),
    Column("category", String(100)),
    Column("is_active", Boolean, nullable=False, server_default=text("TRUE")),
    Column("created_at", DateTime, server_default=func.current_timestamp()),
)


def init_schema(engine) -> None:
    """Create any missing tables. Existing tables are left untouched."""
    metadata.create_all(engine)
    logger.info("Schema ready (%d tables)", len(metadata.tables))


def drop_schema(engine) -> None:
    metadata.drop_all(engine)
