"""
Schemas module - Request/Response schemas for API endpoints.
"""

from app.schemas.schemas import (
    UserType, ApplicationStatus, PROFILE_TABLES, MessageResponse
)

__all__ = ["UserType", "ApplicationStatus", "PROFILE_TABLES", "MessageResponse"]
