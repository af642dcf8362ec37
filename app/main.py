"""
Job Board - Main Application

FastAPI backend with:
- PostgreSQL (raw SQL through SQLAlchemy) for users, jobs, applications, courses
- Blob storage (S3 or local disk) for profile pictures, resumes, cover letters
- bcrypt password hashing

Run: uvicorn app.main:app --reload
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.routes import api_router
from app.core.config import get_settings
from app.db.postgres import engine, test_postgres_connection
from app.db.schema import init_schema
from app.schemas.schemas import HealthResponse

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create missing tables and the local upload directory on startup."""
    init_schema(engine)
    if settings.storage_backend.lower() == "local":
        os.makedirs(settings.upload_dir, exist_ok=True)
    logger.info("Job board API started")
    yield


# Create FastAPI app
app = FastAPI(
    title="Job Board",
    description="""
    Job board backend for students, employers and admins.

    ## Features
    - **Accounts**: signup with optional profile picture, login, profiles
    - **Jobs**: post, edit, delete, list
    - **Applications**: apply with resume/cover letter, review, status updates
    - **Directory**: employers
    - **Admin**: courses and user statistics
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# CORS middleware (allow all for development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request, exc: StarletteHTTPException):
    """All errors leave the API as {"message": ...}."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"Invalid request: {field} {first.get('msg', '')}".strip()
    else:
        message = "Invalid request."
    return JSONResponse(status_code=400, content={"message": message})


# Include API routes (served from the root, no prefix)
app.include_router(api_router)

# Uploaded files, when stored on local disk
if settings.storage_backend.lower() == "local":
    app.mount(
        settings.upload_url_prefix,
        StaticFiles(directory=settings.upload_dir, check_dir=False),
        name="uploads"
    )


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Detailed health check."""
    return HealthResponse(
        status="healthy",
        database="connected" if test_postgres_connection() else "disconnected"
    )
