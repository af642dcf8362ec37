"""
Authentication Routes

POST /signup - Create account (multipart, optional profilePicture)
POST /login  - Check credentials for a given user type
"""

import logging
from typing import Optional

from fastapi import APIRouter, File, Form, UploadFile
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError

from app.db.postgres import get_db_session, execute_raw_sql
from app.core.errors import BadRequest, Conflict, Unauthorized, internal_error_boundary
from app.core.security import hash_password, verify_password
from app.services.blob_storage import upload_file
from app.utils.file_upload import read_upload
from app.utils.validation import is_blank
from app.schemas.schemas import UserType, LoginRequest, LoginResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Authentication"])

EMAIL_TAKEN = "This email is already registered. Please sign in."


@router.post("/signup")
async def signup(
    email: Optional[str] = Form(None),
    password: Optional[str] = Form(None),
    user_type: Optional[str] = Form(None, alias="userType"),
    full_name: Optional[str] = Form(None, alias="fullName"),
    company_name: Optional[str] = Form(None, alias="companyName"),
    admin_name: Optional[str] = Form(None, alias="adminName"),
    address: Optional[str] = Form(None),
    phone: Optional[str] = Form(None),
    profile_picture: Optional[UploadFile] = File(None, alias="profilePicture")
):
    """
    Create a user and its profile row.

    The user row and the student/employer/admin row are written in one
    transaction. Admins may send their name as adminName or fullName.
    """
    if is_blank(email) or is_blank(password):
        raise BadRequest("Email and password are required.")
    try:
        kind = UserType(user_type)
    except ValueError:
        raise BadRequest("Invalid user type.")

    profile = kind.profile
    name = {
        UserType.student: full_name,
        UserType.employer: company_name,
        UserType.admin: admin_name or full_name,
    }[kind]

    with internal_error_boundary("Error during signup."):
        if execute_raw_sql("SELECT id FROM users WHERE email = :email", {"email": email}):
            raise Conflict(EMAIL_TAKEN)

        upload = await read_upload(profile_picture)
        profile_picture_url = await upload_file(*upload) if upload else None

        try:
            with get_db_session() as db:
                user_id = db.execute(
                    text("""
                        INSERT INTO users (email, password_hash, user_type, address, phone, profile_picture_url)
                        VALUES (:email, :password_hash, :user_type, :address, :phone, :picture)
                        RETURNING id
                    """),
                    {
                        "email": email,
                        "password_hash": hash_password(password),
                        "user_type": kind.value,
                        "address": address,
                        "phone": phone,
                        "picture": profile_picture_url
                    }
                ).scalar_one()

                db.execute(
                    text(f"INSERT INTO {profile.table} (user_id, {profile.column}) VALUES (:user_id, :name)"),
                    {"user_id": user_id, "name": name}
                )
        except IntegrityError:
            # Lost a race with another signup for the same email
            raise Conflict(EMAIL_TAKEN)

    logger.info("Created %s account %s", kind.value, user_id)
    return {
        "userId": user_id,
        "userType": kind.value,
        "profilePictureUrl": profile_picture_url,
        profile.field: name
    }


@router.post("/login", response_model=LoginResponse)
async def login(request: LoginRequest):
    """
    Check email + password for the requested user type.

    Any mismatch (unknown email, wrong password, wrong or unknown
    user type) is the same 401.
    """
    try:
        kind = UserType(request.user_type)
    except ValueError:
        raise Unauthorized()

    profile = kind.profile
    with internal_error_boundary("Error logging in."):
        results = execute_raw_sql(
            f"""
                SELECT u.id, u.password_hash, p.{profile.column} AS name
                FROM users u
                LEFT JOIN {profile.table} p ON p.user_id = u.id
                WHERE u.email = :email AND u.user_type = :user_type
            """,
            {"email": request.email, "user_type": kind.value}
        )

    if not results or not verify_password(request.password, results[0]["password_hash"]):
        raise Unauthorized()

    r = results[0]
    return LoginResponse(user_id=r["id"], user_type=kind, name=r["name"])
