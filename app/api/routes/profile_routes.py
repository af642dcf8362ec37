"""
Profile Routes

GET /profile/{userId} - Read user + profile name
PUT /profile/{userId} - Update address/phone and profile name
"""

from fastapi import APIRouter
from sqlalchemy import text

from app.db.postgres import get_db_session
from app.core.errors import NotFound, internal_error_boundary
from app.schemas.schemas import UserType, ProfileResponse, ProfileUpdate, MessageResponse

router = APIRouter(prefix="/profile", tags=["Profile"])


@router.get("/{user_id}", response_model=ProfileResponse)
async def get_profile(user_id: int):
    """Get a user's contact details and display name."""
    with internal_error_boundary("Error fetching profile data."):
        with get_db_session() as db:
            row = db.execute(
                text("""
                    SELECT id, email, user_type, address, phone, profile_picture_url
                    FROM users WHERE id = :id
                """),
                {"id": user_id}
            ).mappings().fetchone()
            if not row:
                raise NotFound("User not found.")

            profile = UserType(row["user_type"]).profile
            name = db.execute(
                text(f"SELECT {profile.column} FROM {profile.table} WHERE user_id = :id"),
                {"id": user_id}
            ).scalar()

    return ProfileResponse(
        user_id=row["id"], email=row["email"], user_type=row["user_type"],
        address=row["address"], phone=row["phone"],
        profile_picture_url=row["profile_picture_url"], name=name
    )


@router.put("/{user_id}", response_model=MessageResponse)
async def update_profile(user_id: int, update: ProfileUpdate):
    """
    Update profile fields that were sent; null clears a field.

    The profile table is chosen from the user's stored type, and both
    writes commit together.
    """
    values = update.model_dump(exclude_unset=True)
    contact = {f: values[f] for f in ("address", "phone") if f in values}

    with internal_error_boundary("Error updating profile data."):
        with get_db_session() as db:
            user_type = db.execute(
                text("SELECT user_type FROM users WHERE id = :id"),
                {"id": user_id}
            ).scalar()
            if user_type is None:
                raise NotFound("User not found.")

            if contact:
                db.execute(
                    text(f"UPDATE users SET {', '.join(f'{f} = :{f}' for f in contact)} WHERE id = :id"),
                    {**contact, "id": user_id}
                )

            if "name" in values:
                profile = UserType(user_type).profile
                db.execute(
                    text(f"UPDATE {profile.table} SET {profile.column} = :name WHERE user_id = :id"),
                    {"id": user_id, "name": values["name"]}
                )

    return MessageResponse(message="Profile updated successfully")
