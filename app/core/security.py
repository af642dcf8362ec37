"""
Password handling.

Provides:
- Password hashing with bcrypt
- Verification on login

No tokens are issued; callers identify themselves by user id.
"""

from passlib.context import CryptContext

from app.core.config import get_settings

settings = get_settings()

# Password hashing
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds
)


def hash_password(password: str) -> str:
    """Hash password with bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash. Malformed hashes never match."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        return False
