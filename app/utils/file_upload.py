"""
File Upload Utility - Read multipart uploads into memory.

The multipart decoding itself is done by FastAPI (python-multipart);
this module turns an optional UploadFile into (bytes, filename) and
enforces the size limit before anything is sent to blob storage.
"""

from typing import Optional, Tuple
from fastapi import UploadFile, HTTPException

from app.core.config import get_settings


def max_upload_size_bytes() -> int:
    return get_settings().max_upload_size_mb * 1024 * 1024


async def read_upload(file: Optional[UploadFile]) -> Optional[Tuple[bytes, str]]:
    """
    Read an optional uploaded file.

    Args:
        file: FastAPI UploadFile, or None when the field was not sent

    Returns:
        Tuple of (content, original filename), or None if no file was sent

    Raises:
        HTTPException 413 if the file is over the configured limit
    """
    # Browsers send an empty part for an untouched file input
    if file is None or not file.filename:
        return None

    content = await file.read()

    if len(content) > max_upload_size_bytes():
        raise HTTPException(
            status_code=413,
            detail=f"File too large. Maximum size: {get_settings().max_upload_size_mb}MB"
        )

    return content, file.filename
