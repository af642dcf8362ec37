"""
Blob Storage - store uploaded files and hand back a public URL.

Backends (settings.storage_backend):
- "s3":    boto3 put_object into settings.s3_bucket_name
- "local": files written under settings.upload_dir, served by the app
           at settings.upload_url_prefix

Usage:
    url = await upload_file(content, "resume.pdf")
"""

import logging
import mimetypes
import os
import re
import uuid
from pathlib import Path

import boto3
from fastapi.concurrency import run_in_threadpool

from app.core.config import get_settings

logger = logging.getLogger(__name__)


def make_blob_name(filename: str) -> str:
    """
    Unique object name that keeps the original filename readable.

    Only [A-Za-z0-9._-] survive, so the name is safe to put in a URL path.
    """
    base = re.sub(r"[^A-Za-z0-9._-]", "_", os.path.basename(filename)).strip(".") or "file"
    return f"{uuid.uuid1()}-{base}"


class LocalBlobStorage:
    """Writes blobs to a directory on disk."""

    def __init__(self, root: str, url_prefix: str):
        self.root = Path(root)
        self.url_prefix = url_prefix.rstrip("/")

    def upload(self, content: bytes, filename: str) -> str:
        blob_name = make_blob_name(filename)
        self.root.mkdir(parents=True, exist_ok=True)
        with open(self.root / blob_name, "wb") as f:
            f.write(content)
        return f"{self.url_prefix}/{blob_name}"


class S3BlobStorage:
    """Writes blobs to an S3 bucket and returns the object URL."""

    def __init__(self, bucket: str, region: str, access_key_id: str = "", secret_access_key: str = ""):
        self.bucket = bucket
        self.region = region
        self.client = boto3.client(
            "s3",
            aws_access_key_id=access_key_id or None,
            aws_secret_access_key=secret_access_key or None,
            region_name=region
        )

    def upload(self, content: bytes, filename: str) -> str:
        key = make_blob_name(filename)
        content_type = mimetypes.guess_type(filename)[0] or "application/octet-stream"
        self.client.put_object(
            Bucket=self.bucket,
            Key=key,
            Body=content,
            ContentType=content_type
        )
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"


_storage = None


def get_blob_storage():
    """Get or create the storage backend selected in settings."""
    global _storage
    if _storage is None:
        settings = get_settings()
        backend = settings.storage_backend.lower()
        if backend == "s3":
            _storage = S3BlobStorage(
                bucket=settings.s3_bucket_name,
                region=settings.aws_region,
                access_key_id=settings.aws_access_key_id,
                secret_access_key=settings.aws_secret_access_key
            )
        elif backend == "local":
            _storage = LocalBlobStorage(settings.upload_dir, settings.upload_url_prefix)
        else:
            raise ValueError(f"Unknown storage backend: {settings.storage_backend}")
    return _storage


def reset_blob_storage():
    """Forget the cached backend (settings changed)."""
    global _storage
    _storage = None


async def upload_file(content: bytes, filename: str) -> str:
    """Store bytes in blob storage and return the public URL."""
    storage = get_blob_storage()
    url = await run_in_threadpool(storage.upload, content, filename)
    logger.info("Uploaded %s (%d bytes) -> %s", filename, len(content), url)
    return url
