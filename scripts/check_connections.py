#!/usr/bin/env python3
"""
Connection Check Script

Run this to verify the database and blob storage are reachable,
and to create any missing tables.
Usage: python scripts/check_connections.py
"""
import sys
sys.path.insert(0, '.')

from app.core.config import get_settings
from app.db.postgres import engine, test_postgres_connection
from app.db.schema import init_schema
from app.services.blob_storage import get_blob_storage


def main():
    settings = get_settings()
    print("=" * 50)
    print("JOB BOARD - CONNECTION CHECK")
    print("=" * 50)

    # Database
    print("\n[1] Testing database...")
    if settings.database_url:
        print(f"    URL: {settings.database_url.split('@')[-1]}")
    else:
        print(f"    URL: postgresql://{settings.postgres_user}:****@{settings.postgres_host}:{settings.postgres_port}/{settings.postgres_db}")
    if test_postgres_connection():
        print("    ✅ Database: CONNECTED")
        init_schema(engine)
        print("    ✅ Schema: READY")
    else:
        print("    ❌ Database: FAILED")

    # Blob storage
    print("\n[2] Testing blob storage...")
    print(f"    Backend: {settings.storage_backend}")
    try:
        url = get_blob_storage().upload(b"ok", "connection-check.txt")
        print(f"    ✅ Storage: WROTE {url}")
    except Exception as e:
        print(f"    ❌ Storage: FAILED ({e})")

    print("\n" + "=" * 50)
    print("Connection check complete!")
    print("=" * 50)


if __name__ == "__main__":
    main()
