"""
Database module - SQL connection pool and schema.
"""
from app.db.postgres import get_db_session, execute_raw_sql, test_postgres_connection
from app.db.schema import init_schema

__all__ = [
    "get_db_session",
    "execute_raw_sql",
    "test_postgres_connection",
    "init_schema"
]
