"""
Job Board
Accounts, job postings, applications and admin statistics over HTTP/JSON.

Architecture:
- PostgreSQL: users, profiles, jobs, applications, courses
- Blob storage: uploaded files, stored as public URLs
"""

__version__ = "1.0.0"
