"""
CRUD operations (Create, Read, Update, Delete) for database models.

This layer provides a clean separation between API routes and database operations,
following the Repository pattern. Queries are plain parameterized SQL.
"""

from jobly.crud import company, job, user

__all__ = ["company", "job", "user"]
