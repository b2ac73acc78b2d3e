"""
Application error types.

Raised by the CRUD layer and query builders, rendered as JSON responses by
the handler registered in main.py. Store failures (SQLAlchemyError) are not
wrapped here; they propagate to the generic 500 handler.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse


class JoblyError(Exception):
    """Base error carrying the HTTP status it maps to."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal Server Error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequestError(JoblyError):
    """Client input is malformed or breaks a precondition."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad Request"


class UnauthorizedError(JoblyError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class NotFoundError(JoblyError):
    """Target row is absent, or a filtered search matched nothing."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not Found"


async def jobly_error_handler(request: Request, exc: JoblyError) -> JSONResponse:
    """Render a JoblyError as {"detail": message} with its status code."""
    headers = None
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message},
        headers=headers,
    )
