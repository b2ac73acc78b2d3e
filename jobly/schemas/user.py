"""
Pydantic schemas for User authentication, registration and applications.
"""

from pydantic import EmailStr, Field
from typing import List, Optional

from jobly.models.user import ApplicationState
from jobly.schemas.base import CamelRequest, CamelResponse


class UserRegisterRequest(CamelRequest):
    """Request schema for self-registration."""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=5, max_length=72)  # bcrypt limit
    first_name: str = Field(..., min_length=1, max_length=30)
    last_name: str = Field(..., min_length=1, max_length=30)
    email: EmailStr


class UserCreateRequest(CamelRequest):
    """
    Request schema for admins creating users.

    The password is optional; a random one is generated when omitted.
    """
    username: str = Field(..., min_length=1, max_length=25)
    password: Optional[str] = Field(None, min_length=5, max_length=72)
    first_name: str = Field(..., min_length=1, max_length=30)
    last_name: str = Field(..., min_length=1, max_length=30)
    email: EmailStr
    is_admin: bool = False


class UserUpdateRequest(CamelRequest):
    """Partial update; only the fields sent are changed, none of them to null."""
    first_name: str = Field(None, min_length=1, max_length=30)
    last_name: str = Field(None, min_length=1, max_length=30)
    password: str = Field(None, min_length=5, max_length=72)
    email: EmailStr = None


class UserLoginRequest(CamelRequest):
    """Request schema for POST /auth/token."""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=1)


class TokenResponse(CamelResponse):
    """JWT token response."""
    token: str


class UserResponse(CamelResponse):
    """User profile response (no password)."""
    username: str
    first_name: str
    last_name: str
    email: str
    is_admin: bool


class UserDetailResponse(UserResponse):
    """Profile plus the ids of jobs the user applied to."""
    applications: List[int] = []


class UserEnvelope(CamelResponse):
    user: UserResponse


class UserDetailEnvelope(CamelResponse):
    user: UserDetailResponse


class UserListEnvelope(CamelResponse):
    users: List[UserResponse]


class UserCreatedResponse(CamelResponse):
    user: UserResponse
    token: str


class ApplicationStateRequest(CamelRequest):
    state: ApplicationState


class ApplicationResponse(CamelResponse):
    job_id: int
    state: ApplicationState


class AppliedResponse(CamelResponse):
    applied: int
