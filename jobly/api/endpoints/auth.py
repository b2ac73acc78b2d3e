"""
Authentication endpoints.

- POST /auth/token: Exchange username/password for a JWT
- POST /auth/register: Create an account and receive a JWT
"""

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.security import create_access_token
from jobly.crud import user as user_crud
from jobly.schemas.user import UserLoginRequest, UserRegisterRequest, TokenResponse

router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = logging.getLogger(__name__)


@router.post("/token", response_model=TokenResponse)
def login(
    request: UserLoginRequest,
    db: Session = Depends(get_db)
):
    """
    Authenticate a user and return a JWT for further requests.

    Authorization required: none
    """
    user = user_crud.authenticate(db, request.username, request.password)
    logger.info(f"User logged in: {user['username']}")
    return TokenResponse(token=create_access_token(user["username"], user["isAdmin"]))


@router.post("/register", status_code=201, response_model=TokenResponse)
def register(
    request: UserRegisterRequest,
    db: Session = Depends(get_db)
):
    """
    Register a new (non-admin) user and return a JWT.

    Authorization required: none
    """
    new_user = user_crud.register(db, {**request.model_dump(by_alias=True), "isAdmin": False})
    return TokenResponse(token=create_access_token(new_user["username"], new_user["isAdmin"]))
