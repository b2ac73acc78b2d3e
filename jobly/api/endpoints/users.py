"""
User endpoints.

Admins manage any account; users may read, change and delete their own
account and manage their own job applications.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import require_admin, require_admin_or_self
from jobly.core.security import create_access_token
from jobly.crud import user as user_crud
from jobly.schemas.user import (
    UserCreateRequest,
    UserUpdateRequest,
    UserCreatedResponse,
    UserEnvelope,
    UserDetailEnvelope,
    UserListEnvelope,
    ApplicationStateRequest,
    ApplicationResponse,
    AppliedResponse,
)

router = APIRouter(prefix="/users", tags=["Users"])


@router.post("", status_code=201, response_model=UserCreatedResponse, dependencies=[Depends(require_admin)])
def create_user(
    request: UserCreateRequest,
    db: Session = Depends(get_db)
):
    """
    Add a user, possibly an admin. Unlike /auth/register this is for
    admins creating accounts on someone's behalf.

    Returns the user and a token for them.

    Authorization required: admin
    """
    user = user_crud.register(db, request.model_dump(by_alias=True))
    token = create_access_token(user["username"], user["isAdmin"])
    return {"user": user, "token": token}


@router.get("", response_model=UserListEnvelope, dependencies=[Depends(require_admin)])
def list_users(db: Session = Depends(get_db)):
    """
    Authorization required: admin
    """
    return {"users": user_crud.find_all(db)}


@router.get("/{username}", response_model=UserDetailEnvelope, dependencies=[Depends(require_admin_or_self)])
def get_user(username: str, db: Session = Depends(get_db)):
    """
    User profile with the ids of the jobs they applied to.

    Authorization required: admin or same user
    """
    return {"user": user_crud.get(db, username)}


@router.patch("/{username}", response_model=UserEnvelope, dependencies=[Depends(require_admin_or_self)])
def update_user(
    username: str,
    request: UserUpdateRequest,
    db: Session = Depends(get_db)
):
    """
    Partial update: fields can be {firstName, lastName, password, email}.

    Authorization required: admin or same user
    """
    data = request.model_dump(by_alias=True, exclude_unset=True)
    return {"user": user_crud.update(db, username, data)}


@router.delete("/{username}", dependencies=[Depends(require_admin_or_self)])
def delete_user(username: str, db: Session = Depends(get_db)):
    """
    Authorization required: admin or same user
    """
    user_crud.remove(db, username)
    return {"deleted": username}


@router.post(
    "/{username}/jobs/{job_id}",
    response_model=AppliedResponse,
    dependencies=[Depends(require_admin_or_self)]
)
def apply_for_job(username: str, job_id: int, db: Session = Depends(get_db)):
    """
    Apply to a job.

    Authorization required: admin or same user
    """
    user_crud.apply(db, username, job_id)
    return {"applied": job_id}


@router.patch(
    "/{username}/jobs/{job_id}",
    response_model=ApplicationResponse,
    dependencies=[Depends(require_admin_or_self)]
)
def update_application(
    username: str,
    job_id: int,
    request: ApplicationStateRequest,
    db: Session = Depends(get_db)
):
    """
    Change an application's state (interested, applied, accepted, rejected).

    Authorization required: admin or same user
    """
    return user_crud.update_application(db, username, job_id, request.state)
