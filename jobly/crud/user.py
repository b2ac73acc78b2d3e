"""
CRUD operations for users and their job applications.
"""

import secrets
from typing import Any, Dict, List, Mapping
from sqlalchemy.orm import Session

from jobly.core.database import query
from jobly.core.exceptions import BadRequestError, NotFoundError, UnauthorizedError
from jobly.core.logging_config import get_logger
from jobly.core.security import get_password_hash, verify_password
from jobly.core.sql import sql_for_partial_update
from jobly.models.user import ApplicationState

logger = get_logger(__name__)

JS_TO_SQL = {
    "firstName": "first_name",
    "lastName": "last_name",
    "isAdmin": "is_admin",
}

USER_COLUMNS = (
    'username, first_name AS "firstName", last_name AS "lastName", '
    'email, is_admin AS "isAdmin"'
)


def _as_user(row: Dict[str, Any]) -> Dict[str, Any]:
    # SQLite hands booleans back as 0/1
    row["isAdmin"] = bool(row["isAdmin"])
    return row


def authenticate(db: Session, username: str, password: str) -> Dict[str, Any]:
    """
    Check a username/password pair.

    Returns:
        {username, firstName, lastName, email, isAdmin}

    Raises:
        UnauthorizedError: If the user is unknown or the password is wrong
    """
    rows = query(
        db,
        f"""SELECT {USER_COLUMNS}, password
            FROM users
            WHERE username = $1""",
        [username]
    )
    if rows and verify_password(password, rows[0]["password"]):
        user = rows[0]
        del user["password"]
        return _as_user(user)

    logger.warning(f"Failed login for {username}")
    raise UnauthorizedError("Invalid username/password")


def register(db: Session, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Create a user.

    Args:
        db: Database session
        data: {username, password, firstName, lastName, email, isAdmin};
            when password is missing (admin-created accounts) a random one
            is set and the user has to be given a new one later

    Returns:
        {username, firstName, lastName, email, isAdmin}

    Raises:
        BadRequestError: If the username is taken
    """
    username = data["username"]
    duplicate = query(
        db,
        "SELECT username FROM users WHERE username = $1",
        [username]
    )
    if duplicate:
        raise BadRequestError(f"Duplicate username: {username}")

    password = data.get("password") or secrets.token_urlsafe(16)

    rows = query(
        db,
        f"""INSERT INTO users
                (username, password, first_name, last_name, email, is_admin)
            VALUES ($1, $2, $3, $4, $5, $6)
            RETURNING {USER_COLUMNS}""",
        [
            username,
            get_password_hash(password),
            data["firstName"],
            data["lastName"],
            data["email"],
            bool(data.get("isAdmin", False)),
        ]
    )
    db.commit()

    logger.info(f"Registered user {username} (admin: {bool(data.get('isAdmin', False))})")
    return _as_user(rows[0])


def find_all(db: Session) -> List[Dict[str, Any]]:
    """All users, ordered by username."""
    rows = query(
        db,
        f"""SELECT {USER_COLUMNS}
            FROM users
            ORDER BY username"""
    )
    return [_as_user(row) for row in rows]


def get(db: Session, username: str) -> Dict[str, Any]:
    """
    User by username.

    Returns:
        {username, firstName, lastName, email, isAdmin, applications}
        where applications is a list of job ids

    Raises:
        NotFoundError: If there is no such user
    """
    rows = query(
        db,
        f"""SELECT {USER_COLUMNS}
            FROM users
            WHERE username = $1""",
        [username]
    )
    if not rows:
        raise NotFoundError(f"No user: {username}")

    user = _as_user(rows[0])
    applications = query(
        db,
        """SELECT job_id
           FROM applications
           WHERE username = $1
           ORDER BY job_id""",
        [username]
    )
    user["applications"] = [row["job_id"] for row in applications]
    return user


def update(db: Session, username: str, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partial update: only the fields present in data are changed.

    data can include {firstName, lastName, password, email, isAdmin}.
    A new password is hashed before it is stored.

    Raises:
        BadRequestError: If data is empty
        NotFoundError: If there is no such user
    """
    data = dict(data)
    if "password" in data:
        password = data.pop("password")
        if password:
            data["password"] = get_password_hash(password)

    set_cols, values = sql_for_partial_update(data, JS_TO_SQL)
    username_idx = len(values) + 1

    rows = query(
        db,
        f"""UPDATE users
            SET {set_cols}
            WHERE username = ${username_idx}
            RETURNING {USER_COLUMNS}""",
        [*values, username]
    )
    if not rows:
        db.rollback()
        raise NotFoundError(f"No user: {username}")

    db.commit()
    logger.info(f"Updated user {username}: {', '.join(data)}")
    return _as_user(rows[0])


def remove(db: Session, username: str) -> None:
    """
    Delete a user.

    Raises:
        NotFoundError: If there is no such user
    """
    rows = query(
        db,
        """DELETE FROM users
           WHERE username = $1
           RETURNING username""",
        [username]
    )
    if not rows:
        db.rollback()
        raise NotFoundError(f"No user: {username}")

    db.commit()
    logger.info(f"Deleted user {username}")


def apply(db: Session, username: str, job_id: int) -> None:
    """
    Record that the user applied to a job.

    Raises:
        BadRequestError: If the user or the job does not exist, or the
            user already applied
    """
    if not query(db, "SELECT username FROM users WHERE username = $1", [username]):
        raise BadRequestError(f"No user: {username}")
    if not query(db, "SELECT id FROM jobs WHERE id = $1", [job_id]):
        raise BadRequestError(f"No job: {job_id}")

    existing = query(
        db,
        "SELECT job_id FROM applications WHERE username = $1 AND job_id = $2",
        [username, job_id]
    )
    if existing:
        raise BadRequestError(f"{username} already applied to job {job_id}")

    query(
        db,
        """INSERT INTO applications (username, job_id, state)
           VALUES ($1, $2, $3)""",
        [username, job_id, ApplicationState.APPLIED.value]
    )
    db.commit()
    logger.info(f"{username} applied to job {job_id}")


def update_application(
    db: Session,
    username: str,
    job_id: int,
    state: ApplicationState
) -> Dict[str, Any]:
    """
    Move an application to a new state.

    Returns:
        {jobId, state}

    Raises:
        NotFoundError: If the user has not applied to this job
    """
    rows = query(
        db,
        """UPDATE applications
           SET state = $1
           WHERE username = $2 AND job_id = $3
           RETURNING job_id AS "jobId", state""",
        [ApplicationState(state).value, username, job_id]
    )
    if not rows:
        db.rollback()
        raise NotFoundError(f"No application by {username} for job {job_id}")

    db.commit()
    logger.info(f"Application {username}/{job_id} is now {rows[0]['state']}")
    return rows[0]
