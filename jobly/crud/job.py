"""
CRUD operations for jobs.

Jobs belong to a company; searches go through the job filter and the
empty-search policy.
"""

from typing import Any, Dict, List, Mapping
from sqlalchemy.orm import Session

from jobly.core.database import query
from jobly.core.exceptions import BadRequestError, NotFoundError
from jobly.core.logging_config import get_logger
from jobly.core.sql import job_filter, sql_for_partial_update, where_sql
from jobly.crud.policy import require_results

logger = get_logger(__name__)

JOB_COLUMNS = 'id, title, salary, equity, company_handle AS "companyHandle"'


def create(db: Session, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Create a job.

    Args:
        db: Database session
        data: {title, salary, equity, companyHandle}

    Returns:
        {id, title, salary, equity, companyHandle}

    Raises:
        BadRequestError: If companyHandle does not name a company
    """
    company_handle = data["companyHandle"]
    company = query(
        db,
        "SELECT handle FROM companies WHERE handle = $1",
        [company_handle]
    )
    if not company:
        raise BadRequestError(f"No company with handle: {company_handle}")

    rows = query(
        db,
        f"""INSERT INTO jobs (title, salary, equity, company_handle)
            VALUES ($1, $2, $3, $4)
            RETURNING {JOB_COLUMNS}""",
        [data["title"], data.get("salary"), data.get("equity"), company_handle]
    )
    db.commit()

    job = rows[0]
    logger.info(f"Created job {job['id']}: {job['title']} at {company_handle}")
    return job


def find_all(db: Session) -> List[Dict[str, Any]]:
    """All jobs, ordered by title."""
    return query(
        db,
        f"""SELECT {JOB_COLUMNS}
            FROM jobs
            ORDER BY title, id"""
    )


def search(db: Session, criteria: Mapping[str, Any]) -> List[Dict[str, Any]]:
    """
    Jobs matching the search criteria, ordered by title.

    Args:
        db: Database session
        criteria: Any of {title, minSalary, hasEquity}
            - title: case-insensitive substring
            - minSalary: salary strictly greater than this
            - hasEquity: True keeps only jobs with non-zero equity;
              False or missing lists jobs regardless of equity

    Raises:
        NotFoundError: If nothing matches (see jobly.crud.policy)
    """
    clause = job_filter.build(criteria)

    rows = query(
        db,
        f"""SELECT {JOB_COLUMNS}
            FROM jobs
            {where_sql(clause)}
            ORDER BY title, id""",
        clause.values
    )
    return require_results(rows, "No job matching your search criteria was found.")


def get(db: Session, job_id: int) -> Dict[str, Any]:
    """
    Job by id.

    Raises:
        NotFoundError: If there is no such job
    """
    rows = query(
        db,
        f"""SELECT {JOB_COLUMNS}
            FROM jobs
            WHERE id = $1""",
        [job_id]
    )
    if not rows:
        raise NotFoundError(f"No job: {job_id}")
    return rows[0]


def update(db: Session, job_id: int, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partial update of {title, salary, equity}.

    id and companyHandle are never changed here.

    Raises:
        BadRequestError: If data is empty
        NotFoundError: If there is no such job
    """
    set_cols, values = sql_for_partial_update(data, {})
    id_idx = len(values) + 1

    rows = query(
        db,
        f"""UPDATE jobs
            SET {set_cols}
            WHERE id = ${id_idx}
            RETURNING {JOB_COLUMNS}""",
        [*values, job_id]
    )
    if not rows:
        db.rollback()
        raise NotFoundError(f"No job: {job_id}")

    db.commit()
    logger.info(f"Updated job {job_id}: {', '.join(data)}")
    return rows[0]


def remove(db: Session, job_id: int) -> None:
    """
    Delete a job.

    Raises:
        NotFoundError: If there is no such job
    """
    rows = query(
        db,
        """DELETE FROM jobs
           WHERE id = $1
           RETURNING id""",
        [job_id]
    )
    if not rows:
        db.rollback()
        raise NotFoundError(f"No job: {job_id}")

    db.commit()
    logger.info(f"Deleted job {job_id}")
