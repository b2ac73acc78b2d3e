"""
CRUD operations for companies.

Plain parameterized SQL through jobly.core.database.query; partial updates
and search filters come from the builders in jobly.core.sql.
"""

from typing import Any, Dict, List, Mapping
from sqlalchemy.orm import Session

from jobly.core.database import query
from jobly.core.exceptions import BadRequestError, NotFoundError
from jobly.core.logging_config import get_logger
from jobly.core.sql import company_filter, sql_for_partial_update, where_sql
from jobly.crud.policy import require_results

logger = get_logger(__name__)

# API field name -> column name, for fields whose names differ
JS_TO_SQL = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}

COMPANY_COLUMNS = (
    'handle, name, description, '
    'num_employees AS "numEmployees", logo_url AS "logoUrl"'
)


def create(db: Session, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Create a company.

    Args:
        db: Database session
        data: {handle, name, description, numEmployees, logoUrl}

    Returns:
        {handle, name, description, numEmployees, logoUrl}

    Raises:
        BadRequestError: If the handle is already taken
    """
    duplicate = query(
        db,
        "SELECT handle FROM companies WHERE handle = $1",
        [data["handle"]]
    )
    if duplicate:
        raise BadRequestError(f"Duplicate company: {data['handle']}")

    rows = query(
        db,
        f"""INSERT INTO companies
                (handle, name, description, num_employees, logo_url)
            VALUES ($1, $2, $3, $4, $5)
            RETURNING {COMPANY_COLUMNS}""",
        [
            data["handle"],
            data["name"],
            data.get("description"),
            data.get("numEmployees"),
            data.get("logoUrl"),
        ]
    )
    db.commit()

    logger.info(f"Created company {data['handle']}")
    return rows[0]


def find_all(db: Session) -> List[Dict[str, Any]]:
    """All companies, ordered by name."""
    return query(
        db,
        f"""SELECT {COMPANY_COLUMNS}
            FROM companies
            ORDER BY name"""
    )


def search(db: Session, criteria: Mapping[str, Any]) -> List[Dict[str, Any]]:
    """
    Companies matching the search criteria, ordered by name.

    Args:
        db: Database session
        criteria: Any of {name, minEmployees, maxEmployees}; name matches a
            case-insensitive substring, the employee bounds are inclusive

    Raises:
        BadRequestError: If minEmployees > maxEmployees (no query is run)
        NotFoundError: If nothing matches (see jobly.crud.policy)
    """
    clause = company_filter.build(criteria)

    rows = query(
        db,
        f"""SELECT {COMPANY_COLUMNS}
            FROM companies
            {where_sql(clause)}
            ORDER BY name""",
        clause.values
    )
    return require_results(rows, "No company matching your search criteria was found.")


def get(db: Session, handle: str) -> Dict[str, Any]:
    """
    Company by handle, with its jobs.

    Returns:
        {handle, name, description, numEmployees, logoUrl, jobs}
        where jobs is [{id, title, salary, equity, companyHandle}, ...]

    Raises:
        NotFoundError: If there is no such company
    """
    rows = query(
        db,
        f"""SELECT {COMPANY_COLUMNS}
            FROM companies
            WHERE handle = $1""",
        [handle]
    )
    if not rows:
        raise NotFoundError(f"No company: {handle}")

    company = rows[0]
    company["jobs"] = query(
        db,
        """SELECT id, title, salary, equity, company_handle AS "companyHandle"
           FROM jobs
           WHERE company_handle = $1
           ORDER BY id""",
        [handle]
    )
    return company


def update(db: Session, handle: str, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partial update: only the fields present in data are changed.

    data can include {name, description, numEmployees, logoUrl}.

    Raises:
        BadRequestError: If data is empty
        NotFoundError: If there is no such company
    """
    set_cols, values = sql_for_partial_update(data, JS_TO_SQL)
    handle_idx = len(values) + 1

    rows = query(
        db,
        f"""UPDATE companies
            SET {set_cols}
            WHERE handle = ${handle_idx}
            RETURNING {COMPANY_COLUMNS}""",
        [*values, handle]
    )
    if not rows:
        db.rollback()
        raise NotFoundError(f"No company: {handle}")

    db.commit()
    logger.info(f"Updated company {handle}: {', '.join(data)}")
    return rows[0]


def remove(db: Session, handle: str) -> None:
    """
    Delete a company (and, through the foreign key, its jobs).

    Raises:
        NotFoundError: If there is no such company
    """
    rows = query(
        db,
        """DELETE FROM companies
           WHERE handle = $1
           RETURNING handle""",
        [handle]
    )
    if not rows:
        db.rollback()
        raise NotFoundError(f"No company: {handle}")

    db.commit()
    logger.info(f"Deleted company {handle}")
