from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import require_admin
from jobly.crud import job as job_crud
from jobly.schemas.job import (
    JobCreateRequest,
    JobUpdateRequest,
    JobEnvelope,
    JobListEnvelope,
)

router = APIRouter(prefix="/jobs", tags=["Jobs"])


@router.post("", status_code=201, response_model=JobEnvelope, dependencies=[Depends(require_admin)])
def create_job(
    request: JobCreateRequest,
    db: Session = Depends(get_db)
):
    """
    Create a job for an existing company.

    Authorization required: admin
    """
    job = job_crud.create(db, request.model_dump(by_alias=True))
    return {"job": job}


@router.get("", response_model=JobListEnvelope)
def list_jobs(
    title: Optional[str] = Query(None, description="Case-insensitive substring of the title"),
    min_salary: Optional[int] = Query(None, alias="minSalary", ge=0),
    has_equity: Optional[bool] = Query(None, alias="hasEquity"),
    db: Session = Depends(get_db)
):
    """
    List jobs, optionally filtered.

    Filters:
    - title: matches any part of the title, case-insensitive
    - minSalary: only jobs paying strictly more
    - hasEquity: true keeps jobs offering non-zero equity; false or
      missing lists jobs regardless of equity

    A filtered search with no matches answers 404.

    Authorization required: none
    """
    criteria = {
        key: value
        for key, value in (
            ("title", title),
            ("minSalary", min_salary),
            ("hasEquity", has_equity),
        )
        if value is not None
    }

    if not criteria:
        return {"jobs": job_crud.find_all(db)}
    return {"jobs": job_crud.search(db, criteria)}


@router.get("/{job_id}", response_model=JobEnvelope)
def get_job(job_id: int, db: Session = Depends(get_db)):
    """
    Retrieve a job by ID.

    Authorization required: none
    """
    return {"job": job_crud.get(db, job_id)}


@router.patch("/{job_id}", response_model=JobEnvelope, dependencies=[Depends(require_admin)])
def update_job(
    job_id: int,
    request: JobUpdateRequest,
    db: Session = Depends(get_db)
):
    """
    Partial update: fields can be {title, salary, equity}, never id or companyHandle.

    Authorization required: admin
    """
    data = request.model_dump(by_alias=True, exclude_unset=True)
    return {"job": job_crud.update(db, job_id, data)}


@router.delete("/{job_id}", dependencies=[Depends(require_admin)])
def delete_job(job_id: int, db: Session = Depends(get_db)):
    """
    Delete a job by ID.

    Authorization required: admin
    """
    job_crud.remove(db, job_id)
    return {"deleted": job_id}
