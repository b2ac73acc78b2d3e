"""
Company endpoints.

Reads are public; writes require an admin token.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import require_admin
from jobly.crud import company as company_crud
from jobly.schemas.company import (
    CompanyCreateRequest,
    CompanyUpdateRequest,
    CompanyEnvelope,
    CompanyDetailEnvelope,
    CompanyListEnvelope,
)

router = APIRouter(prefix="/companies", tags=["Companies"])


@router.post("", status_code=201, response_model=CompanyEnvelope, dependencies=[Depends(require_admin)])
def create_company(
    request: CompanyCreateRequest,
    db: Session = Depends(get_db)
):
    """
    Create a company.

    Authorization required: admin
    """
    company = company_crud.create(db, request.model_dump(by_alias=True))
    return {"company": company}


@router.get("", response_model=CompanyListEnvelope)
def list_companies(
    name: Optional[str] = Query(None, description="Case-insensitive substring of the name"),
    min_employees: Optional[int] = Query(None, alias="minEmployees", ge=0),
    max_employees: Optional[int] = Query(None, alias="maxEmployees", ge=0),
    db: Session = Depends(get_db)
):
    """
    List companies, optionally filtered.

    Filters:
    - name: matches any part of the name, case-insensitive
    - minEmployees / maxEmployees: inclusive bounds

    A filtered search with no matches answers 404.

    Authorization required: none
    """
    criteria = {
        key: value
        for key, value in (
            ("name", name),
            ("minEmployees", min_employees),
            ("maxEmployees", max_employees),
        )
        if value is not None
    }

    if not criteria:
        return {"companies": company_crud.find_all(db)}
    return {"companies": company_crud.search(db, criteria)}


@router.get("/{handle}", response_model=CompanyDetailEnvelope)
def get_company(handle: str, db: Session = Depends(get_db)):
    """
    Company with the jobs it has posted.

    Authorization required: none
    """
    return {"company": company_crud.get(db, handle)}


@router.patch("/{handle}", response_model=CompanyEnvelope, dependencies=[Depends(require_admin)])
def update_company(
    handle: str,
    request: CompanyUpdateRequest,
    db: Session = Depends(get_db)
):
    """
    Partial update: fields can be {name, description, numEmployees, logoUrl}.

    Authorization required: admin
    """
    data = request.model_dump(by_alias=True, exclude_unset=True)
    return {"company": company_crud.update(db, handle, data)}


@router.delete("/{handle}", dependencies=[Depends(require_admin)])
def delete_company(handle: str, db: Session = Depends(get_db)):
    """
    Delete a company.

    Authorization required: admin
    """
    company_crud.remove(db, handle)
    return {"deleted": handle}
