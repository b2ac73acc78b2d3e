"""
Pydantic schemas for Company API requests/responses.
"""

from typing import List, Optional
from pydantic import Field

from jobly.schemas.base import CamelRequest, CamelResponse
from jobly.schemas.job import JobResponse


class CompanyCreateRequest(CamelRequest):
    """Schema for creating a company."""
    handle: str = Field(..., min_length=1, max_length=25)
    name: str = Field(..., min_length=1)
    description: str
    num_employees: Optional[int] = Field(None, ge=0)
    logo_url: Optional[str] = None


class CompanyUpdateRequest(CamelRequest):
    """
    Partial update; only the fields sent are changed. The handle is fixed.

    name and description may be omitted but not set to null.
    """
    name: str = Field(None, min_length=1)
    description: str = None
    num_employees: Optional[int] = Field(None, ge=0)
    logo_url: Optional[str] = None


class CompanyResponse(CamelResponse):
    handle: str
    name: str
    description: Optional[str] = None
    num_employees: Optional[int] = None
    logo_url: Optional[str] = None


class CompanyDetailResponse(CompanyResponse):
    """Company with the jobs it has posted."""
    jobs: List[JobResponse] = []


class CompanyEnvelope(CamelResponse):
    company: CompanyResponse


class CompanyDetailEnvelope(CamelResponse):
    company: CompanyDetailResponse


class CompanyListEnvelope(CamelResponse):
    companies: List[CompanyResponse]
