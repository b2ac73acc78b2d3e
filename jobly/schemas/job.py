from pydantic import Field
from typing import List, Optional
from decimal import Decimal

from jobly.schemas.base import CamelRequest, CamelResponse


class JobCreateRequest(CamelRequest):
    """Schema for creating a new job"""
    title: str = Field(..., min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[float] = Field(None, ge=0, le=1, description="Fraction of the company offered")
    company_handle: str = Field(..., min_length=1, max_length=25)


class JobUpdateRequest(CamelRequest):
    """Partial update. id and companyHandle cannot be changed; title cannot be null."""
    title: str = Field(None, min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[float] = Field(None, ge=0, le=1)


class JobResponse(CamelResponse):
    """Schema for job response"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[Decimal] = None
    company_handle: str


class JobEnvelope(CamelResponse):
    job: JobResponse


class JobListEnvelope(CamelResponse):
    jobs: List[JobResponse]
