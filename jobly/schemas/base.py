"""
Shared Pydantic bases.

The API speaks camelCase (numEmployees, companyHandle, ...) while Python
attributes stay snake_case. Request bodies reject unknown fields.
"""

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelRequest(BaseModel):
    """Base for request bodies and query models."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = "forbid"


class CamelResponse(BaseModel):
    """Base for response payloads; accepts rows keyed by snake or camel names."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
