"""
Shared Models
=============

Pydantic models shared across the member registry.

Models:
- Member models (Member, MemberType)
- Member records (Assessment, Education, FurtherEducation, Appearances)
- Paging primitives (PageRequest, Page, SortOrder)
- Response models (ErrorResponse, HealthResponse)
"""

from shared.models.member import Member, MemberType
from shared.models.assessment import Assessment
from shared.models.education import Education, FurtherEducation
from shared.models.appearances import Appearances
from shared.models.common import (
    ErrorResponse,
    HealthResponse,
    Page,
    PageRequest,
    Record,
    SortDirection,
    SortOrder,
    parse_sort,
)

__all__ = [
    # Member
    "Member",
    "MemberType",
    # Member records
    "Assessment",
    "Education",
    "FurtherEducation",
    "Appearances",
    # Common
    "ErrorResponse",
    "HealthResponse",
    "Page",
    "PageRequest",
    "Record",
    "SortDirection",
    "SortOrder",
    "parse_sort",
]
