"""
Member Registry Database Models
===============================

SQLAlchemy ORM models for the member registry.

Tables:
- member_types: Membership categories
- members: Organisation members
- assessments: Member assessments
- educations: Completed basic educations
- appearances: Member appearances
- further_educations: Further education courses

Version: 0.1.0
"""

from services.member_registry.models.member import MemberModel, MemberTypeModel
from services.member_registry.models.records import (
    AppearancesModel,
    AssessmentModel,
    EducationModel,
    FurtherEducationModel,
)

__all__ = [
    # Member
    "MemberModel",
    "MemberTypeModel",
    # Member records
    "AssessmentModel",
    "EducationModel",
    "AppearancesModel",
    "FurtherEducationModel",
]
