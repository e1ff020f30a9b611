"""
Resource Registry
=================

One ``Resource`` per entity type exposed over REST. A resource ties the
entity name used in alerts, the collection path, the Pydantic record model
and the SQLAlchemy model together.

Version: 0.1.0
"""

from dataclasses import dataclass

from shared.database.postgres import Base
from shared.models import (
    Appearances,
    Assessment,
    Education,
    FurtherEducation,
    Member,
    MemberType,
    Record,
)
from services.member_registry.models import (
    AppearancesModel,
    AssessmentModel,
    EducationModel,
    FurtherEducationModel,
    MemberModel,
    MemberTypeModel,
)


API_PREFIX = "/api"


@dataclass(frozen=True)
class Resource:
    """An entity type with its REST collection."""

    name: str
    collection: str
    schema: type[Record]
    model: type[Base]

    @property
    def path(self) -> str:
        """Base path of the collection, e.g. ``/api/members``."""
        return f"{API_PREFIX}/{self.collection}"

    @property
    def fields(self) -> frozenset[str]:
        """Record properties usable as sort keys."""
        return frozenset(self.schema.model_fields)

    def location(self, identifier: int) -> str:
        """Location of a single record."""
        return f"{self.path}/{identifier}"


MEMBER_TYPES = Resource("membertype", "membertypes", MemberType, MemberTypeModel)
MEMBERS = Resource("member", "members", Member, MemberModel)
ASSESSMENTS = Resource("assessment", "assessments", Assessment, AssessmentModel)
EDUCATIONS = Resource("education", "educations", Education, EducationModel)
APPEARANCES = Resource("appearances", "appearances", Appearances, AppearancesModel)
FURTHER_EDUCATIONS = Resource(
    "furtherEducation", "further-educations", FurtherEducation, FurtherEducationModel
)

RESOURCES: tuple[Resource, ...] = (
    MEMBER_TYPES,
    MEMBERS,
    ASSESSMENTS,
    EDUCATIONS,
    APPEARANCES,
    FURTHER_EDUCATIONS,
)

# Records owned by a member, keyed by the sub-path under /api/members/{id}/
MEMBER_RELATIONS: dict[str, Resource] = {
    "assessments": ASSESSMENTS,
    "educations": EDUCATIONS,
    "appearances": APPEARANCES,
    "furtheredu": FURTHER_EDUCATIONS,
}

MEMBER_FOREIGN_KEY = "member_id"
