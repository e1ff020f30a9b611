"""
Member Service
==============

Member operations spanning more than one store.

Version: 0.1.0
"""

from typing import Any

from shared.logging import get_logger
from services.member_registry.resources import MEMBER_FOREIGN_KEY, MEMBER_RELATIONS, MEMBERS
from services.member_registry.store import EntityStore, StoreSession


logger = get_logger(__name__)


class MemberService:
    """
    Member deletion with removal of owned records.

    A member owns its assessments, educations, appearances and further
    education records; they are deleted before the member row.
    """

    def __init__(
        self,
        members: EntityStore[Any],
        owned: dict[str, EntityStore[Any]],
    ) -> None:
        self.members = members
        self.owned = owned

    @classmethod
    def from_session(cls, stores: StoreSession) -> "MemberService":
        """Build the service from the stores of one unit of work."""
        return cls(
            members=stores.store(MEMBERS),
            owned={
                relation: stores.store(resource)
                for relation, resource in MEMBER_RELATIONS.items()
            },
        )

    async def delete(self, member_id: int) -> bool:
        """
        Delete a member and every record it owns.

        Returns:
            Whether a member row was removed
        """
        removed: dict[str, int] = {}
        for relation, store in self.owned.items():
            removed[relation] = await store.delete_by_parent(MEMBER_FOREIGN_KEY, member_id)

        deleted = await self.members.delete(member_id)

        logger.info(
            "member_deleted",
            member_id=member_id,
            existed=deleted,
            owned_records_removed=removed,
        )
        return deleted
