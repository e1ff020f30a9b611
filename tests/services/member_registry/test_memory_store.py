"""
In-Memory Store Tests
=====================

Tests for InMemoryEntityStore.

Version: 0.1.0
"""

from datetime import date

import pytest

from shared.models import Assessment, Member, MemberType, PageRequest, SortDirection, SortOrder
from services.member_registry.exceptions import InvalidReferenceError, InvalidSortError
from services.member_registry.resources import ASSESSMENTS, MEMBER_TYPES, MEMBERS
from services.member_registry.store import InMemoryEntityStore, MemoryStoreProvider


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def members() -> InMemoryEntityStore[Member]:
    return InMemoryEntityStore(MEMBERS)


@pytest.fixture
def assessments() -> InMemoryEntityStore[Assessment]:
    return InMemoryEntityStore(ASSESSMENTS)


async def _seed(store: InMemoryEntityStore[Member], *names: str) -> list[Member]:
    return [await store.insert(Member(last_name=name)) for name in names]


# =============================================================================
# Insert / Get / Update / Delete
# =============================================================================


class TestInMemoryCrud:
    """Tests for basic record lifecycle."""

    @pytest.mark.asyncio
    async def test_insert_assigns_distinct_ids(self, members) -> None:
        """Each insert gets a fresh identifier."""
        stored = await _seed(members, "A", "B", "C")

        assert [m.id for m in stored] == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_insert_does_not_mutate_input(self, members) -> None:
        """The caller's record keeps id None."""
        record = Member(last_name="Muster")

        await members.insert(record)

        assert record.id is None

    @pytest.mark.asyncio
    async def test_get_returns_copy(self, members) -> None:
        """Mutating a fetched record does not change the store."""
        (stored,) = await _seed(members, "Muster")

        fetched = await members.get(stored.id)
        fetched.last_name = "Changed"

        assert (await members.get(stored.id)).last_name == "Muster"

    @pytest.mark.asyncio
    async def test_get_missing(self, members) -> None:
        """Unknown id returns None."""
        assert await members.get(42) is None

    @pytest.mark.asyncio
    async def test_update_replaces_record(self, members) -> None:
        """Update is a full replace."""
        (stored,) = await _seed(members, "Muster")
        stored.first_name = "Alice"
        stored.city = "Bern"

        updated = await members.update(stored)

        assert updated.first_name == "Alice"
        assert (await members.get(stored.id)).city == "Bern"

    @pytest.mark.asyncio
    async def test_update_missing_returns_none(self, members) -> None:
        """Updating an unknown id returns None."""
        assert await members.update(Member(id=99, last_name="Ghost")) is None
        assert len(members) == 0

    @pytest.mark.asyncio
    async def test_delete(self, members) -> None:
        """Delete reports whether a record existed."""
        (stored,) = await _seed(members, "Muster")

        assert await members.delete(stored.id) is True
        assert await members.delete(stored.id) is False
        assert await members.get(stored.id) is None

    @pytest.mark.asyncio
    async def test_ids_not_reused_after_delete(self, members) -> None:
        """Deleted ids are never handed out again."""
        first, second = await _seed(members, "A", "B")
        await members.delete(second.id)

        (third,) = await _seed(members, "C")

        assert third.id == 3


# =============================================================================
# Paging and Sorting
# =============================================================================


class TestInMemoryPaging:
    """Tests for find_page."""

    @pytest.mark.asyncio
    async def test_pages_partition_sorted_set(self, members) -> None:
        """The union of all pages is the full sorted set without duplicates."""
        await _seed(members, "E", "C", "A", "D", "B", "C", "A")
        sort = (SortOrder(field="last_name"), SortOrder(field="id"))

        collected: list[Member] = []
        first = await members.find_page(PageRequest(page=0, size=3, sort=sort))
        for number in range(first.total_pages):
            page = await members.find_page(PageRequest(page=number, size=3, sort=sort))
            collected.extend(page.content)

        assert first.total_pages == 3
        assert [m.last_name for m in collected] == ["A", "A", "B", "C", "C", "D", "E"]
        assert len({m.id for m in collected}) == 7

    @pytest.mark.asyncio
    async def test_descending_with_tie_break(self, members) -> None:
        """Equal keys are ordered by the next sort key."""
        await _seed(members, "A", "B", "A")
        sort = (
            SortOrder(field="last_name", direction=SortDirection.DESC),
            SortOrder(field="id"),
        )

        page = await members.find_page(PageRequest(size=10, sort=sort))

        assert [(m.last_name, m.id) for m in page.content] == [("B", 2), ("A", 1), ("A", 3)]

    @pytest.mark.asyncio
    async def test_nulls_last_ascending_first_descending(self, members) -> None:
        """NULLs sort like PostgreSQL."""
        await members.insert(Member(last_name="A", birthday=date(1990, 1, 1)))
        await members.insert(Member(last_name="B"))
        await members.insert(Member(last_name="C", birthday=date(1980, 1, 1)))

        asc = await members.find_page(PageRequest(size=10, sort=(SortOrder(field="birthday"),)))
        desc = await members.find_page(
            PageRequest(
                size=10,
                sort=(SortOrder(field="birthday", direction=SortDirection.DESC),),
            )
        )

        assert [m.last_name for m in asc.content] == ["C", "A", "B"]
        assert [m.last_name for m in desc.content] == ["B", "A", "C"]

    @pytest.mark.asyncio
    async def test_page_beyond_end_is_empty(self, members) -> None:
        """A page past the end has no content but keeps the total."""
        await _seed(members, "A", "B")

        page = await members.find_page(PageRequest(page=5, size=10))

        assert page.content == []
        assert page.total_elements == 2

    @pytest.mark.asyncio
    async def test_unknown_sort_field(self, members) -> None:
        """Sorting by an unknown property is rejected."""
        with pytest.raises(InvalidSortError) as exc_info:
            await members.find_page(PageRequest(sort=(SortOrder(field="salary"),)))

        assert exc_info.value.field == "salary"
        assert exc_info.value.message == "error.sort"


# =============================================================================
# Parent-scoped queries
# =============================================================================


class TestInMemoryByParent:
    """Tests for find_by_parent and delete_by_parent."""

    @pytest.mark.asyncio
    async def test_find_by_parent(self, assessments) -> None:
        """Only the parent's records are returned, ordered by id."""
        await assessments.insert(Assessment(member_id=1, score=90))
        await assessments.insert(Assessment(member_id=2, score=50))
        await assessments.insert(Assessment(member_id=1, score=70))

        owned = await assessments.find_by_parent("member_id", 1)

        assert [(a.id, a.score) for a in owned] == [(1, 90), (3, 70)]

    @pytest.mark.asyncio
    async def test_delete_by_parent(self, assessments) -> None:
        """All records of the parent are removed."""
        await assessments.insert(Assessment(member_id=1, score=90))
        await assessments.insert(Assessment(member_id=2, score=50))
        await assessments.insert(Assessment(member_id=1, score=70))

        removed = await assessments.delete_by_parent("member_id", 1)

        assert removed == 2
        assert await assessments.find_by_parent("member_id", 1) == []
        assert len(assessments) == 1


# =============================================================================
# Foreign keys
# =============================================================================


@pytest.fixture
def provider() -> MemoryStoreProvider:
    return MemoryStoreProvider()


class TestInMemoryReferences:
    """Tests for the foreign keys applied by MemoryStoreProvider."""

    @pytest.mark.asyncio
    async def test_insert_with_unknown_member(self, provider) -> None:
        """An owned record must reference an existing member."""
        assessments = provider.store(ASSESSMENTS)

        with pytest.raises(InvalidReferenceError) as exc_info:
            await assessments.insert(Assessment(member_id=999, score=90))

        assert exc_info.value.field == "member_id"
        assert exc_info.value.message == "error.reference"
        assert len(assessments) == 0

    @pytest.mark.asyncio
    async def test_update_to_unknown_member(self, provider) -> None:
        """Moving a record to a missing member is rejected."""
        member = await provider.store(MEMBERS).insert(Member(last_name="Muster"))
        assessments = provider.store(ASSESSMENTS)
        stored = await assessments.insert(Assessment(member_id=member.id, score=90))
        stored.member_id = 999

        with pytest.raises(InvalidReferenceError):
            await assessments.update(stored)

        assert (await assessments.get(stored.id)).member_id == member.id

    @pytest.mark.asyncio
    async def test_unknown_member_type(self, provider) -> None:
        """membertype_id must name an existing member type."""
        with pytest.raises(InvalidReferenceError) as exc_info:
            await provider.store(MEMBERS).insert(Member(last_name="Muster", membertype_id=3))

        assert exc_info.value.field == "membertype_id"

    @pytest.mark.asyncio
    async def test_member_delete_cascades(self, provider) -> None:
        """Deleting a member removes its owned records."""
        members = provider.store(MEMBERS)
        assessments = provider.store(ASSESSMENTS)
        alice = await members.insert(Member(last_name="Alice"))
        bob = await members.insert(Member(last_name="Bob"))
        await assessments.insert(Assessment(member_id=alice.id, score=90))
        await assessments.insert(Assessment(member_id=bob.id, score=40))

        await members.delete(alice.id)

        assert [a.member_id for a in await assessments.find_by_parent("member_id", bob.id)] == [
            bob.id
        ]
        assert len(assessments) == 1

    @pytest.mark.asyncio
    async def test_member_type_delete_sets_null(self, provider) -> None:
        """Deleting a member type keeps its members without a type."""
        member_types = provider.store(MEMBER_TYPES)
        members = provider.store(MEMBERS)
        active = await member_types.insert(MemberType(name="active"))
        member = await members.insert(Member(last_name="Muster", membertype_id=active.id))

        await member_types.delete(active.id)

        assert (await members.get(member.id)).membertype_id is None

    def test_unsupported_on_delete_action(self, members, assessments) -> None:
        """Only CASCADE and SET NULL are supported."""
        with pytest.raises(ValueError):
            assessments.add_reference("member_id", members, on_delete="RESTRICT")
