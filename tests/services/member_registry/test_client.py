"""
Member Registry Client Tests
============================

Tests for MemberRegistryClient against the application over an ASGI
transport.

Version: 0.1.0
"""

from typing import Any

import pytest
from httpx import AsyncClient

from services.member_registry.client import (
    MemberRegistryClient,
    RegistryClientError,
    build_sort,
)


@pytest.fixture
def registry(member_registry_client: AsyncClient) -> MemberRegistryClient:
    return MemberRegistryClient(client=member_registry_client)


class TestBuildSort:
    """Tests for the list view's sort parameter."""

    def test_default(self) -> None:
        """Sorting by id needs no tie-break."""
        assert build_sort() == ["id,asc"]

    def test_predicate_gets_id_tie_break(self) -> None:
        """Other predicates are followed by id."""
        assert build_sort("last_name", ascending=False) == ["last_name,desc", "id"]


class TestMemberRegistryClient:
    """Tests for client operations."""

    @pytest.mark.asyncio
    async def test_save_creates_then_updates(
        self,
        registry: MemberRegistryClient,
        sample_member_data: dict[str, Any],
    ) -> None:
        """save POSTs a new record and PUTs a record with id."""
        created = await registry.save("members", sample_member_data)
        assert created["id"] == 1
        assert registry.last_alerts["x-slrgapp-alert"] == "success.create"

        updated = await registry.save("members", {**created, "city": "Luzern"})
        assert updated["city"] == "Luzern"
        assert registry.last_alerts["x-slrgapp-alert"] == "success.update"

    @pytest.mark.asyncio
    async def test_load_page(self, registry: MemberRegistryClient) -> None:
        """load_page returns items and the total count."""
        for name in ("B", "A", "C"):
            await registry.save("members", {"last_name": name})

        page = await registry.load_page("members", page=0, size=2, predicate="last_name")

        assert page.total_items == 3
        assert [m["last_name"] for m in page.items] == ["A", "B"]

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self, registry: MemberRegistryClient) -> None:
        """A 404 maps to None."""
        assert await registry.get("members", 12) is None

    @pytest.mark.asyncio
    async def test_failure_carries_message_key(
        self,
        registry: MemberRegistryClient,
    ) -> None:
        """Server error keys are surfaced on the exception."""
        with pytest.raises(RegistryClientError) as exc_info:
            await registry.load_page("members", predicate="salary")

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "error.sort"
        assert registry.last_alerts["x-slrgapp-error"] == "error.sort"

    @pytest.mark.asyncio
    async def test_member_records_and_delete(
        self,
        registry: MemberRegistryClient,
        sample_member_data: dict[str, Any],
    ) -> None:
        """Owned records are listed and removed with the member."""
        member = await registry.save("members", sample_member_data)
        await registry.save("educations", {"member_id": member["id"], "title": "Brevet Plus Pool"})

        records = await registry.member_records(member["id"], "educations")
        assert [r["title"] for r in records] == ["Brevet Plus Pool"]

        await registry.delete("members", member["id"])

        assert await registry.get("members", member["id"]) is None
        with pytest.raises(RegistryClientError) as exc_info:
            await registry.member_records(member["id"], "educations")
        assert exc_info.value.status_code == 404
        assert exc_info.value.message is None


class TestSaveListeners:
    """Tests for save notifications."""

    @pytest.mark.asyncio
    async def test_listeners_receive_saved_record(
        self,
        member_registry_client: AsyncClient,
        sample_member_data: dict[str, Any],
    ) -> None:
        """Every successful save is announced with the stored record."""
        events: list[tuple[str, dict[str, Any]]] = []
        registry = MemberRegistryClient(
            client=member_registry_client,
            on_saved=lambda collection, record: events.append((collection, record)),
        )

        created = await registry.save("members", sample_member_data)
        await registry.save("members", {**created, "city": "Bern"})

        assert [(c, r["id"]) for c, r in events] == [("members", 1), ("members", 1)]
        assert events[1][1]["city"] == "Bern"

    @pytest.mark.asyncio
    async def test_failed_save_is_not_announced(self, registry: MemberRegistryClient) -> None:
        """Rejected saves do not notify listeners."""
        events: list[str] = []
        registry.add_save_listener(lambda collection, record: events.append(collection))

        with pytest.raises(RegistryClientError):
            await registry.save("assessments", {"member_id": 999, "score": 90})

        assert events == []

    @pytest.mark.asyncio
    async def test_removed_listener(self, registry: MemberRegistryClient) -> None:
        """A removed listener is no longer called."""
        events: list[str] = []
        remove = registry.add_save_listener(lambda collection, record: events.append(collection))
        remove()

        await registry.save("membertypes", {"name": "Aktiv"})

        assert events == []
