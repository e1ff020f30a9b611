"""
Unit tests for alert and pagination headers.
"""

from shared.models import Page
from services.member_registry.routes.headers import (
    alert_header_names,
    entity_creation_alert,
    entity_deletion_alert,
    entity_update_alert,
    failure_alert,
    pagination_headers,
)


def _page(number: int, size: int, total: int) -> Page[int]:
    return Page(content=[], number=number, size=size, total_elements=total)


class TestAlertHeaders:
    """Tests for alert headers."""

    def test_creation_alert(self) -> None:
        """Creation alert carries key, entity and id."""
        headers = entity_creation_alert("member", 1)

        assert headers == {
            "X-slrgApp-alert": "success.create",
            "X-slrgApp-entity": "member",
            "X-slrgApp-params": "1",
        }

    def test_update_and_deletion_keys(self) -> None:
        """Update and deletion alerts use their own keys."""
        assert entity_update_alert("assessment", 7)["X-slrgApp-alert"] == "success.update"
        assert entity_deletion_alert("assessment", 7)["X-slrgApp-alert"] == "success.delete"

    def test_failure_alert(self) -> None:
        """Failure alert carries the error key and entity name."""
        headers = failure_alert("member", "idexists")

        assert headers == {
            "X-slrgApp-error": "error.idexists",
            "X-slrgApp-params": "member",
        }

    def test_header_names(self) -> None:
        """All alert header names share the application prefix."""
        assert all(name.startswith("X-slrgApp-") for name in alert_header_names())


class TestPaginationHeaders:
    """Tests for Link / X-Total-Count headers."""

    def test_middle_page_has_all_links(self) -> None:
        """A middle page links next, prev, last and first."""
        headers = pagination_headers(_page(1, 20, 55), "/api/members")

        assert headers["X-Total-Count"] == "55"
        assert headers["Link"] == (
            '</api/members?page=2&size=20>; rel="next",'
            '</api/members?page=0&size=20>; rel="prev",'
            '</api/members?page=2&size=20>; rel="last",'
            '</api/members?page=0&size=20>; rel="first"'
        )

    def test_first_page_has_no_prev(self) -> None:
        """The first page has no prev link."""
        link = pagination_headers(_page(0, 20, 55), "/api/members")["Link"]

        assert 'rel="next"' in link
        assert 'rel="prev"' not in link

    def test_last_page_has_no_next(self) -> None:
        """The last page has no next link."""
        link = pagination_headers(_page(2, 20, 55), "/api/members")["Link"]

        assert 'rel="next"' not in link
        assert 'rel="prev"' in link

    def test_empty_collection(self) -> None:
        """An empty collection links last and first to page 0."""
        headers = pagination_headers(_page(0, 20, 0), "/api/assessments")

        assert headers["X-Total-Count"] == "0"
        assert headers["Link"] == (
            '</api/assessments?page=0&size=20>; rel="last",'
            '</api/assessments?page=0&size=20>; rel="first"'
        )
