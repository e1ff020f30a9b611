"""
Response Headers
================

Alert and pagination headers read by the web client.

Alert headers carry a machine-readable key plus the entity name and
identifier. Pagination headers carry RFC 5988 ``Link`` references and the
total element count.

Version: 0.1.0
"""

from typing import Any
from urllib.parse import urlencode

from shared.config import settings
from shared.models.common import Page


def _header(suffix: str) -> str:
    return f"X-{settings.app_name}-{suffix}"


def alert_header_names() -> list[str]:
    """Names of all alert headers (exposed through CORS)."""
    return [_header("alert"), _header("error"), _header("entity"), _header("params")]


def create_alert(key: str, entity_name: str, param: Any) -> dict[str, str]:
    """Informational alert keyed by ``key`` (e.g. ``success.create``)."""
    return {
        _header("alert"): key,
        _header("entity"): entity_name,
        _header("params"): str(param),
    }


def entity_creation_alert(entity_name: str, identifier: Any) -> dict[str, str]:
    return create_alert("success.create", entity_name, identifier)


def entity_update_alert(entity_name: str, identifier: Any) -> dict[str, str]:
    return create_alert("success.update", entity_name, identifier)


def entity_deletion_alert(entity_name: str, identifier: Any) -> dict[str, str]:
    return create_alert("success.delete", entity_name, identifier)


def failure_alert(entity_name: str, error_key: str) -> dict[str, str]:
    """Failure alert, e.g. ``error.idexists`` for entity ``member``."""
    return {
        _header("error"): f"error.{error_key}",
        _header("params"): entity_name,
    }


def _page_uri(base_url: str, page: int, size: int) -> str:
    return f"{base_url}?{urlencode({'page': page, 'size': size})}"


def pagination_headers(page: Page[Any], base_url: str) -> dict[str, str]:
    """
    Build ``Link`` and ``X-Total-Count`` headers for one page.

    ``next`` and ``prev`` are present only when such a page exists; ``last``
    and ``first`` are always present.

    Example:
        </api/members?page=1&size=20>; rel="next",<...>; rel="last",<...>; rel="first"
    """
    links: list[str] = []

    if page.has_next:
        links.append(f'<{_page_uri(base_url, page.number + 1, page.size)}>; rel="next"')
    if page.has_previous:
        links.append(f'<{_page_uri(base_url, page.number - 1, page.size)}>; rel="prev"')

    last_page = max(page.total_pages - 1, 0)
    links.append(f'<{_page_uri(base_url, last_page, page.size)}>; rel="last"')
    links.append(f'<{_page_uri(base_url, 0, page.size)}>; rel="first"')

    return {
        "Link": ",".join(links),
        "X-Total-Count": str(page.total_elements),
    }
