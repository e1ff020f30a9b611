"""
Member Registry Client
======================

Async HTTP client for the member registry, following the contract the web
client's list and dialog controllers rely on:

- paged loading with a ``field,direction`` sort and an ``id`` tie-break
- save as PUT when the record has an id, POST otherwise
- successful saves are announced to listeners, e.g. a list view refreshing
  itself
- failures carry the server-supplied ``message`` key

Usage:
    async with MemberRegistryClient("http://localhost:8080") as client:
        member = await client.save("members", {"last_name": "Muster"})
        page = await client.load_page("members", page=0, predicate="last_name")

Version: 0.1.0
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import httpx

from shared.logging import get_logger


logger = get_logger(__name__)

_ALERT_SUFFIXES = ("-alert", "-error", "-entity", "-params")

# Called with the collection and the saved record
SaveListener = Callable[[str, dict[str, Any]], None]


class RegistryClientError(Exception):
    """A request to the registry failed."""

    def __init__(self, status_code: int, message: str | None, description: str | None = None) -> None:
        self.status_code = status_code
        self.message = message
        self.description = description
        super().__init__(f"{status_code}: {message or 'error.http'}")


@dataclass
class LoadedPage:
    """Records of one page plus the collection's total count."""

    items: list[dict[str, Any]]
    total_items: int
    page: int
    alerts: dict[str, str] = field(default_factory=dict)


def build_sort(predicate: str = "id", ascending: bool = True) -> list[str]:
    """
    Sort parameter as sent by the list view.

    Examples:
        >>> build_sort("last_name", ascending=False)
        ['last_name,desc', 'id']
        >>> build_sort()
        ['id,asc']
    """
    result = [f"{predicate},{'asc' if ascending else 'desc'}"]
    if predicate != "id":
        result.append("id")
    return result


class MemberRegistryClient:
    """Thin async client over the registry's REST API."""

    def __init__(
        self,
        base_url: str = "http://localhost:8080",
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
        on_saved: SaveListener | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            base_url: Registry base URL (without ``/api``)
            timeout: Request timeout in seconds
            client: Pre-configured httpx client (e.g. over an ASGI transport)
            on_saved: Listener notified after every successful save
        """
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers={"Accept": "application/json"},
        )
        self.last_alerts: dict[str, str] = {}
        self._save_listeners: list[SaveListener] = [on_saved] if on_saved else []

    def add_save_listener(self, listener: SaveListener) -> Callable[[], None]:
        """
        Register a listener for successful saves.

        Returns:
            Function that removes the listener again
        """
        self._save_listeners.append(listener)
        return lambda: self._save_listeners.remove(listener)

    async def __aenter__(self) -> "MemberRegistryClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        response = await self._client.request(method, url, **kwargs)
        self.last_alerts = {
            k.lower(): v for k, v in response.headers.items() if k.lower().endswith(_ALERT_SUFFIXES)
        }

        logger.debug(
            "registry_request",
            method=method,
            url=url,
            status=response.status_code,
        )

        if response.is_error:
            message = description = None
            if response.content:
                try:
                    payload = response.json()
                except ValueError:
                    payload = {}
                if not isinstance(payload, dict):
                    payload = {}
                message = payload.get("message")
                description = payload.get("description")
            raise RegistryClientError(response.status_code, message, description)

        return response

    async def load_page(
        self,
        collection: str,
        page: int = 0,
        size: int = 20,
        predicate: str = "id",
        ascending: bool = True,
    ) -> LoadedPage:
        """
        Load one page of a collection.

        Args:
            collection: Collection name, e.g. ``members``
            page: 0-based page index
            size: Page size
            predicate: Primary sort field
            ascending: Sort direction of ``predicate``
        """
        response = await self._request(
            "GET",
            f"/api/{collection}",
            params={"page": page, "size": size, "sort": build_sort(predicate, ascending)},
        )
        return LoadedPage(
            items=response.json(),
            total_items=int(response.headers.get("X-Total-Count", "0")),
            page=page,
            alerts=dict(self.last_alerts),
        )

    async def get(self, collection: str, identifier: int) -> dict[str, Any] | None:
        """One record, or None when the registry answers 404."""
        try:
            response = await self._request("GET", f"/api/{collection}/{identifier}")
        except RegistryClientError as e:
            if e.status_code == 404:
                return None
            raise
        return response.json()

    async def save(self, collection: str, record: dict[str, Any]) -> dict[str, Any]:
        """Update when ``record`` has an id, create otherwise."""
        method = "PUT" if record.get("id") is not None else "POST"
        response = await self._request(method, f"/api/{collection}", json=record)
        saved = response.json()

        for listener in self._save_listeners:
            listener(collection, saved)
        return saved

    async def delete(self, collection: str, identifier: int) -> None:
        await self._request("DELETE", f"/api/{collection}/{identifier}")

    async def member_records(self, member_id: int, relation: str) -> list[dict[str, Any]]:
        """
        Records owned by a member.

        Args:
            member_id: Member id
            relation: ``assessments``, ``educations``, ``appearances`` or ``furtheredu``
        """
        response = await self._request("GET", f"/api/members/{member_id}/{relation}")
        return response.json()
