"""
Test Configuration
==================

Pytest fixtures for member registry tests.
"""

import os
from collections.abc import AsyncGenerator
from typing import Any

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

# Set test environment
os.environ["ENVIRONMENT"] = "testing"
os.environ["STORE_BACKEND"] = "memory"
os.environ["APP_NAME"] = "slrgApp"


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Use asyncio backend for async tests."""
    return "asyncio"


@pytest.fixture
def store_provider() -> Any:
    """Fresh in-memory store provider for each test."""
    from services.member_registry.store import MemoryStoreProvider

    return MemoryStoreProvider()


@pytest.fixture
def app(store_provider: Any) -> FastAPI:
    """Member registry application over in-memory stores."""
    from services.member_registry.main import create_app

    return create_app(store_provider)


@pytest_asyncio.fixture
async def member_registry_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create test client for the Member Registry Service."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


@pytest.fixture
def sample_member_data() -> dict[str, Any]:
    """Sample member data for tests."""
    return {
        "first_name": "Alice",
        "last_name": "Muster",
        "birthday": "1990-04-12",
        "email": "alice@example.ch",
        "phone": "+41 79 000 00 00",
        "street": "Seestrasse 1",
        "zip_code": "8002",
        "city": "Zürich",
    }


@pytest.fixture
def sample_assessment_data() -> dict[str, Any]:
    """Sample assessment data (member_id to be filled in)."""
    return {
        "score": 90,
        "assessed_on": "2016-05-01",
        "remarks": "Pool rescue test passed",
    }
