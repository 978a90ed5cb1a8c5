"""Root conftest: shared test infrastructure.

Provides:
- anyio backend pinned to asyncio (the fetcher uses asyncio primitives)
- Autouse reset of the shared GitHub HTTP client between tests
"""

from __future__ import annotations

import pytest

import ghactivity.services.github.http_client as http_client


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture(autouse=True)
def _reset_github_client():
    """Never let a real AsyncClient leak from one test into another."""
    original = http_client._client
    http_client._client = None
    yield
    http_client._client = original
