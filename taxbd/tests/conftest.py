"""
Test configuration for BD Tax Calculator tests.

Provides an async httpx client bound to the ASGI app — no live server needed.
"""
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from taxbd.main import app


@pytest_asyncio.fixture
async def client():
    """Async httpx client using ASGI transport."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
