"""Fixtures for API tests running against the SQLite test database."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from storefront.infrastructure.database import Base, engine
from storefront.main import app


@pytest_asyncio.fixture(autouse=True)
async def database():
    """Fresh tables for every test."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    await engine.dispose()


@pytest_asyncio.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http:
        yield http


@pytest.fixture
def product_payload() -> dict:
    return {
        "name": "DS-2CD2143G2-I Dome Camera",
        "category": "Cameras",
        "website_category": "ip-cameras",
        "status": "New",
        "description": "4MP AcuSense fixed dome",
    }
