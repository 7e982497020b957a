"""Shared fixtures for RFQ lead scoring tests."""

import asyncio
import os
import tempfile

# Point settings at a throwaway SQLite file before anything imports rfq_leads
_db_dir = tempfile.mkdtemp(prefix="rfq_leads_test_")
os.environ["DB_URL"] = f"sqlite+aiosqlite:///{os.path.join(_db_dir, 'test.db')}"
os.environ.setdefault("OPENAI_API_KEY", "test-key")

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient


async def _reset_db():
    from rfq_leads.db.models import Base
    from rfq_leads.db.session import engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


@pytest.fixture
def client():
    """FastAPI test client over a freshly emptied database."""
    from rfq_leads.main import app

    asyncio.run(_reset_db())
    with TestClient(app) as c:
        yield c


@pytest_asyncio.fixture
async def session_factory():
    from rfq_leads.db.session import async_session

    await _reset_db()
    return async_session


@pytest.fixture
def steel_rfq_payload():
    return {
        "session_id": "sess-steel-001",
        "category": "steel",
        "trade_type": "import",
        "items": [{"item_name": "TMT Bar", "quantity": 100, "unit": "MT"}],
        "description": "need urgently",
        "quality_standards": "IS 1786",
        "buyer_company": "Shree Infra Projects",
        "buyer_location": "Pune, Maharashtra",
    }


@pytest.fixture
def copper_rfq_payload():
    return {
        "session_id": "sess-copper-002",
        "category": "Metals - Non-Ferrous",
        "items": [{"item_name": "Copper", "quantity": 200, "unit": "MT"}],
    }
