"""API test fixtures — FastAPI test client bound to a ledger with test doubles.

Invariants:
    - A fresh app per test from create_app(), so env overrides set before the
      fixture runs are honoured
    - get_ledger dependency overridden: every test gets its own fresh Ledger
    - Lifespan does not run under ASGITransport, so no real clock or verifier is built
"""

import pytest
from httpx import ASGITransport, AsyncClient

from starchain.api.dependencies import get_ledger
from starchain.main import create_app


@pytest.fixture
def app(ledger):
    app = create_app()
    app.dependency_overrides[get_ledger] = lambda: ledger
    return app


@pytest.fixture
async def client(app):
    """FastAPI test client with the Ledger dependency overridden."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
