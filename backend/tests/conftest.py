"""Root conftest — shared test doubles and a ledger wired to them.

Invariants:
    - FakeClock starts at T=1000 and only moves when a test advances it
    - StubVerifier returns whatever `accept` is set to and records every call
    - Settings cache cleared so env overrides never leak between tests
"""

import pytest

from starchain.config import get_settings
from starchain.core.ledger import Ledger
from starchain.infrastructure.hashing import Sha256HashProvider

ADDRESS = "1A2bTestWalletAddressXyz"


class FakeClock:
    def __init__(self, now: int = 1000):
        self.current = now

    def now(self) -> int:
        return self.current

    def advance(self, seconds: int) -> None:
        self.current += seconds


class StubVerifier:
    def __init__(self, accept: bool = True):
        self.accept = accept
        self.calls: list[tuple[str, str, str]] = []

    def verify(self, message: str, address: str, signature: str) -> bool:
        self.calls.append((message, address, signature))
        return self.accept


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def verifier():
    return StubVerifier()


@pytest.fixture
def hasher():
    return Sha256HashProvider()


@pytest.fixture
def ledger(hasher, verifier, clock):
    return Ledger(hasher, verifier, clock)


@pytest.fixture
def address():
    return ADDRESS


@pytest.fixture
def submit(ledger, clock, address):
    """Register a star through the full ownership flow; returns the committed record."""
    def _submit(payload=None, owner=address):
        message = ledger.request_ownership_challenge(owner)
        return ledger.submit_star(owner, message, "sig", payload or {"star": {"ra": "1h"}})
    return _submit
