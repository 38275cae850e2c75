"""Route Dependencies — hands the process-wide Ledger and settings to route handlers.

Invariants:
    - Exactly one Ledger per process, created in the app lifespan
    - Settings are the ones create_app() was built with
    - Tests replace the Ledger via app.dependency_overrides[get_ledger]
"""

from fastapi import Request

from starchain.config import Settings
from starchain.core.ledger import Ledger


def get_ledger(request: Request) -> Ledger:
    return request.app.state.ledger


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
