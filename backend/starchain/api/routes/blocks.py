"""Block Lookup Routes — read-only access to sealed records.

Invariants:
    - Misses surface as NotFoundError (404) from the Ledger, never as null bodies
    - GET /blocks/{address} triggers chain validation when the setting asks for it

Design Decisions:
    - Paths kept from the original star registry client: /block/height, /block/hash, /blocks
"""

from typing import Any

from fastapi import APIRouter, Depends

from starchain.api.dependencies import get_app_settings, get_ledger
from starchain.config import Settings
from starchain.core.ledger import Ledger
from starchain.schemas.star import RecordResponse

router = APIRouter(tags=["blocks"])


@router.get("/block/height/{height}", response_model=RecordResponse)
def get_block_by_height(height: int, ledger: Ledger = Depends(get_ledger)):
    """Record at the given height."""
    return RecordResponse.model_validate(ledger.get_by_height(height).to_dict())


@router.get("/block/hash/{record_hash}", response_model=RecordResponse)
def get_block_by_hash(record_hash: str, ledger: Ledger = Depends(get_ledger)):
    """Record with the given hash."""
    return RecordResponse.model_validate(ledger.get_by_hash(record_hash).to_dict())


@router.get("/blocks/{address}")
def get_stars_by_owner(
    address: str,
    ledger: Ledger = Depends(get_ledger),
    settings: Settings = Depends(get_app_settings),
) -> list[Any]:
    """Decoded star payloads registered to a wallet address."""
    return ledger.get_records_by_owner(
        address, validate=settings.validate_on_owner_lookup,
    )
