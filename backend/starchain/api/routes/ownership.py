"""Ownership Routes — challenge issue and signed star submission.

Invariants:
    - POST /requestOwnership is stateless: the challenge embeds its issue time
    - POST /submitstar commits a record only after window and signature checks pass
    - Expired → 403, bad signature → 401, malformed message → 400 (via error handlers)

Design Decisions:
    - Star stored as {"star": ...}: owner lookups return the shape the original client reads
"""

from fastapi import APIRouter, Depends

from starchain.api.dependencies import get_ledger
from starchain.core.ledger import Ledger
from starchain.schemas.star import OwnershipRequest, RecordResponse, StarSubmission

router = APIRouter(tags=["ownership"])


@router.post("/requestOwnership")
def request_ownership(
    body: OwnershipRequest, ledger: Ledger = Depends(get_ledger),
) -> str:
    """Return the message the wallet must sign."""
    return ledger.request_ownership_challenge(body.address)


@router.post("/submitstar", response_model=RecordResponse)
def submit_star(
    body: StarSubmission, ledger: Ledger = Depends(get_ledger),
):
    """Register a star for the wallet that signed the challenge."""
    record = ledger.submit_star(
        body.address, body.message, body.signature, {"star": body.star},
    )
    return RecordResponse.model_validate(record.to_dict())
