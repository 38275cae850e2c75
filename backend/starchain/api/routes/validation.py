"""Chain Validation Route — on-demand tamper detection report.

Invariants:
    - Always 200: findings are a diagnosis, not a request failure
    - valid is True iff errors is empty
"""

import logging

from fastapi import APIRouter, Depends

from starchain.api.dependencies import get_ledger
from starchain.core.ledger import Ledger
from starchain.schemas.star import ValidationFinding, ValidationReport

logger = logging.getLogger(__name__)
router = APIRouter(tags=["validation"])


@router.get("/validateChain", response_model=ValidationReport)
@router.get("/testChainValidation", response_model=ValidationReport)
def validate_chain(ledger: Ledger = Depends(get_ledger)):
    """Validate every record's hash and link."""
    errors = ledger.validate_chain()
    if not errors:
        return ValidationReport(valid=True, message="No errors detected.")
    logger.warning(f"Chain validation found {len(errors)} error(s)")
    return ValidationReport(
        valid=False,
        message=f"{len(errors)} error(s) detected.",
        errors=[
            ValidationFinding(code=e.code, height=e.height, message=e.message)
            for e in errors
        ],
    )
