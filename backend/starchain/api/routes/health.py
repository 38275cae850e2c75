"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /api/v1/health/ always returns 200 if process is up (liveness)
    - GET /api/v1/health/ready returns 503 until the genesis record exists (readiness)
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from starchain.api.dependencies import get_ledger
from starchain.core.ledger import Ledger

router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "starchain-api",
        "version": "1.0.0",
    }


@router.get("/ready")
def readiness_check(ledger: Ledger = Depends(get_ledger)):
    """Readiness probe — chain must hold its genesis record."""
    height = ledger.current_height()
    if height < 0:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "genesis_missing"},
        )
    return {"status": "ready", "checks": {"ledger": "healthy", "height": height}}
