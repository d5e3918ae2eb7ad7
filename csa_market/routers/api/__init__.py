"""API routers.

- farms: farm listing (filters + cursor pagination) and farm management
- shares: CSA shares offered by farms
"""

from fastapi import APIRouter

from csa_market.routers.api import farms, shares

router = APIRouter()
router.include_router(farms.router, prefix="/farms")
router.include_router(shares.router, prefix="/shares")


@router.get("/health", tags=["health"])
def api_health_check() -> dict[str, str]:
    return {"status": "ok"}


__all__ = ["router"]
