"""HTTP routes."""

from fastapi import APIRouter

from sheetledger.api.routes import health, ledger, users

router = APIRouter()

router.include_router(health.router)
router.include_router(users.router)
router.include_router(ledger.router)
