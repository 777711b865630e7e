# ledgermatch/routers/health.py

from fastapi import APIRouter

from ledgermatch.core.formats import BANK_FORMATS

router = APIRouter()


@router.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {
        "status": "healthy",
        "service": "ledgermatch-api",
    }


@router.get("/ready")
async def readiness_check():
    """Readiness check - the engine is ready once the format registry is loaded."""
    return {
        "status": "ready" if BANK_FORMATS else "not_ready",
        "checks": {
            "bank_formats": len(BANK_FORMATS),
        }
    }
