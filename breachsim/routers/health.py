"""Health check router."""

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from breachsim.data.ttp_library import get_ttp_registry
from breachsim.database import get_db

router = APIRouter()

VERSION = "0.1.0"


@router.get("/health")
async def health_check(db: AsyncSession = Depends(get_db)):
    """Check API and database health."""
    try:
        await db.execute(text("SELECT 1"))
        db_status = "healthy"
    except Exception as e:
        db_status = f"unhealthy: {str(e)}"

    return {
        "status": "healthy" if db_status == "healthy" else "degraded",
        "database": db_status,
        "version": VERSION,
    }


@router.get("/ready")
async def readiness_check():
    """Check if the TTP library is loaded and the API can take traffic."""
    return {"ready": True, "ttp_library_size": len(get_ttp_registry())}
