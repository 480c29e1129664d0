"""
Health check router with database connectivity verification.
"""
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session

from clubledger import __version__
from clubledger.core.config import get_settings
from clubledger.db.session import get_db

router = APIRouter(tags=["health"])
settings = get_settings()


@router.get("/health")
async def health_check():
    """Liveness: answers as long as the process is up."""
    return {"status": "ok"}


@router.get("/api/health")
def api_health_check(db: Session = Depends(get_db)):
    """
    Readiness: the ledger is useless without its database.

    Returns 200 if `SELECT 1` succeeds, 503 with the driver message otherwise.
    """
    report = {
        "status": "ok",
        "app": settings.APP_NAME,
        "version": __version__,
        "services": {},
    }

    try:
        db.execute(text("SELECT 1"))
    except Exception as e:
        report["status"] = "unhealthy"
        report["services"]["database"] = {"status": "error", "message": str(e)}
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=report)

    report["services"]["database"] = {"status": "ok"}
    return report
