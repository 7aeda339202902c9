"""Health check endpoints for monitoring and load balancers."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy import text

from readtrace.database import get_db
from readtrace import __version__


router = APIRouter(tags=["health"])


@router.get("/health")
def health_check(db: Session = Depends(get_db)):
    """
    Health check endpoint for load balancers and monitoring.

    Returns status of the database connection.
    """
    status = {
        "status": "healthy",
        "version": __version__,
        "checks": {}
    }

    try:
        db.execute(text("SELECT 1"))
        status["checks"]["database"] = "ok"
    except Exception as e:
        status["checks"]["database"] = f"error: {str(e)}"
        status["status"] = "unhealthy"

    return status


@router.get("/live")
def liveness_check():
    """Liveness check - is the process alive?"""
    return {"alive": True, "version": __version__}
