"""
Health check endpoints
"""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from punchlines.core.config import get_settings
from punchlines.core.database import get_db
from punchlines.core.logging_config import LoggingConfig
from punchlines.utils.datetime_utils import utc_now

logger = LoggingConfig.get_logger(__name__)
router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check():
    """Basic liveness check"""
    return {
        "status": "healthy",
        "timestamp": utc_now().isoformat(),
        "service": get_settings().app_name
    }


@router.get("/health/detailed")
async def detailed_health_check(db: Session = Depends(get_db)):
    """Health check including the database"""
    settings = get_settings()
    components = {}
    healthy = True

    try:
        db.execute(text("SELECT 1"))
        components["database"] = {"status": "healthy"}
    except SQLAlchemyError as e:
        logger.warning(f"Database health check failed: {e}")
        components["database"] = {"status": "unhealthy", "error": type(e).__name__}
        healthy = False

    return JSONResponse(
        status_code=200 if healthy else 503,
        content={
            "status": "healthy" if healthy else "unhealthy",
            "timestamp": utc_now().isoformat(),
            "service": settings.app_name,
            "environment": settings.app_env,
            "components": components,
        }
    )
