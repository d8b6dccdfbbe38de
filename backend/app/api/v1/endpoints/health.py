"""
Health Check Endpoints

- /health/live  - Basic liveness (app is running)
- /health/ready - Readiness check (database reachable, tables created)
- /health/deep  - Readiness plus configuration diagnostics
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Dict, Any
import time

from app.core.config import settings
from app.core.database import get_db
from app.core.logging_config import logger
from app.core.types import utcnow


router = APIRouter(prefix="/health", tags=["Health Checks"])


async def check_database(db: AsyncSession) -> Dict[str, Any]:
    """Check database connectivity and that the schema exists"""
    start = time.time()
    try:
        await db.execute(text("SELECT 1"))
        try:
            await db.execute(text("SELECT COUNT(*) FROM users"))
            tables_ok = True
        except SQLAlchemyError:
            await db.rollback()
            tables_ok = False

        return {
            "status": "healthy",
            "latency_ms": round((time.time() - start) * 1000, 2),
            "tables_ready": tables_ok,
        }
    except SQLAlchemyError as e:
        logger.error(f"[HealthCheck] Database check failed: {e}")
        return {
            "status": "unhealthy",
            "latency_ms": round((time.time() - start) * 1000, 2),
            "tables_ready": False,
            "error": str(e),
        }


def check_email_config() -> Dict[str, Any]:
    """Check email configuration (not actual connectivity)"""
    if settings.email_configured:
        return {"status": "healthy", "configured": True, "host": settings.SMTP_HOST}
    return {
        "status": "degraded",
        "configured": False,
        "message": "SMTP not configured - password reset emails are skipped",
    }


def check_critical_env_vars() -> Dict[str, Any]:
    """Verify critical settings are not placeholders"""
    critical_vars = {
        "DATABASE_URL": settings.DATABASE_URL,
        "SECRET_KEY": settings.SECRET_KEY,
        "JWT_SECRET_KEY": settings.JWT_SECRET_KEY,
    }
    missing = [
        name for name, value in critical_vars.items()
        if not value or value in ["CHANGE_ME", "your-secret-key"]
    ]
    if missing:
        return {
            "status": "unhealthy",
            "missing_critical": missing,
            "message": f"Missing critical env vars: {', '.join(missing)}",
        }
    return {"status": "healthy", "missing_critical": []}


@router.get("/live")
async def liveness_check():
    """Liveness probe - the process is running."""
    return {
        "status": "alive",
        "timestamp": utcnow().isoformat(),
        "app": settings.APP_NAME,
    }


@router.get("/ready")
async def readiness_check(db: AsyncSession = Depends(get_db)):
    """Readiness probe - 503 unless the database is reachable and migrated."""
    db_check = await check_database(db)
    is_ready = db_check.get("status") == "healthy" and db_check.get("tables_ready", False)

    response = {
        "status": "ready" if is_ready else "not_ready",
        "timestamp": utcnow().isoformat(),
        "checks": {"database": db_check},
    }

    if not is_ready:
        logger.warning(f"[HealthCheck] Readiness check failed: {response}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=response
        )

    return response


@router.get("/deep")
async def deep_health_check(db: AsyncSession = Depends(get_db)):
    """Full diagnostics for debugging."""
    start_time = time.time()

    checks = {
        "database": await check_database(db),
        "email": check_email_config(),
        "environment": check_critical_env_vars(),
    }

    statuses = [c.get("status", "unknown") for c in checks.values()]
    if "unhealthy" in statuses:
        overall = "unhealthy"
    elif "degraded" in statuses:
        overall = "degraded"
    else:
        overall = "healthy"

    response = {
        "status": overall,
        "timestamp": utcnow().isoformat(),
        "environment": settings.ENVIRONMENT,
        "total_check_time_ms": round((time.time() - start_time) * 1000, 2),
        "checks": checks,
    }

    if overall == "unhealthy":
        logger.error(f"[HealthCheck] Deep check unhealthy: {response}")

    return response
