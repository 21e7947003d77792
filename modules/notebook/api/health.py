"""
Health Check Endpoints.

Endpoints:
- /health: Liveness check (process running)
- /health/ready: Readiness check (database reachable; text generation reported)
"""

import asyncio
from typing import Any

from fastapi import APIRouter, HTTPException, Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from modules.notebook.core.config import get_app_config
from modules.notebook.core.database import Database
from modules.notebook.core.logging import get_logger
from modules.notebook.core.text_generation import TextGenerationClient
from modules.notebook.core.utils import elapsed_ms, utc_now

router = APIRouter()
logger = get_logger(__name__)


async def check_database(database: Database | None) -> dict[str, Any]:
    """
    Check database connectivity.

    Returns:
        Dict with status, latency, and optional error message
    """
    if database is None:
        return {"status": "not_configured"}

    start = utc_now()
    try:
        async with database.session() as session:
            await session.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Database health check failed", extra={"error": str(e)})
        return {"status": "unhealthy", "error": str(e)}

    return {"status": "healthy", "latency_ms": elapsed_ms(start)}


async def check_text_generation(
    client: TextGenerationClient | None,
    timeout: float,
) -> dict[str, Any]:
    """
    Check whether the text-generation API answers.

    Returns:
        Dict with status and, when a client is configured, reachable
    """
    if client is None:
        return {"status": "not_configured"}

    try:
        async with asyncio.timeout(timeout):
            reachable = await client.is_healthy()
    except TimeoutError:
        reachable = False

    if not reachable:
        logger.warning("Text generation health check failed")
    return {"status": "configured", "reachable": reachable}


@router.get("/health")
async def health_check() -> dict[str, str]:
    """
    Liveness check.

    Returns 200 if the process is running. No dependency checks.
    """
    return {"status": "healthy"}


@router.get("/health/ready")
async def readiness_check(request: Request) -> dict[str, Any]:
    """
    Readiness check.

    Returns 503 when the database is unreachable. The text-generation API
    is reported but never blocks readiness.
    """
    timeouts = get_app_config().application.timeouts
    database = getattr(request.app.state, "database", None)

    try:
        async with asyncio.timeout(timeouts.database):
            db_result = await check_database(database)
    except TimeoutError:
        db_result = {"status": "unhealthy", "error": "timed out"}

    checks = {
        "database": db_result,
        "text_generation": await check_text_generation(
            getattr(request.app.state, "text_client", None),
            timeouts.external_api,
        ),
    }

    if db_result["status"] == "unhealthy":
        logger.warning("Readiness check failed", extra={"checks": checks})
        raise HTTPException(
            status_code=503,
            detail={
                "status": "unhealthy",
                "checks": checks,
                "timestamp": utc_now().isoformat(),
            },
        )

    return {
        "status": "healthy",
        "checks": checks,
        "timestamp": utc_now().isoformat(),
    }
