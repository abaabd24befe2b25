"""
Health check endpoints.
"""

from aiohttp import web
from loguru import logger
from sqlalchemy import text

from expeditions.api import keys
from expeditions.database import get_session


async def health_handler(request: web.Request) -> web.Response:
    """
    Health check endpoint.

    Returns:
        JSON response with database status
    """
    try:
        async with get_session(request.app[keys.SESSION_MAKER]) as session:
            await session.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        return web.json_response(
            {
                "status": "unhealthy",
                "error": str(e),
            },
            status=503,
        )

    return web.json_response(
        {
            "status": "healthy",
            "database": "ok",
        }
    )


async def liveness_handler(request: web.Request) -> web.Response:
    """
    Liveness check endpoint.

    Returns:
        JSON response indicating if the process is alive
    """
    return web.json_response(
        {
            "status": "alive",
            "alive": True,
        }
    )
