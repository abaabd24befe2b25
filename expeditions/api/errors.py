"""
Error responses.

Every failure is rendered as ``{"statusCode", "error", "message"}``.
"""

import json
from http import HTTPStatus

from aiohttp import web
from loguru import logger
from pydantic import ValidationError

from expeditions.utils.exceptions import ExpeditionsError


def error_response(status: int, message: str) -> web.Response:
    """Build an error response."""
    return web.json_response(
        {
            "statusCode": int(status),
            "error": HTTPStatus(status).phrase,
            "message": message,
        },
        status=int(status),
    )


def _validation_message(error: ValidationError) -> str:
    """First validation problem as a readable message."""
    first = error.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = first.get("msg", "Invalid request")
    return f"{location}: {message}" if location else message


@web.middleware
async def error_middleware(request: web.Request, handler) -> web.StreamResponse:
    """Translate exceptions into error responses."""
    try:
        return await handler(request)
    except ExpeditionsError as e:
        if e.retryable:
            logger.warning(f"{request.method} {request.path}: {e.message}")
        return error_response(e.status_code, e.message)
    except ValidationError as e:
        return error_response(HTTPStatus.BAD_REQUEST, _validation_message(e))
    except json.JSONDecodeError:
        return error_response(HTTPStatus.BAD_REQUEST, "Invalid JSON payload")
    except web.HTTPException as e:
        if e.status_code < 400:
            raise
        return error_response(e.status_code, e.reason)
    except Exception:
        logger.exception(f"Unhandled error in {request.method} {request.path}")
        return error_response(
            HTTPStatus.INTERNAL_SERVER_ERROR, "An internal server error occurred"
        )
