"""
Expeditions request handlers.

Thin adapters: parse and validate the request, run the tasks service in a
per-request session, serialize the result.
"""

from aiohttp import web

from expeditions.api import keys
from expeditions.api.schemas import (
    AddressQuery,
    AddressWithSignaturePayload,
    ClaimPayload,
    DailyVisitPayload,
    WeeklyFragmentsQuery,
)
from expeditions.database import get_session
from expeditions.models.enums import TaskType
from expeditions.services.tasks.tasks_service import TasksService


def _tasks_service(request: web.Request, session) -> TasksService:
    """Build the tasks service for one request."""
    app = request.app
    return TasksService(
        session,
        app[keys.POSITION_READER],
        calculator=app[keys.FRAGMENT_CALCULATOR],
        daily_visit_message=app[keys.DAILY_VISIT_MESSAGE],
    )


async def root_handler(request: web.Request) -> web.Response:
    """Return nothing."""
    return web.Response(status=204)


async def get_daily_visits(request: web.Request) -> web.Response:
    """Get daily visits state for an address."""
    query = AddressQuery.model_validate(dict(request.query))

    async with get_session(request.app[keys.SESSION_MAKER]) as session:
        state = await _tasks_service(request, session).get_daily_visits(query.address)

    return web.json_response({"data": state.to_dict()})


async def claim_daily_visit(request: web.Request) -> web.Response:
    """Claim today's visit for the signing wallet."""
    payload = DailyVisitPayload.model_validate(await request.json())

    async with get_session(request.app[keys.SESSION_MAKER]) as session:
        state = await _tasks_service(request, session).claim_daily_visit(
            payload.signature, address=payload.address
        )

    return web.json_response({"data": state.to_dict()})


async def claim(request: web.Request) -> web.Response:
    """Claim fragments of any task type."""
    payload = ClaimPayload.model_validate(await request.json())

    async with get_session(request.app[keys.SESSION_MAKER]) as session:
        result = await _tasks_service(request, session).claim(
            payload.signature, payload.address, payload.type
        )

    return web.json_response(result.to_dict())


async def get_weekly_fragments(request: web.Request) -> web.Response:
    """Get weekly fragments of an address."""
    query = WeeklyFragmentsQuery.model_validate(dict(request.query))

    async with get_session(request.app[keys.SESSION_MAKER]) as session:
        summary = await _tasks_service(request, session).get_weekly_fragments(
            query.address, week=query.week
        )

    return web.json_response({"data": summary.to_dict()})


def _weekly_claim_handler(task_type: TaskType):
    """Claim handler bound to one weekly task type."""

    async def handler(request: web.Request) -> web.Response:
        payload = AddressWithSignaturePayload.model_validate(await request.json())

        async with get_session(request.app[keys.SESSION_MAKER]) as session:
            result = await _tasks_service(request, session).claim(
                payload.signature, payload.address, task_type
            )

        return web.json_response(result.to_dict())

    handler.__name__ = f"claim_{task_type.value.lower()}"
    return handler


claim_liquidity_provision = _weekly_claim_handler(TaskType.LIQUIDITY_PROVISION)
claim_liquidity_staking = _weekly_claim_handler(TaskType.LIQUIDITY_STAKING)
