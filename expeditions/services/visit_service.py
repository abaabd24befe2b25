"""
Visit service.

Maintains per-address daily visit counters with one credited visit per
UTC calendar day.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from expeditions.models.visit import Visit
from expeditions.repositories.visit_repository import VisitRepository
from expeditions.services.base_service import BaseService, transaction
from expeditions.utils.datetime_utils import (
    ensure_utc,
    start_of_day,
    to_milliseconds,
    utc_now,
)
from expeditions.utils.exceptions import DocumentNotFound
from expeditions.utils.security import mask_address


@dataclass(frozen=True)
class VisitState:
    """Visit counter of an address."""

    address: str
    all_visits: int = 0
    last_visit: datetime | None = None

    @classmethod
    def from_visit(cls, visit: Visit) -> "VisitState":
        """Build state from a visit record."""
        return cls(
            address=visit.address,
            all_visits=visit.all_visits,
            last_visit=ensure_utc(visit.last_visit) if visit.last_visit else None,
        )

    def to_dict(self) -> dict[str, Any]:
        """JSON representation (``lastVisit`` in epoch milliseconds, 0 if never)."""
        return {
            "address": self.address,
            "allVisits": self.all_visits,
            "lastVisit": to_milliseconds(self.last_visit),
        }


class VisitService(BaseService):
    """Daily visit tracking."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service."""
        super().__init__(session)
        self.repo = VisitRepository(session)

    async def get_visits(self, address: str, campaign_id: int) -> VisitState:
        """
        Get visit state of an address.

        Addresses without a record get the default state
        (no visits, never visited).
        """
        visit = await self.repo.get_for_campaign(address, campaign_id)
        if visit is None:
            return VisitState(address=address)
        return VisitState.from_visit(visit)

    @transaction
    async def register_visit(
        self,
        address: str,
        campaign_id: int,
        now: datetime | None = None,
    ) -> VisitState:
        """
        Credit today's visit of an address.

        Repeated calls on the same UTC day return the state unchanged.

        Args:
            address: Checksummed wallet address
            campaign_id: Active campaign ID
            now: Visit instant (defaults to current UTC time)

        Returns:
            Updated visit state
        """
        now = ensure_utc(now or utc_now())
        visit = await self._get_or_create(address, campaign_id)

        incremented = await self.repo.increment_if_before(
            visit.id, start_of_day(now), now
        )
        await self.session.refresh(visit)

        if incremented:
            self.logger.info(
                f"Visit credited for {mask_address(address)} in campaign "
                f"{campaign_id}: {visit.all_visits} total"
            )
        else:
            self.logger.debug(
                f"Visit already credited today for {mask_address(address)}"
            )

        return VisitState.from_visit(visit)

    async def _get_or_create(self, address: str, campaign_id: int) -> Visit:
        """Load the visit record, creating it on first visit."""
        visit = await self.repo.get_for_campaign(address, campaign_id)
        if visit is not None:
            return visit

        try:
            return await self.repo.create(
                address=address,
                campaign_id=campaign_id,
                all_visits=0,
                last_visit=None,
            )
        except IntegrityError:
            # Another request created the record first
            await self.rollback()

        visit = await self.repo.get_for_campaign(address, campaign_id)
        if visit is None:
            raise DocumentNotFound(
                f"Visit for {mask_address(address)} in campaign {campaign_id} not found"
            )
        return visit
