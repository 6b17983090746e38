"""Pledgeline — Sponsorship Aggregator.

Runs the full data flow for one profile:
  resolve profile → fetch donations → reduce → fetch goal → derive percentage

Every computation ends in exactly one observable state. A malformed
donation envelope is `empty`; a rejected read is `error`. The two are kept
apart on purpose and must not be merged.
"""

import time
from typing import Any, Optional, Protocol

from pledgeline.config import settings
from pledgeline.connectors.fundraising.transformer import (
    extract_donations,
    extract_monthly_goal,
)
from pledgeline.analyzer.sponsorship_engine import build_summary
from pledgeline.models.context_models import SessionContext
from pledgeline.models.donation_models import DonationQuery
from pledgeline.models.summary_models import SponsorshipResult
from pledgeline.core.logging import get_logger

logger = get_logger("analyzer.aggregator")


class SponsorshipDataSource(Protocol):
    """The two reads the aggregator needs from the fundraising platform."""

    async def fetch_donations(self, query: DonationQuery) -> Any: ...

    async def fetch_profile(self, profile_uuid: str) -> Any: ...


class SponsorshipAggregator:
    """Turns a profile's active donations and goal into a SponsorshipResult.

    Only the first page of `donation_limit` donations is read. Profiles with
    more active subscriptions than that are silently truncated.
    """

    def __init__(self, data_source: SponsorshipDataSource, donation_limit: int | None = None):
        self.data_source = data_source
        self.donation_limit = donation_limit or settings.donation_query_limit

    async def compute(self, context: SessionContext) -> SponsorshipResult:
        """Compute the current state for the profile in `context`.

        Never raises: failures of either read become an `error` result.
        """
        if not context.has_profile:
            logger.info("No active profile; nothing to show", extra={"state": "empty"})
            return SponsorshipResult.empty()

        profile_uuid = context.profile_uuid
        started = time.perf_counter()
        try:
            result = await self._compute(profile_uuid, context.currency)
        except Exception as e:
            logger.error(
                f"Sponsorship computation failed: {e}",
                extra={"profile_uuid": profile_uuid, "state": "error"},
            )
            result = SponsorshipResult.failed(str(e), profile_uuid)

        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        logger.info(
            f"Sponsorship computation finished: {result.state.value}",
            extra={
                "profile_uuid": profile_uuid,
                "state": result.state.value,
                "duration_ms": duration_ms,
            },
        )
        return result

    async def _compute(self, profile_uuid: str, currency: str) -> SponsorshipResult:
        query = DonationQuery(profile_uuid=profile_uuid, limit=self.donation_limit)
        donations = extract_donations(await self.data_source.fetch_donations(query))
        if donations is None:
            return SponsorshipResult.empty(profile_uuid)

        monthly_goal = extract_monthly_goal(
            await self.data_source.fetch_profile(profile_uuid)
        )
        summary = build_summary(donations, monthly_goal, currency)
        return SponsorshipResult.ready(summary, profile_uuid)


class SponsorshipTracker:
    """Holds the observable state for a presentation layer.

    This is the hook for a long-lived presentation collaborator (a widget
    session that follows profile changes); the stateless HTTP routes call
    SponsorshipAggregator directly.

    Recomputes once per distinct profile identifier. When a newer update
    starts before an older one finishes, the older result is discarded.
    """

    def __init__(self, aggregator: SponsorshipAggregator):
        self.aggregator = aggregator
        self._state = SponsorshipResult.loading()
        self._profile_uuid: Optional[str] = None
        self._triggered = False
        self._generation = 0

    @property
    def state(self) -> SponsorshipResult:
        return self._state

    async def update(self, context: SessionContext) -> SponsorshipResult:
        """Trigger a recompute if the profile identifier changed."""
        if self._triggered and context.profile_uuid == self._profile_uuid:
            return self._state

        self._triggered = True
        self._profile_uuid = context.profile_uuid
        self._generation += 1
        generation = self._generation
        self._state = SponsorshipResult.loading(context.profile_uuid)

        stored = False
        try:
            result = await self.aggregator.compute(context)

            if generation != self._generation:
                logger.info(
                    "Discarding superseded sponsorship result",
                    extra={"profile_uuid": context.profile_uuid},
                )
                return self._state
            self._state = result
            stored = True
            return result
        finally:
            # Cancelled while current: let the next update recompute
            if not stored and generation == self._generation:
                self._triggered = False
                self._profile_uuid = None
