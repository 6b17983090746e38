"""Pledgeline — Fundraising API Endpoints.

The two reads the sponsorship aggregator depends on. Each returns the raw
response envelope; shape validation is left to the transformer.
"""

from typing import Any, Dict
from urllib.parse import quote

from pledgeline.connectors.fundraising.client import FundraisingClient
from pledgeline.models.donation_models import DonationQuery
from pledgeline.core.logging import get_logger

logger = get_logger("fundraising.endpoints")


class FundraisingEndpoints:
    """Donation and profile reads against the fundraising API."""

    def __init__(self, client: FundraisingClient):
        self.client = client

    async def fetch_donations(self, query: DonationQuery) -> Dict[str, Any]:
        """Fetch the first page of donations matching the query."""
        envelope = await self.client._request("GET", "/donations", query.to_params())
        logger.info(
            f"Fetched donations for profile {query.profile_uuid}",
            extra={"endpoint": "/donations", "profile_uuid": query.profile_uuid},
        )
        return envelope

    async def fetch_profile(self, profile_uuid: str) -> Dict[str, Any]:
        """Fetch a profile record, including its custom fields."""
        # Identifier is caller-supplied; keep it a single path segment
        path = f"/profiles/{quote(profile_uuid, safe='')}"
        envelope = await self.client._request("GET", path)
        logger.info(
            f"Fetched profile {profile_uuid}",
            extra={"endpoint": "/profiles", "profile_uuid": profile_uuid},
        )
        return envelope

    async def close(self) -> None:
        await self.client.close()
