"""Pledgeline — Fundraising Platform Data Models.

Shapes of the records read from the fundraising API. Field names on the
wire are camelCase; attributes are snake_case.
"""

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

GOAL_FIELD = "monthlyHubFundraisingGoal"


class Donation(BaseModel):
    """A single donation. `amount` is in minor currency units (cents)."""

    model_config = ConfigDict(populate_by_name=True)

    amount: int = Field(ge=0)
    subscription_uuid: Optional[str] = Field(default=None, alias="subscriptionUuid")
    profile_uuid: Optional[str] = Field(default=None, alias="profileUuid")

    @property
    def is_active_subscription(self) -> bool:
        """True when the donation is linked to a recurring subscription."""
        return bool(self.subscription_uuid and self.subscription_uuid.strip())


class DonationQuery(BaseModel):
    """Query for a profile's active-subscription donations.

    The collaborator must honour `limit`; only the first page is ever read.
    """

    profile_uuid: str
    subscription_status: Literal["active"] = "active"
    limit: int = Field(default=1000, ge=1, le=1000)

    def to_params(self) -> Dict[str, Any]:
        return {
            "profile": self.profile_uuid,
            "subscriptionStatus": self.subscription_status,
            "limit": self.limit,
        }


class ProfileCustomFields(BaseModel):
    """Configurable key/value fields attached to a profile record."""

    public: Dict[str, Any] = {}
