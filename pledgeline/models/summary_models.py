"""Pledgeline — Sponsorship Summary & Observable State."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class SponsorshipState(str, Enum):
    """Observable states, in presentation priority order."""

    LOADING = "loading"
    ERROR = "error"
    EMPTY = "empty"
    READY = "ready"


class SponsorshipSummary(BaseModel):
    """Active monthly sponsorship totals for one profile.

    All amounts are minor currency units (cents).
    """

    total_amount: int = 0
    subscription_count: int = Field(default=0, ge=0)
    monthly_goal: int = Field(default=0, ge=0)
    percentage: str = "0"
    currency: str = "USD"


class SponsorshipResult(BaseModel):
    """What the presentation layer sees: a state plus its payload."""

    state: SponsorshipState
    profile_uuid: Optional[str] = None
    summary: Optional[SponsorshipSummary] = None
    error: Optional[str] = None

    @classmethod
    def loading(cls, profile_uuid: Optional[str] = None) -> "SponsorshipResult":
        return cls(state=SponsorshipState.LOADING, profile_uuid=profile_uuid)

    @classmethod
    def empty(cls, profile_uuid: Optional[str] = None) -> "SponsorshipResult":
        return cls(state=SponsorshipState.EMPTY, profile_uuid=profile_uuid)

    @classmethod
    def failed(cls, message: str, profile_uuid: Optional[str] = None) -> "SponsorshipResult":
        return cls(state=SponsorshipState.ERROR, profile_uuid=profile_uuid, error=message)

    @classmethod
    def ready(
        cls, summary: SponsorshipSummary, profile_uuid: Optional[str] = None
    ) -> "SponsorshipResult":
        return cls(state=SponsorshipState.READY, profile_uuid=profile_uuid, summary=summary)

    def display_summary(self, currency: str = "USD") -> Optional[SponsorshipSummary]:
        """Summary to render, or None while loading / on error.

        `empty` renders as an all-zero summary, indistinguishable from a
        zero `ready` state.
        """
        if self.state == SponsorshipState.READY:
            return self.summary
        if self.state == SponsorshipState.EMPTY:
            return SponsorshipSummary(currency=currency)
        return None
