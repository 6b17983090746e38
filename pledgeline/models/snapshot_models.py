"""Pledgeline — Summary Snapshot History (Append-Only)."""

from datetime import datetime, timezone
from typing import Optional

from sqlmodel import SQLModel, Field

from pledgeline.models.summary_models import SponsorshipSummary


class SummarySnapshot(SQLModel, table=True):
    """A `ready` summary as it was served.

    Audit trail only. Computations never read these rows back.
    """

    __tablename__ = "summary_snapshots"

    id: Optional[int] = Field(default=None, primary_key=True)
    profile_uuid: str = Field(index=True, description="Fundraising profile ID")
    computed_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    total_amount: int = Field(description="Minor currency units")
    subscription_count: int = Field(default=0)
    monthly_goal: int = Field(default=0, description="Minor currency units")
    percentage: str = Field(default="0")
    currency: str = Field(default="USD")

    @classmethod
    def from_summary(
        cls, profile_uuid: str, summary: SponsorshipSummary
    ) -> "SummarySnapshot":
        return cls(
            profile_uuid=profile_uuid,
            total_amount=summary.total_amount,
            subscription_count=summary.subscription_count,
            monthly_goal=summary.monthly_goal,
            percentage=summary.percentage,
            currency=summary.currency,
        )
