"""Pledgeline — Sponsorship Engine.

Pure reduction of a donation list into sponsorship totals, and the
percentage-of-goal derivation. No I/O.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List

from pledgeline.models.donation_models import Donation
from pledgeline.models.summary_models import SponsorshipSummary

PERCENT_QUANTUM = Decimal("0.01")


def active_subscriptions(donations: Iterable[Donation]) -> List[Donation]:
    """Donations carrying a subscription link.

    The server-side status filter is advisory, so it is re-checked here.
    """
    return [d for d in donations if d.is_active_subscription]


def reduce_donations(donations: Iterable[Donation]) -> tuple[int, int]:
    """Return (total_amount, subscription_count) over active subscriptions."""
    active = active_subscriptions(donations)
    return sum(d.amount for d in active), len(active)


def compute_percentage(total_amount: int, monthly_goal: int) -> str:
    """Percentage of goal achieved, as a string with two decimals.

    A zero goal yields "0".
    """
    if monthly_goal <= 0:
        return "0"
    pct = Decimal(total_amount) / Decimal(monthly_goal) * 100
    return str(pct.quantize(PERCENT_QUANTUM, rounding=ROUND_HALF_UP))


def build_summary(
    donations: Iterable[Donation],
    monthly_goal: int,
    currency: str = "USD",
) -> SponsorshipSummary:
    total_amount, subscription_count = reduce_donations(donations)
    return SponsorshipSummary(
        total_amount=total_amount,
        subscription_count=subscription_count,
        monthly_goal=monthly_goal,
        percentage=compute_percentage(total_amount, monthly_goal),
        currency=currency,
    )
