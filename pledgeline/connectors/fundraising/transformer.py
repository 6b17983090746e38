"""Pledgeline — Fundraising Envelope → Model Transformer.

Validates the shape of API envelopes and converts them into typed models.
Shape problems are never raised: a malformed donation envelope comes back
as ``None`` and a malformed profile envelope yields a zero goal.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, List, Optional

from pydantic import ValidationError

from pledgeline.models.donation_models import (
    GOAL_FIELD,
    Donation,
    ProfileCustomFields,
)
from pledgeline.core.logging import get_logger

logger = get_logger("fundraising.transformer")

MINOR_UNITS_PER_MAJOR = 100


def _payload(envelope: Any) -> Any:
    """Return ``envelope["data"]["data"]``, or None if any level is missing."""
    if not isinstance(envelope, dict):
        return None
    body = envelope.get("data")
    if not isinstance(body, dict):
        return None
    return body.get("data")


def _safe_decimal(value: Any) -> Decimal:
    """Convert a value to a non-negative finite Decimal, else 0."""
    if isinstance(value, bool):
        return Decimal(0)
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return Decimal(0)
    if not number.is_finite() or number < 0:
        return Decimal(0)
    return number


def to_minor_units(major: Any) -> int:
    """Major currency units (dollars) → minor units (cents), rounded half-up."""
    cents = _safe_decimal(major) * MINOR_UNITS_PER_MAJOR
    try:
        return int(cents.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    except InvalidOperation:
        logger.warning(f"Goal {major!r} is out of range; goal defaults to 0")
        return 0


def extract_donations(envelope: Any) -> Optional[List[Donation]]:
    """Parse a donation envelope into Donation records.

    Returns None when the envelope or its nested payload is missing or not
    a list. Individual records that fail validation are skipped.
    """
    rows = _payload(envelope)
    if not isinstance(rows, list):
        logger.warning("Donation envelope missing or malformed")
        return None

    donations: List[Donation] = []
    skipped = 0
    for row in rows:
        try:
            donations.append(Donation.model_validate(row))
        except ValidationError:
            skipped += 1

    if skipped:
        logger.warning(f"Skipped {skipped} malformed donation records")
    return donations


def extract_monthly_goal(envelope: Any) -> int:
    """Read the monthly goal from a profile envelope, in minor units.

    A missing payload, missing custom fields or a non-numeric goal all
    resolve to 0.
    """
    profile = _payload(envelope)
    if not isinstance(profile, dict):
        logger.warning("Profile envelope missing or malformed; goal defaults to 0")
        return 0

    public = profile.get("public")
    fields = ProfileCustomFields(public=public if isinstance(public, dict) else {})
    return to_minor_units(fields.public.get(GOAL_FIELD, 0))
