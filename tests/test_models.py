from __future__ import annotations

import logging
import json

import pytest
from pydantic import ValidationError

from pledgeline.core.logging import JSONFormatter, get_logger
from pledgeline.models.context_models import SessionContext
from pledgeline.models.donation_models import Donation, DonationQuery
from pledgeline.models.summary_models import (
    SponsorshipResult,
    SponsorshipSummary,
)


def test_donation_rejects_negative_amount() -> None:
    with pytest.raises(ValidationError):
        Donation.model_validate({"amount": -1, "subscriptionUuid": "s"})


def test_donation_query_limit_is_bounded() -> None:
    with pytest.raises(ValidationError):
        DonationQuery(profile_uuid="p", limit=5000)
    with pytest.raises(ValidationError):
        DonationQuery(profile_uuid="p", subscription_status="cancelled")


def test_session_context_is_read_only() -> None:
    context = SessionContext(profile_uuid="p")
    with pytest.raises(ValidationError):
        context.profile_uuid = "other"


def test_display_summary_per_state() -> None:
    summary = SponsorshipSummary(total_amount=100, subscription_count=1)
    assert SponsorshipResult.ready(summary, "p").display_summary() == summary
    assert SponsorshipResult.empty().display_summary("GBP") == SponsorshipSummary(currency="GBP")
    assert SponsorshipResult.loading("p").display_summary() is None
    assert SponsorshipResult.failed("boom", "p").display_summary() is None


def test_json_formatter_includes_extra_fields() -> None:
    record = logging.LogRecord("pledgeline.test", logging.INFO, __file__, 1, "done", None, None)
    record.profile_uuid = "prof-1"
    record.state = "ready"
    entry = json.loads(JSONFormatter().format(record))
    assert entry["message"] == "done"
    assert entry["profile_uuid"] == "prof-1"
    assert entry["state"] == "ready"


def test_get_logger_attaches_single_handler() -> None:
    get_logger("tests.handlers")
    logger = get_logger("tests.handlers")
    assert logger.name == "pledgeline.tests.handlers"
    assert len(logger.handlers) == 1
