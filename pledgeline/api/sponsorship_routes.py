"""Pledgeline — Sponsorship API Routes."""

from typing import Optional

from fastapi import APIRouter, Depends, Header, Query
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from pledgeline.config import settings
from pledgeline.database import get_session
from pledgeline.connectors.fundraising.client import FundraisingClient
from pledgeline.connectors.fundraising.endpoints import FundraisingEndpoints
from pledgeline.analyzer.aggregator import SponsorshipAggregator, SponsorshipDataSource
from pledgeline.models.context_models import SessionContext
from pledgeline.models.snapshot_models import SummarySnapshot
from pledgeline.models.summary_models import (
    SponsorshipResult,
    SponsorshipState,
    SponsorshipSummary,
)
from pledgeline.core.logging import get_logger

logger = get_logger("api.sponsorships")

router = APIRouter(prefix="/sponsorships", tags=["Sponsorships"])


# ── Response Models ──


class SponsorshipResponse(BaseModel):
    """Response for the sponsorship endpoints."""

    status: str = "success"
    result: SponsorshipResult
    display: Optional[SponsorshipSummary] = None
    """What the ticker should render; None while loading or on error."""


# ── Dependencies ──


async def get_data_source():
    """Dependency — yields the fundraising API reads, closing the client after."""
    endpoints = FundraisingEndpoints(FundraisingClient())
    try:
        yield endpoints
    finally:
        await endpoints.close()


def _record_snapshot(session: Session, result: SponsorshipResult) -> None:
    try:
        session.add(SummarySnapshot.from_summary(result.profile_uuid, result.summary))
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(
            f"Could not record snapshot: {e}",
            extra={"profile_uuid": result.profile_uuid},
        )


async def _serve(
    context: SessionContext,
    data_source: SponsorshipDataSource,
    session: Session,
) -> SponsorshipResponse:
    result = await SponsorshipAggregator(data_source).compute(context)
    if result.state == SponsorshipState.READY and settings.snapshot_history_enabled:
        _record_snapshot(session, result)
    return SponsorshipResponse(
        result=result, display=result.display_summary(context.currency)
    )


# ── Endpoints ──


@router.get("/current", response_model=SponsorshipResponse)
async def get_current_sponsorship(
    x_profile_uuid: Optional[str] = Header(None),
    x_campaign_currency: Optional[str] = Header(None),
    data_source: SponsorshipDataSource = Depends(get_data_source),
    session: Session = Depends(get_session),
):
    """Sponsorship summary for the profile named by the session headers.

    Without an `X-Profile-Uuid` header the result is `empty`.
    """
    context = SessionContext(
        profile_uuid=x_profile_uuid,
        currency=x_campaign_currency or settings.campaign_currency,
    )
    return await _serve(context, data_source, session)


@router.get("/{profile_uuid}", response_model=SponsorshipResponse)
async def get_sponsorship(
    profile_uuid: str,
    x_campaign_currency: Optional[str] = Header(None),
    data_source: SponsorshipDataSource = Depends(get_data_source),
    session: Session = Depends(get_session),
):
    """Sponsorship summary for an explicit profile."""
    context = SessionContext(
        profile_uuid=profile_uuid,
        currency=x_campaign_currency or settings.campaign_currency,
    )
    return await _serve(context, data_source, session)


@router.get("/{profile_uuid}/history")
async def get_sponsorship_history(
    profile_uuid: str,
    limit: int = Query(10, ge=1, le=100),
    session: Session = Depends(get_session),
):
    """Previously served summaries for a profile, newest first."""
    rows = session.exec(
        select(SummarySnapshot)
        .where(SummarySnapshot.profile_uuid == profile_uuid)
        .order_by(SummarySnapshot.computed_at.desc(), SummarySnapshot.id.desc())  # type: ignore
        .limit(limit)
    ).all()

    return {
        "status": "success",
        "count": len(rows),
        "results": [
            {
                "id": r.id,
                "computed_at": r.computed_at.isoformat(),
                "total_amount": r.total_amount,
                "subscription_count": r.subscription_count,
                "monthly_goal": r.monthly_goal,
                "percentage": r.percentage,
                "currency": r.currency,
            }
            for r in rows
        ],
    }
