"""
/lead-scores — score RFQ submissions and browse the scored pipeline.

Flow:
  POST /lead-scores  →  rules-based scoring (HOT / WARM / COLD)
                     →  best-effort insert into rfq_lead_scores
                     →  returns the score, or 503 if it could not be stored
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query

from rfq_leads.config import settings
from rfq_leads.db.repository import (
    count_by_tier,
    count_lead_scores,
    get_lead_score_by_id,
    latest_actions_for,
    list_lead_scores,
)
from rfq_leads.db.session import async_session
from rfq_leads.schemas.lead_score import LeadScore, LeadTier, RFQInput
from rfq_leads.schemas.sales import (
    StoredLeadListResponse,
    StoredLeadResponse,
    TierSummaryResponse,
)
from rfq_leads.services.lead_scorer import score_rfq
from rfq_leads.services.persistence import score_and_persist

router = APIRouter(prefix="/lead-scores", tags=["lead-scores"])


# ============================================================
# Helpers
# ============================================================

def validate_lead_id(lead_id: str) -> None:
    try:
        UUID(lead_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid lead ID format.")


# ============================================================
# PREVIEW  POST /lead-scores/preview
# ============================================================

@router.post("/preview", response_model=LeadScore)
async def preview_lead_score(rfq: RFQInput):
    """Score an RFQ without storing anything."""
    return score_rfq(rfq)


# ============================================================
# SCORE + STORE  POST /lead-scores
# ============================================================

@router.post("", response_model=LeadScore, status_code=201)
async def create_lead_score_api(rfq: RFQInput):
    """Score an RFQ submission and record it on the sales board."""
    result = await score_and_persist(rfq)
    if result is None:
        raise HTTPException(
            status_code=503,
            detail="Lead score could not be stored. Retry the submission.",
        )
    return result


# ============================================================
# LIST  GET /lead-scores
# ============================================================

@router.get("", response_model=StoredLeadListResponse)
async def list_lead_scores_api(
    tier: Optional[LeadTier] = Query(None, description="Filter: HOT | WARM | COLD"),
    limit: int = Query(200, ge=1),
    offset: int = Query(0, ge=0),
):
    """Newest leads first, each with its most recent sales action."""
    limit = min(limit, settings.max_list_limit)
    tier_value = tier.value if tier else None

    async with async_session() as session:
        rows = await list_lead_scores(session, tier=tier_value, limit=limit, offset=offset)
        total = await count_lead_scores(session, tier=tier_value)
        latest = await latest_actions_for(session, [r.id for r in rows])
        await session.commit()

    return StoredLeadListResponse(
        leads=[StoredLeadResponse.from_row(r, latest.get(r.id)) for r in rows],
        total=total,
        limit=limit,
        offset=offset,
    )


# ============================================================
# SUMMARY  GET /lead-scores/summary
# ============================================================

@router.get("/summary", response_model=TierSummaryResponse)
async def tier_summary_api():
    """HOT / WARM / COLD counts across all stored leads."""
    async with async_session() as session:
        counts = await count_by_tier(session)
        await session.commit()
    return TierSummaryResponse(**counts)


# ============================================================
# GET SINGLE LEAD  GET /lead-scores/{lead_id}
# ============================================================

@router.get("/{lead_id}", response_model=StoredLeadResponse)
async def get_lead_score_api(lead_id: str):
    validate_lead_id(lead_id)
    async with async_session() as session:
        row = await get_lead_score_by_id(session, lead_id)
        if not row:
            raise HTTPException(status_code=404, detail="Lead not found.")
        latest = await latest_actions_for(session, [row.id])
        await session.commit()
    return StoredLeadResponse.from_row(row, latest.get(row.id))
