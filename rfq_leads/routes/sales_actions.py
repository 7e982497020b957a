"""
/lead-scores/{lead_id}/actions and /outreach — sales follow-up on a scored lead.
"""

from fastapi import APIRouter, HTTPException

from rfq_leads.db.repository import (
    create_sales_action,
    get_lead_score_by_id,
    list_sales_actions,
)
from rfq_leads.db.session import async_session
from rfq_leads.log import get_logger
from rfq_leads.routes.lead_scores import validate_lead_id
from rfq_leads.schemas.sales import (
    LOSS_REASONS,
    OutreachDraft,
    OutreachRequest,
    SalesActionRequest,
    SalesActionResponse,
)
from rfq_leads.services.outreach import draft_outreach

router = APIRouter(prefix="/lead-scores", tags=["sales"])

logger = get_logger(__name__)


# ============================================================
# RECORD ACTION  POST /lead-scores/{lead_id}/actions
# ============================================================

@router.post("/{lead_id}/actions", response_model=SalesActionResponse, status_code=201)
async def create_sales_action_api(lead_id: str, data: SalesActionRequest):
    """
    Assign a lead to sales, mark it contacted, or mark it lost.

    mark_lost requires a loss_reason from LOSS_REASONS; other actions ignore it.
    """
    validate_lead_id(lead_id)

    loss_reason = None
    if data.action_type == "mark_lost":
        if not data.loss_reason:
            raise HTTPException(status_code=400, detail="loss_reason is required for mark_lost.")
        if data.loss_reason not in LOSS_REASONS:
            raise HTTPException(
                status_code=400,
                detail=f"Unknown loss_reason. Use one of: {', '.join(LOSS_REASONS)}.",
            )
        loss_reason = data.loss_reason

    async with async_session() as session:
        lead = await get_lead_score_by_id(session, lead_id)
        if not lead:
            raise HTTPException(status_code=404, detail="Lead not found.")

        action = await create_sales_action(
            session,
            lead_score_id=lead_id,
            action_type=data.action_type,
            assigned_to=data.assigned_to or None,
            loss_reason=loss_reason,
            notes=data.notes or None,
        )
        await session.commit()

    logger.info("sales_action_recorded", lead_id=lead_id, action_type=data.action_type)
    return SalesActionResponse.from_row(action)


# ============================================================
# LIST ACTIONS  GET /lead-scores/{lead_id}/actions
# ============================================================

@router.get("/{lead_id}/actions", response_model=list[SalesActionResponse])
async def list_sales_actions_api(lead_id: str):
    validate_lead_id(lead_id)
    async with async_session() as session:
        lead = await get_lead_score_by_id(session, lead_id)
        if not lead:
            raise HTTPException(status_code=404, detail="Lead not found.")
        actions = await list_sales_actions(session, lead_id)
        await session.commit()
    return [SalesActionResponse.from_row(a) for a in actions]


# ============================================================
# OUTREACH DRAFT  POST /lead-scores/{lead_id}/outreach
# ============================================================

@router.post("/{lead_id}/outreach", response_model=OutreachDraft)
async def draft_outreach_api(lead_id: str, data: OutreachRequest):
    """Draft an email or WhatsApp follow-up for a lead (LLM call, nothing stored)."""
    validate_lead_id(lead_id)
    async with async_session() as session:
        lead = await get_lead_score_by_id(session, lead_id)
        if not lead:
            raise HTTPException(status_code=404, detail="Lead not found.")
        await session.commit()

    # LLM call outside the DB session — network I/O
    try:
        return await draft_outreach(lead, channel=data.channel, tone=data.tone)
    except Exception as e:
        logger.warning("outreach_draft_failed", lead_id=lead_id, error=str(e))
        raise HTTPException(status_code=502, detail=f"Outreach drafting failed: {e}") from e
