from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from rfq_leads.db.models import RFQLeadScore, SalesAction
from rfq_leads.schemas.lead_score import LeadScore, LeadTier, RFQInput


# ======================================================
# LEAD SCORES
# ======================================================

async def create_lead_score(
    session: AsyncSession, rfq: RFQInput, score: LeadScore
) -> RFQLeadScore:
    """Insert one denormalized lead-score row (score fields + RFQ passthrough)."""
    row = RFQLeadScore(
        session_id=rfq.session_id,
        requirement_id=rfq.requirement_id or None,
        **score.model_dump(mode="json"),
        category_slug=rfq.category,
        trade_type=rfq.trade_type,
        buyer_company=rfq.buyer_company or None,
        buyer_location=rfq.buyer_location or None,
    )
    session.add(row)
    await session.flush()
    return row


async def list_lead_scores(
    session: AsyncSession,
    tier: str | None = None,
    limit: int = 200,
    offset: int = 0,
) -> list[RFQLeadScore]:
    stmt = (
        select(RFQLeadScore)
        .order_by(RFQLeadScore.created_at.desc())
        .limit(limit)
        .offset(offset)
    )
    if tier:
        stmt = stmt.where(RFQLeadScore.lead_score == tier)
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def count_lead_scores(session: AsyncSession, tier: str | None = None) -> int:
    stmt = select(func.count()).select_from(RFQLeadScore)
    if tier:
        stmt = stmt.where(RFQLeadScore.lead_score == tier)
    result = await session.execute(stmt)
    return result.scalar() or 0


async def count_by_tier(session: AsyncSession) -> dict[str, int]:
    """Row count per tier; tiers with no rows report 0."""
    stmt = select(RFQLeadScore.lead_score, func.count()).group_by(RFQLeadScore.lead_score)
    result = await session.execute(stmt)
    counts = {tier.value: 0 for tier in LeadTier}
    for tier, n in result.all():
        if tier in counts:
            counts[tier] = n
    return counts


async def get_lead_score_by_id(session: AsyncSession, lead_id: str) -> RFQLeadScore | None:
    stmt = select(RFQLeadScore).where(RFQLeadScore.id == lead_id)
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


# ======================================================
# SALES ACTIONS
# ======================================================

async def create_sales_action(
    session: AsyncSession,
    lead_score_id: str,
    action_type: str,
    assigned_to: str | None = None,
    loss_reason: str | None = None,
    notes: str | None = None,
) -> SalesAction:
    action = SalesAction(
        lead_score_id=lead_score_id,
        action_type=action_type,
        assigned_to=assigned_to,
        loss_reason=loss_reason,
        notes=notes,
    )
    session.add(action)
    await session.flush()
    return action


async def list_sales_actions(session: AsyncSession, lead_score_id: str) -> list[SalesAction]:
    stmt = (
        select(SalesAction)
        .where(SalesAction.lead_score_id == lead_score_id)
        .order_by(SalesAction.created_at.desc())
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def latest_actions_for(
    session: AsyncSession, lead_score_ids: list[str]
) -> dict[str, str]:
    """Most recent action_type per lead id. Leads without actions are absent."""
    if not lead_score_ids:
        return {}
    stmt = (
        select(SalesAction.lead_score_id, SalesAction.action_type)
        .where(SalesAction.lead_score_id.in_(lead_score_ids))
        .order_by(SalesAction.created_at.desc())
    )
    result = await session.execute(stmt)
    latest: dict[str, str] = {}
    for lead_id, action_type in result.all():
        latest.setdefault(lead_id, action_type)
    return latest
