"""
Score an RFQ and store the result in rfq_lead_scores.

Storage is best-effort: a failed insert is logged and reported as None,
it never propagates to the submitter.
"""

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from rfq_leads.db.models import RFQLeadScore
from rfq_leads.db.repository import create_lead_score
from rfq_leads.db.session import async_session
from rfq_leads.log import get_logger
from rfq_leads.schemas.lead_score import LeadScore, RFQInput
from rfq_leads.services.lead_scorer import score_rfq

logger = get_logger(__name__)


async def persist_lead_score(
    session: AsyncSession, rfq: RFQInput, score: LeadScore
) -> RFQLeadScore:
    """Insert and commit one lead-score row. Raises on any store error."""
    row = await create_lead_score(session, rfq, score)
    await session.commit()
    return row


async def score_and_persist(
    rfq: RFQInput,
    session_factory: async_sessionmaker[AsyncSession] = async_session,
) -> LeadScore | None:
    """
    Score the RFQ, then write one denormalized record.

    Returns the score on success and None if anything failed along the way
    (connection, constraint, store unavailable).
    """
    try:
        result = score_rfq(rfq)
        async with session_factory() as session:
            row = await persist_lead_score(session, rfq, result)
    except Exception as e:
        logger.warning(
            "lead_score_persist_failed",
            session_id=rfq.session_id,
            error=str(e),
        )
        return None

    logger.info(
        "lead_score_persisted",
        lead_id=row.id,
        session_id=rfq.session_id,
        lead_score=result.lead_score,
        confidence_score=result.confidence_score,
    )
    return result
