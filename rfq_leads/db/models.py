"""
Database models for scored RFQ leads and the sales actions taken on them.

Lead rows are denormalized: score fields plus the RFQ passthrough fields,
so the sales board never needs to join back to the submission.
"""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import DateTime, Float, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


def _uuid_str() -> str:
    return str(uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RFQLeadScore(Base):
    """One scoring result per RFQ submission (no dedup)."""

    __tablename__ = "rfq_lead_scores"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid_str)
    session_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    requirement_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    lead_score: Mapped[str] = mapped_column(
        String(10), nullable=False, index=True
    )  # HOT | WARM | COLD
    confidence_score: Mapped[int] = mapped_column(Integer, nullable=False)
    intent_strength: Mapped[str | None] = mapped_column(String(100), nullable=True)
    budget_confidence: Mapped[str | None] = mapped_column(
        String(10), nullable=True
    )  # LOW | MEDIUM | HIGH
    urgency: Mapped[str | None] = mapped_column(
        String(20), nullable=True
    )  # IMMEDIATE | 30_DAYS | EXPLORATORY
    category_fit: Mapped[str | None] = mapped_column(String(50), nullable=True)
    ai_reason_summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    estimated_deal_value: Mapped[float | None] = mapped_column(Float, nullable=True)
    category_slug: Mapped[str | None] = mapped_column(String(255), nullable=True)
    trade_type: Mapped[str | None] = mapped_column(String(20), nullable=True)
    buyer_company: Mapped[str | None] = mapped_column(String(255), nullable=True)
    buyer_location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        server_default=func.now(),
    )


class SalesAction(Base):
    """Sales follow-up recorded against a scored lead."""

    __tablename__ = "sales_actions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid_str)
    lead_score_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("rfq_lead_scores.id", ondelete="CASCADE"), nullable=False, index=True
    )
    action_type: Mapped[str] = mapped_column(
        String(20), nullable=False
    )  # assign_sales | mark_contacted | mark_lost
    assigned_to: Mapped[str | None] = mapped_column(String(255), nullable=True)
    loss_reason: Mapped[str | None] = mapped_column(String(100), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        server_default=func.now(),
    )
