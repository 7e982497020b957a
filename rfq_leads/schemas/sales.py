"""
Schemas for the sales control board: stored leads, sales actions, outreach drafts.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field


LOSS_REASONS = (
    "Price too high",
    "Delivery timeline too long",
    "Compliance/certification gap",
    "Buyer went with competitor",
    "Budget not approved",
    "Requirement cancelled",
    "Other",
)

ActionType = Literal["assign_sales", "mark_contacted", "mark_lost"]


class StoredLeadResponse(BaseModel):
    id: str
    session_id: str
    requirement_id: Optional[str]
    lead_score: str
    confidence_score: int
    intent_strength: Optional[str]
    budget_confidence: Optional[str]
    urgency: Optional[str]
    category_fit: Optional[str]
    ai_reason_summary: Optional[str]
    estimated_deal_value: Optional[float]
    category_slug: Optional[str]
    trade_type: Optional[str]
    buyer_company: Optional[str]
    buyer_location: Optional[str]
    created_at: str
    latest_action: Optional[str] = None

    @classmethod
    def from_row(cls, row, latest_action: str | None = None) -> "StoredLeadResponse":
        return cls(
            id=str(row.id),
            session_id=row.session_id,
            requirement_id=row.requirement_id,
            lead_score=row.lead_score,
            confidence_score=row.confidence_score,
            intent_strength=row.intent_strength,
            budget_confidence=row.budget_confidence,
            urgency=row.urgency,
            category_fit=row.category_fit,
            ai_reason_summary=row.ai_reason_summary,
            estimated_deal_value=row.estimated_deal_value,
            category_slug=row.category_slug,
            trade_type=row.trade_type,
            buyer_company=row.buyer_company,
            buyer_location=row.buyer_location,
            created_at=row.created_at.isoformat() if row.created_at else "",
            latest_action=latest_action,
        )


class StoredLeadListResponse(BaseModel):
    leads: list[StoredLeadResponse]
    total: int
    limit: int
    offset: int


class TierSummaryResponse(BaseModel):
    HOT: int = 0
    WARM: int = 0
    COLD: int = 0


class SalesActionRequest(BaseModel):
    action_type: ActionType
    assigned_to: Optional[str] = Field(None, examples=["Priya (North zone)"])
    loss_reason: Optional[str] = Field(None, examples=list(LOSS_REASONS))
    notes: Optional[str] = None


class SalesActionResponse(BaseModel):
    id: str
    lead_score_id: str
    action_type: str
    assigned_to: Optional[str]
    loss_reason: Optional[str]
    notes: Optional[str]
    created_at: str

    @classmethod
    def from_row(cls, row) -> "SalesActionResponse":
        return cls(
            id=str(row.id),
            lead_score_id=row.lead_score_id,
            action_type=row.action_type,
            assigned_to=row.assigned_to,
            loss_reason=row.loss_reason,
            notes=row.notes,
            created_at=row.created_at.isoformat() if row.created_at else "",
        )


class OutreachRequest(BaseModel):
    channel: Literal["email", "whatsapp"] = "email"
    tone: str = Field("professional", max_length=40, examples=["professional", "friendly"])


class OutreachDraft(BaseModel):
    """Strict output schema for the outreach model. Fail loudly on mismatch."""

    subject: Optional[str] = None
    message_body: str = Field(..., min_length=1)


class EmailOutreachDraft(OutreachDraft):
    """Email drafts must carry a subject line."""

    subject: str = Field(..., min_length=1)


DRAFT_SCHEMAS = {
    "email": EmailOutreachDraft,
    "whatsapp": OutreachDraft,
}
