"""
Pydantic schemas for RFQ lead scoring.

RFQInput is what a buyer submits; LeadScore is what the scorer returns.
Both are frozen: a score is computed once and never mutated.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class LeadTier(str, Enum):
    HOT = "HOT"
    WARM = "WARM"
    COLD = "COLD"


class BudgetConfidence(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class Urgency(str, Enum):
    IMMEDIATE = "IMMEDIATE"
    THIRTY_DAYS = "30_DAYS"
    EXPLORATORY = "EXPLORATORY"


class CategoryFit(str, Enum):
    CORE = "Core category"
    NON_CORE = "Non-core"


class RFQItem(BaseModel):
    """One line item of an RFQ. A missing quantity counts as zero."""

    model_config = ConfigDict(frozen=True)

    item_name: str = ""
    quantity: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    unit: str = ""


class RFQInput(BaseModel):
    """Submitted request-for-quotation payload."""

    model_config = ConfigDict(frozen=True)

    session_id: str = Field(..., min_length=1, examples=["b7f3c1d2-rfq-session"])
    requirement_id: Optional[str] = None
    category: Optional[str] = Field(None, examples=["Metals - Ferrous (Steel, Iron)"])
    # import | export; anything else (domestic, empty) carries no trade signal
    trade_type: Optional[str] = Field(None, examples=["import", "export", "domestic"])
    items: list[RFQItem] = Field(default_factory=list)
    description: Optional[str] = None
    quality_standards: Optional[str] = Field(None, examples=["IS 2062 E250"])
    buyer_location: Optional[str] = None
    buyer_company: Optional[str] = None


class LeadScore(BaseModel):
    """Tiered lead classification for one RFQ."""

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    lead_score: LeadTier
    confidence_score: int = Field(..., ge=0, le=100)
    intent_strength: str
    budget_confidence: BudgetConfidence
    urgency: Urgency
    category_fit: CategoryFit
    ai_reason_summary: str
    estimated_deal_value: Optional[float] = Field(None, ge=0)
