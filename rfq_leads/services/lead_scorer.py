"""
Rules-based RFQ lead scoring: HOT / WARM / COLD.

Starts from a neutral 50 and adds points across five signal groups
(intent, budget, urgency, category fit, trade type) plus a high-value bonus
from the estimated deal size. Pure and deterministic, no I/O.
"""

import math

from rfq_leads.schemas.lead_score import (
    BudgetConfidence,
    CategoryFit,
    LeadScore,
    LeadTier,
    RFQInput,
    Urgency,
)


SCORING_WEIGHTS = {
    "baseline": 50,
    "intent_full_specs": 20,
    "intent_items_with_quantity": 12,
    "intent_descriptive": 5,
    "budget_explicit": 10,
    "budget_implied": 5,
    "urgency_immediate": 15,
    "urgency_30_days": 5,
    "core_category": 10,
    "cross_border_trade": 5,
    "high_deal_value": 10,
    # thresholds
    "descriptive_min_length": 50,
    "thirty_days_min_length": 80,
    "unit_value": 50_000,  # rough avg ₹/MT for industrial goods
    "high_deal_value_threshold": 5_000_000,
    "hot_threshold": 70,
    "warm_threshold": 45,
}

CORE_CATEGORIES = (
    "steel", "metals", "chemicals", "polymers", "construction",
    "textiles", "food", "agriculture", "packaging", "industrial",
)

URGENCY_KEYWORDS = (
    "urgent", "immediately", "asap", "rush", "within 7 days", "within 15 days", "emergency",
)

BUDGET_KEYWORDS = (
    "budget", "price range", "target price", "not exceeding", "max price", "willing to pay",
)

CROSS_BORDER_TRADE_TYPES = ("import", "export")

INTENT_LABELS = {
    LeadTier.HOT: "Strong buying intent with clear specs",
    LeadTier.WARM: "Moderate intent — needs follow-up",
    LeadTier.COLD: "Exploratory — auto-nurture",
}

FALLBACK_SUMMARY = "Basic requirement submitted"
MAX_SUMMARY_REASONS = 2


def score_rfq(rfq: RFQInput, weights: dict | None = None) -> LeadScore:
    """
    Classify a single RFQ into a lead tier.

    Never raises: missing or empty optional fields simply contribute nothing.
    Reasons are collected in evaluation order and only the first two make it
    into the summary.
    """
    w = weights or SCORING_WEIGHTS
    score = w["baseline"]
    reasons: list[str] = []

    description = rfq.description or ""
    desc = description.lower()
    has_items = len(rfq.items) > 0
    has_quantity = any((item.quantity or 0) > 0 for item in rfq.items)
    has_quality = bool(rfq.quality_standards)

    # 1. Intent strength
    if has_items and has_quantity and has_quality:
        score += w["intent_full_specs"]
        reasons.append("Detailed specs with quantity and quality standards")
    elif has_items and has_quantity:
        score += w["intent_items_with_quantity"]
        reasons.append("Clear items with quantities")
    elif len(description) > w["descriptive_min_length"]:
        score += w["intent_descriptive"]
        reasons.append("Descriptive requirement")

    # 2. Budget confidence
    if _contains_any(desc, BUDGET_KEYWORDS):
        budget_confidence = BudgetConfidence.HIGH
        score += w["budget_explicit"]
        reasons.append("Explicit budget/price reference")
    elif has_items and has_quantity:
        budget_confidence = BudgetConfidence.MEDIUM
        score += w["budget_implied"]
    else:
        budget_confidence = BudgetConfidence.LOW

    # 3. Urgency
    if _contains_any(desc, URGENCY_KEYWORDS):
        urgency = Urgency.IMMEDIATE
        score += w["urgency_immediate"]
        reasons.append("Urgent delivery needed")
    elif len(description) > w["thirty_days_min_length"] and has_quantity:
        urgency = Urgency.THIRTY_DAYS
        score += w["urgency_30_days"]
    else:
        urgency = Urgency.EXPLORATORY

    # 4. Category fit
    if _contains_any((rfq.category or "").lower(), CORE_CATEGORIES):
        category_fit = CategoryFit.CORE
        score += w["core_category"]
        reasons.append(f"Core category: {rfq.category}")
    else:
        category_fit = CategoryFit.NON_CORE

    # 5. Trade complexity
    if rfq.trade_type in CROSS_BORDER_TRADE_TYPES:
        score += w["cross_border_trade"]
        reasons.append(f"{rfq.trade_type} trade — higher value potential")

    # Deal value from total quantity
    estimated_deal_value = estimate_deal_value(rfq, w)
    if estimated_deal_value is not None and estimated_deal_value > w["high_deal_value_threshold"]:
        score += w["high_deal_value"]
        reasons.append(f"High estimated value: ₹{_lakhs(estimated_deal_value)}L")

    confidence = min(100, max(0, score))
    tier = tier_for(confidence, w)

    return LeadScore(
        lead_score=tier,
        confidence_score=confidence,
        intent_strength=INTENT_LABELS[tier],
        budget_confidence=budget_confidence,
        urgency=urgency,
        category_fit=category_fit,
        ai_reason_summary=". ".join(reasons[:MAX_SUMMARY_REASONS]) or FALLBACK_SUMMARY,
        estimated_deal_value=estimated_deal_value,
    )


def estimate_deal_value(rfq: RFQInput, weights: dict | None = None) -> float | None:
    """
    Total quantity times the flat unit value.

    None when there is no quantity at all, or when the product is too large
    to represent as a finite float.
    """
    w = weights or SCORING_WEIGHTS
    total_qty = sum(item.quantity or 0 for item in rfq.items)
    if total_qty <= 0:
        return None
    value = total_qty * w["unit_value"]
    if not math.isfinite(value):
        return None
    return value


def tier_for(confidence: int, weights: dict | None = None) -> LeadTier:
    """Map a clamped confidence score to its tier (lower bounds inclusive)."""
    w = weights or SCORING_WEIGHTS
    if confidence >= w["hot_threshold"]:
        return LeadTier.HOT
    if confidence >= w["warm_threshold"]:
        return LeadTier.WARM
    return LeadTier.COLD


def _contains_any(text: str, keywords: tuple[str, ...]) -> bool:
    return any(k in text for k in keywords)


def _lakhs(value: float) -> int:
    """Rupees to whole lakhs, halves rounded up."""
    return math.floor(value / 100_000 + 0.5)
