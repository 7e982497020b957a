"""
LLM-drafted follow-up messages for scored leads.

Strict schema enforcement — fail loudly on mismatch.
"""

import json
import re

from openai import AsyncOpenAI

from rfq_leads.config import settings
from rfq_leads.db.models import RFQLeadScore
from rfq_leads.log import get_logger
from rfq_leads.schemas.sales import DRAFT_SCHEMAS, OutreachDraft

logger = get_logger(__name__)


SYSTEM_PROMPT = """You are a B2B sales expert at an Indian procurement marketplace.
Write a follow-up message to a buyer who just submitted a request for quotation.

Focus on:
- Verified suppliers
- Competitive pricing
- Quick quote turnaround
- Quality assurance

Output ONLY valid JSON (no markdown, no extra text)."""

CHANNEL_INSTRUCTIONS = {
    "email": 'Include a subject line. Return {"subject": "...", "message_body": "..."}',
    "whatsapp": 'Keep it short and conversational (under 160 words). Return {"message_body": "..."}',
}


def _build_client() -> AsyncOpenAI:
    """Build the AsyncOpenAI client, optionally with a custom base URL."""
    kwargs: dict = {"api_key": settings.openai_api_key}
    if settings.openai_base_url:
        kwargs["base_url"] = settings.openai_base_url
    return AsyncOpenAI(**kwargs)


def build_prompt(lead: RFQLeadScore, channel: str, tone: str) -> str:
    lines = [
        f"Write a {tone} {channel} follow-up.",
        f"Lead tier: {lead.lead_score} ({lead.confidence_score}% confidence)",
        f"Why: {lead.ai_reason_summary or 'n/a'}",
        f"Urgency: {lead.urgency or 'n/a'}",
    ]
    if lead.category_slug:
        lines.append(f"Category: {lead.category_slug}")
    if lead.trade_type:
        lines.append(f"Trade type: {lead.trade_type}")
    if lead.buyer_company:
        lines.append(f"Buyer company: {lead.buyer_company}")
    if lead.buyer_location:
        lines.append(f"Buyer location: {lead.buyer_location}")
    lines.append(CHANNEL_INSTRUCTIONS[channel])
    return "\n".join(lines)


async def draft_outreach(
    lead: RFQLeadScore, channel: str = "email", tone: str = "professional"
) -> OutreachDraft:
    """
    Ask the model for a follow-up message for one stored lead.
    Returns a strict OutreachDraft — raises on empty output or schema mismatch
    (an email draft without a subject is a mismatch).
    """
    client = _build_client()

    response = await client.chat.completions.create(
        model=settings.openai_model,
        messages=[
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": build_prompt(lead, channel, tone)},
        ],
        temperature=0.4,
        max_tokens=500,
    )

    content = response.choices[0].message.content
    if not content:
        raise ValueError("LLM returned empty response")

    data = json.loads(_strip_markdown_json(content))
    draft = DRAFT_SCHEMAS[channel].model_validate(data)
    logger.info("outreach_drafted", lead_id=lead.id, channel=channel)
    return draft


def _strip_markdown_json(text: str) -> str:
    """Remove ```json ... ``` wrapper if present."""
    text = text.strip()
    if text.startswith("```"):
        text = re.sub(r"^```(?:json)?\s*", "", text)
        text = re.sub(r"\s*```$", "", text)
    return text
