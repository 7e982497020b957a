"""
RFQ Lead Scoring — FastAPI Service

Rules-based HOT / WARM / COLD scoring of RFQ submissions, plus the sales board built on top.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rfq_leads.config import settings
from rfq_leads.db.session import init_db
from rfq_leads.log import configure_logging, get_logger
from rfq_leads.routes import lead_scores, sales_actions

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and create DB tables on startup (CREATE TABLE IF NOT EXISTS)."""
    configure_logging()
    await init_db()
    logger.info("startup_complete")
    yield


app = FastAPI(
    title="RFQ Lead Scoring API",
    description="Scores RFQ submissions into HOT / WARM / COLD leads and tracks sales follow-up.",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(lead_scores.router)
app.include_router(sales_actions.router)


@app.get("/health", tags=["health"])
async def health():
    """Health check for load balancers and container orchestration."""
    return {"status": "ok"}
