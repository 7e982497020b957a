"""Tests for structlog setup."""

import pytest
import structlog

from rfq_leads.config import settings
from rfq_leads.log import configure_logging, get_logger


@pytest.fixture(autouse=True)
def restore_structlog():
    yield
    structlog.reset_defaults()


def test_json_output_carries_event_and_context(monkeypatch, capsys):
    monkeypatch.setattr(settings, "log_format", "json")
    configure_logging()
    # fresh, uncached logger bound to the captured stdout
    logger = structlog.wrap_logger(
        structlog.PrintLogger(),
        processors=structlog.get_config()["processors"],
        wrapper_class=structlog.get_config()["wrapper_class"],
    )

    logger.warning("lead_score_persist_failed", session_id="sess-1")

    out = capsys.readouterr().out
    assert '"event": "lead_score_persist_failed"' in out
    assert '"session_id": "sess-1"' in out
    assert '"level": "warning"' in out


def test_get_logger_exposes_level_methods():
    logger = get_logger(__name__)
    for method in ("debug", "info", "warning", "error"):
        assert callable(getattr(logger, method))
