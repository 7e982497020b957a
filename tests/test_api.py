"""API tests for the lead-score and sales-action endpoints."""

from uuid import uuid4

from rfq_leads.routes import lead_scores as lead_scores_routes
from rfq_leads.routes import sales_actions as sales_actions_routes
from rfq_leads.schemas.sales import OutreachDraft


def _submit(client, payload):
    resp = client.post("/lead-scores", json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()


def _only_lead_id(client):
    leads = client.get("/lead-scores").json()["leads"]
    assert len(leads) == 1
    return leads[0]["id"]


class TestHealth:
    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}


class TestScoring:
    def test_preview_does_not_store(self, client, copper_rfq_payload):
        resp = client.post("/lead-scores/preview", json=copper_rfq_payload)
        assert resp.status_code == 200
        body = resp.json()
        assert body["lead_score"] == "HOT"
        assert body["confidence_score"] == 87
        assert body["urgency"] == "EXPLORATORY"
        assert client.get("/lead-scores").json()["total"] == 0

    def test_submit_stores_and_returns_score(self, client, steel_rfq_payload):
        body = _submit(client, steel_rfq_payload)
        assert body["lead_score"] == "HOT"
        assert body["confidence_score"] == 100

        listing = client.get("/lead-scores").json()
        assert listing["total"] == 1
        stored = listing["leads"][0]
        assert stored["session_id"] == "sess-steel-001"
        assert stored["category_slug"] == "steel"
        assert stored["buyer_company"] == "Shree Infra Projects"
        assert stored["latest_action"] is None

    def test_missing_session_id_is_rejected(self, client):
        resp = client.post("/lead-scores", json={"category": "steel"})
        assert resp.status_code == 422

    def test_negative_quantity_is_rejected(self, client):
        payload = {"session_id": "x", "items": [{"item_name": "Bar", "quantity": -1, "unit": "MT"}]}
        resp = client.post("/lead-scores/preview", json=payload)
        assert resp.status_code == 422

    def test_huge_quantity_preview_still_scores(self, client):
        payload = {"session_id": "x", "items": [{"item_name": "Bar", "quantity": 1e308, "unit": "MT"}]}
        resp = client.post("/lead-scores/preview", json=payload)
        assert resp.status_code == 200
        assert resp.json()["estimated_deal_value"] is None
        assert resp.json()["lead_score"] == "WARM"

    def test_store_failure_is_503(self, client, monkeypatch):
        async def failing_persist(rfq):
            return None

        monkeypatch.setattr(lead_scores_routes, "score_and_persist", failing_persist)
        resp = client.post("/lead-scores", json={"session_id": "x"})
        assert resp.status_code == 503


class TestBoard:
    def test_tier_filter_and_summary(self, client, steel_rfq_payload):
        _submit(client, steel_rfq_payload)
        _submit(client, {"session_id": "warm-1"})
        _submit(client, {"session_id": "warm-2", "description": "need pipes"})

        summary = client.get("/lead-scores/summary").json()
        assert summary == {"HOT": 1, "WARM": 2, "COLD": 0}

        warm = client.get("/lead-scores", params={"tier": "WARM"}).json()
        assert warm["total"] == 2
        assert {lead["lead_score"] for lead in warm["leads"]} == {"WARM"}

    def test_newest_first_with_pagination(self, client):
        for n in range(3):
            _submit(client, {"session_id": f"s-{n}"})

        page = client.get("/lead-scores", params={"limit": 2, "offset": 0}).json()
        assert page["total"] == 3
        assert [lead["session_id"] for lead in page["leads"]] == ["s-2", "s-1"]

        rest = client.get("/lead-scores", params={"limit": 2, "offset": 2}).json()
        assert [lead["session_id"] for lead in rest["leads"]] == ["s-0"]

    def test_unknown_tier_is_rejected(self, client):
        resp = client.get("/lead-scores", params={"tier": "LUKEWARM"})
        assert resp.status_code == 422

    def test_get_single_lead(self, client, copper_rfq_payload):
        _submit(client, copper_rfq_payload)
        lead_id = _only_lead_id(client)

        resp = client.get(f"/lead-scores/{lead_id}")
        assert resp.status_code == 200
        assert resp.json()["estimated_deal_value"] == 10_000_000

    def test_get_lead_bad_id_and_missing(self, client):
        assert client.get("/lead-scores/not-a-uuid").status_code == 400
        assert client.get(f"/lead-scores/{uuid4()}").status_code == 404


class TestSalesActions:
    def test_assign_then_lost_updates_latest_action(self, client, steel_rfq_payload):
        _submit(client, steel_rfq_payload)
        lead_id = _only_lead_id(client)

        resp = client.post(
            f"/lead-scores/{lead_id}/actions",
            json={"action_type": "assign_sales", "assigned_to": "Priya", "loss_reason": "Other"},
        )
        assert resp.status_code == 201
        assigned = resp.json()
        assert assigned["assigned_to"] == "Priya"
        assert assigned["loss_reason"] is None

        resp = client.post(
            f"/lead-scores/{lead_id}/actions",
            json={"action_type": "mark_lost", "loss_reason": "Price too high", "notes": ""},
        )
        assert resp.status_code == 201
        assert resp.json()["notes"] is None

        assert client.get(f"/lead-scores/{lead_id}").json()["latest_action"] == "mark_lost"
        actions = client.get(f"/lead-scores/{lead_id}/actions").json()
        assert [a["action_type"] for a in actions] == ["mark_lost", "assign_sales"]

    def test_mark_lost_requires_known_reason(self, client):
        _submit(client, {"session_id": "x"})
        lead_id = _only_lead_id(client)

        resp = client.post(f"/lead-scores/{lead_id}/actions", json={"action_type": "mark_lost"})
        assert resp.status_code == 400

        resp = client.post(
            f"/lead-scores/{lead_id}/actions",
            json={"action_type": "mark_lost", "loss_reason": "Bad vibes"},
        )
        assert resp.status_code == 400

    def test_unknown_action_type_is_rejected(self, client):
        _submit(client, {"session_id": "x"})
        lead_id = _only_lead_id(client)
        resp = client.post(f"/lead-scores/{lead_id}/actions", json={"action_type": "escalate"})
        assert resp.status_code == 422

    def test_action_on_missing_lead_is_404(self, client):
        resp = client.post(f"/lead-scores/{uuid4()}/actions", json={"action_type": "mark_contacted"})
        assert resp.status_code == 404


class TestOutreach:
    def test_draft_returned(self, client, monkeypatch, copper_rfq_payload):
        _submit(client, copper_rfq_payload)
        lead_id = _only_lead_id(client)
        seen = {}

        async def fake_draft(lead, channel, tone):
            seen.update(lead_id=lead.id, channel=channel, tone=tone)
            return OutreachDraft(message_body="Hi, three verified copper suppliers are ready to quote.")

        monkeypatch.setattr(sales_actions_routes, "draft_outreach", fake_draft)
        resp = client.post(f"/lead-scores/{lead_id}/outreach", json={"channel": "whatsapp"})

        assert resp.status_code == 200
        assert resp.json()["message_body"].startswith("Hi, three verified")
        assert seen == {"lead_id": lead_id, "channel": "whatsapp", "tone": "professional"}

    def test_model_failure_is_502(self, client, monkeypatch):
        _submit(client, {"session_id": "x"})
        lead_id = _only_lead_id(client)

        async def broken_draft(lead, channel, tone):
            raise ValueError("LLM returned empty response")

        monkeypatch.setattr(sales_actions_routes, "draft_outreach", broken_draft)
        resp = client.post(f"/lead-scores/{lead_id}/outreach", json={})
        assert resp.status_code == 502
