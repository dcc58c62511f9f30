from database.models import CampaignStatus

from .conftest import make_campaign


def _create(client, world, price="1500.50"):
    return client.post("/api/collaborations", json={
        "campaign_id": world.campaign.id,
        "influencer_id": world.influencer.id,
        "agreed_price": price,
    })


def _status(client, path, status, **extra):
    return client.patch(f"/api/{path}/status", json={"status": status, **extra})


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "healthy"}


def test_collaboration_endpoints(client, world):
    resp = _create(client, world)
    assert resp.status_code == 201
    data = resp.json()
    assert data["status"] == "pending"
    assert data["agreed_price"] == "1500.50"
    collaboration_id = data["id"]

    resp = _status(client, f"collaborations/{collaboration_id}", "accepted")
    assert resp.status_code == 200
    assert resp.json()["status"] == "accepted"

    resp = _status(client, f"collaborations/{collaboration_id}", "completed")
    assert resp.status_code == 409
    body = resp.json()
    assert body["error"] == "invalid_transition"
    assert body["current_status"] == "accepted"
    assert body["requested_status"] == "completed"

    resp = client.get(f"/api/collaborations/{collaboration_id}")
    assert resp.json()["status"] == "accepted"

    resp = client.get(f"/api/influencers/{world.influencer.id}/collaborations")
    assert [c["id"] for c in resp.json()] == [collaboration_id]


def test_error_status_codes(client, world, db):
    draft = make_campaign(db, world.brand, status=CampaignStatus.DRAFT)
    db.commit()

    resp = client.post("/api/collaborations", json={
        "campaign_id": draft.id, "influencer_id": world.influencer.id, "agreed_price": "10.00",
    })
    assert resp.status_code == 409
    assert resp.json()["error"] == "invalid_state"

    assert client.get("/api/collaborations/missing").status_code == 404
    assert client.get("/api/collaborations/missing").json()["error"] == "not_found"

    assert _create(client, world).status_code == 201
    duplicate = _create(client, world)
    assert duplicate.status_code == 409
    assert duplicate.json()["error"] == "conflict"

    # Rejected by request validation before reaching the engine
    assert _create(client, world, price="-1").status_code == 422
    assert _status(client, "collaborations/missing", "archived").status_code == 422


def test_deliverable_endpoints(client, world):
    collaboration_id = _create(client, world).json()["id"]

    resp = client.post("/api/deliverables", json={"collaboration_id": collaboration_id, "title": "Reel"})
    assert resp.status_code == 409
    assert resp.json()["error"] == "invalid_state"

    _status(client, f"collaborations/{collaboration_id}", "accepted")
    resp = client.post("/api/deliverables", json={"collaboration_id": collaboration_id, "title": "Reel"})
    assert resp.status_code == 201
    deliverable = resp.json()
    assert deliverable["submitted_at"] is None

    resp = _status(client, f"deliverables/{deliverable['id']}", "submitted")
    assert resp.json()["submitted_at"] is not None

    resp = _status(client, f"deliverables/{deliverable['id']}", "revision_requested", feedback="fix X")
    assert resp.json()["feedback"] == "fix X"

    resp = client.get(f"/api/collaborations/{collaboration_id}/deliverables")
    assert [d["status"] for d in resp.json()] == ["revision_requested"]


def test_payment_endpoints(client, world):
    collaboration_id = _create(client, world).json()["id"]

    resp = client.post("/api/payments", json={
        "collaboration_id": collaboration_id,
        "amount": "500", "platform_commission": "50", "influencer_payout": "400",
    })
    assert resp.status_code == 422
    assert resp.json()["error"] == "invalid_argument"

    resp = client.post("/api/payments", json={
        "collaboration_id": collaboration_id,
        "amount": "500", "platform_commission": "50", "influencer_payout": "450",
    })
    assert resp.status_code == 201
    payment_id = resp.json()["id"]

    resp = _status(client, f"payments/{payment_id}", "released")
    assert resp.status_code == 409
    assert resp.json()["error"] == "invalid_state"

    resp = _status(client, f"payments/{payment_id}", "in_escrow", transaction_id="hold_1")
    assert resp.json()["transaction_id"] == "hold_1"

    for status in ("accepted", "in_progress", "completed"):
        _status(client, f"collaborations/{collaboration_id}", status)

    resp = _status(client, f"payments/{payment_id}", "released")
    assert resp.status_code == 200
    assert resp.json()["status"] == "released"
    assert resp.json()["transaction_id"] == "hold_1"

    earnings = client.get(f"/api/influencers/{world.influencer.id}/earnings").json()
    assert [p["influencer_payout"] for p in earnings] == ["450.00"]


def test_dispute_endpoints(client, world):
    collaboration_id = _create(client, world).json()["id"]
    payload = {
        "collaboration_id": collaboration_id,
        "subject": "Late delivery",
        "description": "Reel was due last Friday",
    }

    resp = client.post("/api/disputes", json={**payload, "initiated_by": world.outsider.id})
    assert resp.status_code == 403
    assert resp.json()["error"] == "forbidden"

    resp = client.post("/api/disputes", json={**payload, "initiated_by": world.brand_user.id})
    assert resp.status_code == 201
    dispute_id = resp.json()["id"]

    assert client.put(f"/api/disputes/{dispute_id}/review").json()["status"] == "in_review"

    resp = client.post(f"/api/disputes/{dispute_id}/close", json={"reason": "duplicate"})
    assert resp.json()["resolution"] == "Closed: duplicate"

    resp = client.post(f"/api/disputes/{dispute_id}/resolve", json={"resolution": "late"})
    assert resp.status_code == 409

    disputes = client.get(f"/api/collaborations/{collaboration_id}/disputes").json()
    assert [d["status"] for d in disputes] == ["closed"]
