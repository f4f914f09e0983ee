from __future__ import annotations

import uuid

import pytest
from fastapi.testclient import TestClient

from receipt_points.api.dependencies import get_receipt_store
from receipt_points.api.main import create_app
from receipt_points.services.receipt_store import ReceiptStore


def _submit(client, body):
    return client.post("/receipts/process", json=body)


def test_process_then_points_target_example(client, target_body):
    resp = _submit(client, target_body)
    assert resp.status_code == 200
    receipt_id = resp.json()["id"]
    assert str(uuid.UUID(receipt_id)) == receipt_id

    resp = client.get(f"/receipts/{receipt_id}/points")
    assert resp.status_code == 200
    assert resp.json() == {"points": 28}


def test_points_corner_market_example(client, corner_market_body):
    receipt_id = _submit(client, corner_market_body).json()["id"]
    assert client.get(f"/receipts/{receipt_id}/points").json() == {"points": 109}


def test_points_are_stable_across_requests(client, target_body):
    receipt_id = _submit(client, target_body).json()["id"]
    first = client.get(f"/receipts/{receipt_id}/points").json()
    second = client.get(f"/receipts/{receipt_id}/points").json()
    assert first == second


def test_each_submission_gets_new_id(client, target_body, store):
    ids = {_submit(client, target_body).json()["id"] for _ in range(5)}
    assert len(ids) == 5
    assert len(store) == 5


@pytest.mark.parametrize("receipt_id", [str(uuid.uuid4()), "not-a-uuid"])
def test_unknown_id_returns_404(client, receipt_id):
    resp = client.get(f"/receipts/{receipt_id}/points")
    assert resp.status_code == 404
    assert resp.json() == {"error": "receipt not found"}


@pytest.mark.parametrize(
    "mutate, message",
    [
        (lambda b: b.__setitem__("purchaseDate", "2022-13-01"), "invalid purchaseDate format"),
        (lambda b: b.__setitem__("purchaseTime", "25:00"), "invalid purchaseTime format"),
        (lambda b: b.__setitem__("total", "35.35.35"), "invalid total"),
        (lambda b: b.__setitem__("items", []), "at least one item required"),
        (lambda b: b["items"][0].__setitem__("price", "six"), "invalid item price"),
        (lambda b: b["items"][0].__setitem__("price", "-6.49"), "invalid item price"),
    ],
)
def test_single_corrupted_field_returns_400(client, store, target_body, mutate, message):
    mutate(target_body)
    resp = _submit(client, target_body)
    assert resp.status_code == 400
    assert resp.json() == {"error": message}
    assert len(store) == 0


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        "",
        "[]",
        '{"retailer": "Target", "items": [{"shortDescription": "x", "price": 1.25}]}',
        '{"retailer": 7}',
    ],
)
def test_malformed_body_returns_400(client, store, content):
    resp = client.post(
        "/receipts/process", content=content, headers={"Content-Type": "application/json"}
    )
    assert resp.status_code == 400
    assert resp.json() == {"error": "invalid JSON"}
    assert len(store) == 0


def test_missing_fields_report_first_field_error(client):
    resp = _submit(client, {"retailer": "Target"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "invalid purchaseDate format"}


def test_round_dollar_total_gets_both_bonuses(client, target_body):
    target_body.update(retailer="", total="100.00", purchaseDate="2022-01-02")
    target_body["items"] = [{"shortDescription": "Gatorade", "price": "100.00"}]
    receipt_id = _submit(client, target_body).json()["id"]
    assert client.get(f"/receipts/{receipt_id}/points").json() == {"points": 75}


@pytest.mark.parametrize("purchase_time, bonus", [("14:00", 10), ("16:00", 0), ("13:59", 0)])
def test_afternoon_boundaries(client, target_body, purchase_time, bonus):
    target_body["purchaseTime"] = purchase_time
    receipt_id = _submit(client, target_body).json()["id"]
    assert client.get(f"/receipts/{receipt_id}/points").json() == {"points": 28 + bonus}


def test_store_dependency_can_be_overridden(target_body):
    injected = ReceiptStore(id_factory=lambda: "fixed-id")
    app = create_app()
    app.dependency_overrides[get_receipt_store] = lambda: injected
    with TestClient(app) as client:
        assert _submit(client, target_body).json() == {"id": "fixed-id"}
        assert client.get("/receipts/fixed-id/points").json() == {"points": 28}
    assert len(app.state.receipt_store) == 0


def test_unexpected_errors_return_500(test_settings, target_body):
    class BrokenStore(ReceiptStore):
        def add(self, receipt):
            raise RuntimeError("boom")

    app = create_app(test_settings, store=BrokenStore())
    with TestClient(app, raise_server_exceptions=False) as client:
        resp = _submit(client, target_body)
    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error"}


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"
    assert resp.json()["environment"] == "test"


def test_overlong_item_price_is_rejected(client, store, target_body):
    target_body["items"][0]["price"] = "9" * 5000
    resp = _submit(client, target_body)
    assert resp.status_code == 400
    assert resp.json() == {"error": "invalid item price"}
    assert len(store) == 0


def test_overlong_total_is_rejected(client, target_body):
    target_body["total"] = "1" * 33
    resp = _submit(client, target_body)
    assert resp.status_code == 400
    assert resp.json() == {"error": "invalid total"}


def test_longest_accepted_price_is_scored(client, target_body):
    target_body["items"] = [{"shortDescription": "abc", "price": "9" * 32}]
    receipt_id = _submit(client, target_body).json()["id"]
    resp = client.get(f"/receipts/{receipt_id}/points")
    assert resp.status_code == 200
    # 6 retailer + 6 odd day + ceil(99..9 * 0.2)
    assert resp.json() == {"points": 12 + 2 * 10**31}


def test_non_ascii_description_scored_by_utf8_length(client):
    body = {
        "retailer": "",
        "purchaseDate": "2022-01-02",
        "purchaseTime": "10:00",
        "items": [{"shortDescription": "Caf\u00e9s", "price": "10.00"}],
        "total": "0.01",
    }
    receipt_id = _submit(client, body).json()["id"]
    assert client.get(f"/receipts/{receipt_id}/points").json() == {"points": 2}


@pytest.mark.parametrize("purchase_time", ["9:30", "3:05"])
def test_single_digit_hour_is_accepted(client, target_body, purchase_time):
    target_body["purchaseTime"] = purchase_time
    resp = _submit(client, target_body)
    assert resp.status_code == 200
    assert client.get(f"/receipts/{resp.json()['id']}/points").json() == {"points": 28}
