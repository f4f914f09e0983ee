from __future__ import annotations

import copy
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Add backend folder to sys.path so `import receipt_points...` works in tests when running from backend root
BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from receipt_points.api.main import create_app  # noqa: E402
from receipt_points.core.config import Settings  # noqa: E402
from receipt_points.services.receipt_store import ReceiptStore  # noqa: E402

TARGET_RECEIPT = {
    "retailer": "Target",
    "purchaseDate": "2022-01-01",
    "purchaseTime": "13:01",
    "items": [
        {"shortDescription": "Mountain Dew 12PK", "price": "6.49"},
        {"shortDescription": "Emils Cheese Pizza", "price": "12.25"},
        {"shortDescription": "Knorr Creamy Chicken", "price": "1.26"},
        {"shortDescription": "Doritos Nacho Cheese", "price": "3.35"},
        {"shortDescription": "   Klarbrunn 12-PK 12 FL OZ  ", "price": "12.00"},
    ],
    "total": "35.35",
}

CORNER_MARKET_RECEIPT = {
    "retailer": "M&M Corner Market",
    "purchaseDate": "2022-03-20",
    "purchaseTime": "14:33",
    "items": [
        {"shortDescription": "Gatorade", "price": "2.25"},
        {"shortDescription": "Gatorade", "price": "2.25"},
        {"shortDescription": "Gatorade", "price": "2.25"},
        {"shortDescription": "Gatorade", "price": "2.25"},
    ],
    "total": "9.00",
}


@pytest.fixture
def target_body():
    return copy.deepcopy(TARGET_RECEIPT)


@pytest.fixture
def corner_market_body():
    return copy.deepcopy(CORNER_MARKET_RECEIPT)


@pytest.fixture
def test_settings():
    return Settings(ENVIRONMENT="test", LOG_LEVEL="DEBUG", SENTRY_DSN=None)


@pytest.fixture
def store():
    return ReceiptStore()


@pytest.fixture
def app(test_settings, store):
    return create_app(test_settings, store=store)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
