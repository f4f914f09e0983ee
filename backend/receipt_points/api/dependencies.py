"""Common dependencies for FastAPI routes.

The receipt store lives on ``app.state`` (see
:func:`receipt_points.api.main.create_app`) rather than in module
globals, so every application instance, including the ones built by
tests, owns an isolated store. Override :func:`get_receipt_store` via
``app.dependency_overrides`` to inject a prepared store.
"""

from __future__ import annotations

from fastapi import Request

from receipt_points.services.receipt_store import ReceiptStore


def get_receipt_store(request: Request) -> ReceiptStore:
    """Return the store attached to the running application."""
    return request.app.state.receipt_store
