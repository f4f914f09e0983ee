"""Observability helpers (logging setup, Sentry init & scrubbing).

Centralises logging and Sentry initialisation so configuration does not
drift between the API and the command line entry point. Sentry
initialisation is a no-op when no DSN is configured.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration

from receipt_points.core.config import Settings, settings as default_settings


def configure_logging(level: str | int = "INFO") -> None:
    """Configure root logging once; later calls only adjust the level."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger().setLevel(level)


def _before_send(event: Dict[str, Any], hint: Dict[str, Any] | None = None):
    """Scrub obvious PII / secrets before sending to Sentry.

    - Drop Authorization & Cookie headers
    - Remove request data/body (keep method + URL)
    """
    req = event.get("request") or {}
    headers = req.get("headers") or {}
    for k in list(headers.keys()):
        if k.lower() in ("authorization", "cookie", "set-cookie", "x-api-key"):
            headers.pop(k, None)
    # Receipt bodies never leave the process
    req.pop("data", None)
    event["request"] = req
    return event


def sentry_enabled(settings: Settings | None = None) -> bool:
    settings = settings or default_settings
    return bool(settings.SENTRY_DSN)


def init_sentry(service: str, settings: Settings | None = None) -> bool:
    """Initialise Sentry once for a given process.

    Returns True if Sentry was initialised; False otherwise.
    """
    settings = settings or default_settings
    if not settings.SENTRY_DSN:
        return False
    if getattr(init_sentry, "_done", False):  # prevent duplicate init in same process
        return True
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        integrations=[FastApiIntegration()],
        traces_sample_rate=float(settings.SENTRY_TRACES_SAMPLE_RATE or 0),
        environment=settings.ENVIRONMENT,
        release=settings.SENTRY_RELEASE,
        before_send=_before_send,
    )
    sentry_sdk.set_tag("service", service)
    init_sentry._done = True  # type: ignore[attr-defined]
    return True


def capture_exception(exc: BaseException, settings: Settings | None = None) -> None:
    """Forward an unexpected exception to Sentry when it is configured."""
    if sentry_enabled(settings):
        sentry_sdk.capture_exception(exc)
