from __future__ import annotations

import logging

import sentry_sdk

from resume_analyzer.core.config import settings

_configured = False


def configure_logging() -> None:
    """Set up root logging and optional Sentry reporting once per process."""
    global _configured
    if _configured:
        return
    logging.basicConfig(level=settings.log_level.upper(), format="%(message)s")
    if settings.sentry_dsn:
        sentry_sdk.init(dsn=settings.sentry_dsn)
    _configured = True
