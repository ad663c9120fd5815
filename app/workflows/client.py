"""Inngest client construction."""

import logging

import inngest

from app.config import Settings


def create_inngest_client(
    settings: Settings,
    logger: logging.Logger | None = None,
) -> inngest.Inngest:
    """Create the Inngest client for this application."""
    return inngest.Inngest(
        app_id=settings.INNGEST_APP_ID,
        is_production=settings.INNGEST_IS_PRODUCTION,
        signing_key=settings.INNGEST_SIGNING_KEY,
        event_key=settings.INNGEST_EVENT_KEY,
        logger=logger or logging.getLogger("app.workflows"),
    )
