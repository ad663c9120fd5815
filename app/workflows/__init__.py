"""
Inngest workflows for the movie ticket booking app.

Usage:
    client = create_inngest_client(settings)
    handlers = create_handlers(SessionFactory, EmailService(settings), settings)
    inngest.fast_api.serve(app, client, build_functions(client, handlers, settings))
"""

from app.workflows.client import create_inngest_client
from app.workflows.functions import build_functions
from app.workflows.handlers import Handlers, create_handlers
from app.workflows.publisher import EventPublisher

__all__ = [
    "create_inngest_client",
    "build_functions",
    "create_handlers",
    "Handlers",
    "EventPublisher",
]
