"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

import inngest.fast_api
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.config import get_settings
from app.database import SessionFactory, close_db
from app.services.email_service import EmailService
from app.workflows import build_functions, create_handlers, create_inngest_client


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    logger.info("Starting movie ticket booking event functions...")

    yield

    # Shutdown
    logger.info("Shutting down movie ticket booking event functions...")

    await close_db()
    logger.info("Database connections closed")


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="""
## Movie Ticket Booking Events

Inngest functions reacting to identity and booking events:

- **User sync**: mirror Clerk user create/update/delete into the user table
- **Seat release**: free held seats of bookings left unpaid for 10 minutes
- **Booking confirmation**: email the user when a booking is confirmed
- **Show reminders**: every 8 hours, remind ticket holders of upcoming shows
- **New show notifications**: announce a newly added show to every user
        """,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    client = create_inngest_client(settings, logger)
    handlers = create_handlers(SessionFactory, EmailService(settings), settings)
    inngest.fast_api.serve(app, client, build_functions(client, handlers, settings))

    # Health check endpoint
    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": settings.APP_VERSION,
        }

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle uncaught exceptions."""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal Server Error",
                "detail": str(exc) if settings.DEBUG else None,
            },
        )

    return app


# Create application instance
app = create_app()


def run():
    """Run the application with uvicorn."""
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    run()
