"""
FastAPI application serving the Slack leave-request commands.
Provides the slash-command endpoint and monitoring endpoints.
"""

import logging
import os
from contextlib import asynccontextmanager

import uvicorn
from fastapi import BackgroundTasks, Depends, FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from leave_sheet_bot.cache import StatusCache
from leave_sheet_bot.config import settings
from leave_sheet_bot.dispatcher import CommandDispatcher, render_response
from leave_sheet_bot.handlers import LeaveCommandHandlers
from leave_sheet_bot.notifier import DeferredNotifier, WebhookNotifier
from leave_sheet_bot.store import LeaveRecordStore, build_store

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# Process-wide collaborators shared by all requests
leave_store = build_store(settings)
status_cache = StatusCache(ttl_seconds=settings.status_cache_ttl_seconds)
webhook_notifier = WebhookNotifier(
    settings.slack_webhook_url, timeout=settings.notifier_timeout_seconds
)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    environment: str
    store_backend: str
    status_cache: dict


def get_store() -> LeaveRecordStore:
    return leave_store


def get_status_cache() -> StatusCache:
    return status_cache


def get_notifier() -> WebhookNotifier:
    return webhook_notifier


# Lifespan context manager for startup/shutdown
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle startup and shutdown events."""
    logger.info("Starting Slack Leave Bot API")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Leave store backend: {leave_store.backend}")
    if not settings.slack_webhook_url:
        logger.warning("SLACK_WEBHOOK_URL is not set; notifications will be dropped")

    yield

    logger.info("Shutting down Slack Leave Bot API")


# Create FastAPI app
app = FastAPI(
    title="Slack Leave Bot API",
    description="Slack slash commands for submitting, checking and cancelling leave requests",
    version="1.0.0",
    lifespan=lifespan,
)


# API Endpoints


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint."""
    return {"message": "Slack Leave Bot API", "version": "1.0.0", "docs": "/docs"}


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check(
    store: LeaveRecordStore = Depends(get_store),
    cache: StatusCache = Depends(get_status_cache),
):
    """
    Health check endpoint.
    Returns service status, store backend and status cache state.
    """
    return HealthResponse(
        status="healthy",
        environment=settings.environment,
        store_backend=store.backend,
        status_cache=cache.state(),
    )


@app.post("/slack/commands", response_class=PlainTextResponse, tags=["Slack"])
async def slack_command(
    request: Request,
    background_tasks: BackgroundTasks,
    store: LeaveRecordStore = Depends(get_store),
    cache: StatusCache = Depends(get_status_cache),
    notifier: WebhookNotifier = Depends(get_notifier),
):
    """
    Slack slash-command webhook.

    Handles ``/leave_request``, ``/leave_status`` and ``/leave_cancel``.
    Always answers 200; the body is either the success message or a JSON
    ``{"error": ...}`` object. Notifications are sent after the response.
    """
    body = (await request.body()).decode("utf-8", errors="replace")

    deferred = DeferredNotifier(notifier, background_tasks)
    handlers = LeaveCommandHandlers(
        store=store,
        cache=cache,
        notifier=deferred,
        retry_attempts=settings.store_retry_attempts,
        retry_base_delay=settings.store_retry_base_delay,
    )
    dispatcher = CommandDispatcher(handlers, deferred)

    # Sheet calls and retry sleeps block, keep them off the event loop
    result = await run_in_threadpool(dispatcher.dispatch, body)
    return PlainTextResponse(render_response(result))


@app.get("/ready")
def ready():
    return {"status": "ready"}


if __name__ == "__main__":
    uvicorn.run(
        "leave_sheet_bot.main:app",
        host="0.0.0.0",
        port=int(os.environ.get("PORT", 8080)),
        reload=settings.environment == "development",
        log_level=settings.log_level.lower(),
    )
