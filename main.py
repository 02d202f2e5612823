# type: ignore
# pyright: reportGeneralTypeIssues=false
"""
Clan Key Reminder Service
=========================
Tracks boss key usage per clan member and, every few minutes, checks whether
a weekly Hydra / Chimera reminder is due. Due reminders ping every member
that still has keys left through the clan's chat webhook, at most once per
calendar week per boss type.

Port: 8080
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.controllers import key_update_controller, reminder_controller, system_controller
from app.core.config import settings
from app.core.dependencies import get_document_store, get_reminder_scheduler
from app.core.logging import get_logger
from app.core.scheduler import start_scheduler, stop_scheduler
from app.middleware import MetricsMiddleware, RequestIDMiddleware

logger = get_logger(settings.SERVICE_NAME)


# ── Lifespan ──────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(application: FastAPI):
    """Create the document table and start the periodic reminder job."""
    get_document_store().create_schema()
    start_scheduler(get_reminder_scheduler())
    logger.info("%s %s starting", settings.SERVICE_NAME, settings.SERVICE_VERSION)
    yield
    stop_scheduler()
    get_document_store().dispose()
    logger.info("%s shutting down", settings.SERVICE_NAME)


# ── FastAPI App ───────────────────────────────────────────────────────────
app = FastAPI(
    title="Clan Key Reminder Service",
    description="Boss key tracking and weekly webhook reminders for a clan.",
    version=settings.SERVICE_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestIDMiddleware)


# ── Global exception handler ─────────────────────────────────────────────
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    req_id = getattr(request.state, "request_id", None)
    logger.exception("Unhandled exception", extra={"request_id": req_id})
    return JSONResponse(
        status_code=500,
        content={"error": "internal_server_error", "detail": str(exc), "request_id": req_id},
    )


app.include_router(system_controller.router)
app.include_router(key_update_controller.router)
app.include_router(reminder_controller.router)


# ── Entrypoint ────────────────────────────────────────────────────────────
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.SERVICE_PORT, log_level="info")
