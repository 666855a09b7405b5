import asyncio
import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from studio_slots.api.routes import blocks, bookings, slots
from studio_slots.core.config import settings, _ENV_FILE
from studio_slots.core.db import async_session_maker, init_db
from studio_slots.core.errors import StoreUnavailable
from studio_slots.services.booking_service import release_stale_pending_bookings

if os.getenv("ENV") != "production":
    logging.basicConfig(level=logging.DEBUG)
else:
    logging.basicConfig(
        level=logging.INFO,
        format='{"time": "%(asctime)s", "level": "%(levelname)s", "message": "%(message)s"}',
    )
logger = logging.getLogger(__name__)


async def _run_housekeeping() -> None:
    """Cancel pending bookings whose checkout was abandoned so they stop holding slots."""
    try:
        async with async_session_maker() as session:
            try:
                n = await release_stale_pending_bookings(session, settings.pending_hold_hours)
                await session.commit()
                if n:
                    logger.info("Housekeeping: released %d pending booking(s) older than %d hours", n, settings.pending_hold_hours)
            except Exception:
                await session.rollback()
                raise
    except Exception as e:
        logger.exception("Housekeeping failed: %s", e)


async def _housekeeping_loop() -> None:
    while True:
        await asyncio.sleep(settings.housekeeping_interval_seconds)
        await _run_housekeeping()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Loading .env from: %s (exists: %s)", _ENV_FILE, _ENV_FILE.exists())
    logger.info(
        "Studio timezone %s, slot buffer %d min, pending hold %d h",
        settings.studio_timezone,
        settings.slot_buffer_minutes,
        settings.pending_hold_hours,
    )
    if settings.is_sqlite:
        # Local runs without alembic
        await init_db()
    await _run_housekeeping()
    task = asyncio.create_task(_housekeeping_loop())
    yield
    task.cancel()
    try:
        await task
    except asyncio.CancelledError:
        pass


app = FastAPI(
    title="Studio Slots API",
    description="Time-slot availability and bookings for the cooking studio",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type"],
)

app.include_router(slots.router, prefix="/api/v1")
app.include_router(bookings.router, prefix="/api/v1")
app.include_router(blocks.router, prefix="/api/v1")


def _cors_headers(origin: str | None) -> dict[str, str]:
    """Add CORS headers to error responses so the browser doesn't block them."""
    headers = {
        "Access-Control-Allow-Credentials": "true",
        "Access-Control-Allow-Methods": "GET, POST, PATCH, DELETE, OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type",
    }
    if origin and origin in settings.cors_origins_list:
        headers["Access-Control-Allow-Origin"] = origin
    elif settings.cors_origins_list:
        headers["Access-Control-Allow-Origin"] = settings.cors_origins_list[0]
    return headers


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return the error as JSON with CORS headers so 5xx responses reach the booking UI."""
    origin = request.headers.get("origin")
    headers = _cors_headers(origin)
    if isinstance(exc, HTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=headers,
        )
    if isinstance(exc, StoreUnavailable):
        return JSONResponse(status_code=503, content={"detail": exc.to_detail()}, headers=headers)
    logger.exception("Unhandled exception: %s", exc)
    detail = f"{type(exc).__name__}: {str(exc)}"
    return JSONResponse(
        status_code=500,
        content={"detail": detail},
        headers=headers,
    )


@app.get("/health")
async def health() -> dict:
    return {"status": "ok"}
