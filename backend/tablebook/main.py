import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, get_settings
from .database import build_engine, build_sessionmaker, create_schema
from .domain.grid import generate_grid
from .infrastructure.memory import InMemoryBookingLedger
from .infrastructure.off_days import StaticOffDayRegistry
from .infrastructure.repositories import SqlAlchemyBookingLedger
from .routers import availability, bookings, off_days
from .utils.request_id import request_id_middleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build the ledger once for the process and release its connections on shutdown."""
    settings: Settings = app.state.settings
    engine = None
    if settings.ledger_backend == "memory":
        app.state.ledger = InMemoryBookingLedger()
    else:
        engine = build_engine(settings)
        if settings.create_schema:
            await create_schema(engine)
        app.state.ledger = SqlAlchemyBookingLedger(
            build_sessionmaker(engine),
            timeout=settings.storage_timeout_seconds,
        )
    logger.info("booking ledger ready (backend=%s)", settings.ledger_backend)
    try:
        yield
    finally:
        if engine is not None:
            await engine.dispose()
        logger.info("booking ledger closed")


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg', 'invalid value')}" if location else first.get("msg", "invalid value")
    else:
        message = "Invalid request"
    return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content={"message": message})


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title="Table Booking API", lifespan=lifespan)
    app.state.settings = settings
    # Fails here, before serving anything, when the opening hours are inconsistent.
    app.state.grid_config = settings.grid_config()
    app.state.grid = generate_grid(app.state.grid_config)
    app.state.off_days = StaticOffDayRegistry(settings.off_days)

    app.middleware("http")(request_id_middleware)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(availability.router)
    app.include_router(bookings.router)
    app.include_router(off_days.router)
    return app


app = create_app()
