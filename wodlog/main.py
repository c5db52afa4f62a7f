"""FastAPI application factory and lifespan."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from wodlog.api.v1 import api_router
from wodlog.core.config import get_settings
from wodlog.core.exceptions import (
    Conflict,
    InputRejected,
    NotFound,
    PersistenceError,
    ScoreTypeMismatch,
    Unauthorized,
    WodLogError,
)
from wodlog.db.session import engine

settings = get_settings()
logger = logging.getLogger(__name__)

# Domain error category -> HTTP status
ERROR_STATUS: dict[type[WodLogError], int] = {
    InputRejected: 422,
    NotFound: 404,
    Unauthorized: 403,
    Conflict: 409,
    PersistenceError: 500,
}


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def status_for(exc: WodLogError) -> int:
    for exc_type in type(exc).__mro__:
        if exc_type in ERROR_STATUS:
            return ERROR_STATUS[exc_type]
    return 500


async def domain_error_handler(request: Request, exc: WodLogError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    content: dict = {"detail": exc.message}
    if isinstance(exc, ScoreTypeMismatch):
        content["expected_score_type"] = exc.expected_score_type
        content["missing"] = list(exc.missing)
        content["extra"] = list(exc.extra)
    return JSONResponse(status_code=status_code, content=content)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: nothing to do (schema is managed by Alembic); shutdown: dispose the pool."""
    logger.info("%s starting (%s)", settings.app_name, settings.environment)
    yield
    await engine.dispose()


def create_application() -> FastAPI:
    configure_logging()
    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    # CORS: allow everything in debug, localhost in dev, CORS_ORIGINS env otherwise
    if settings.debug:
        cors_origins = ["*"]
    elif settings.environment == "development":
        cors_origins = ["http://localhost:3000", "http://127.0.0.1:3000"]
    else:
        cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(WodLogError, domain_error_handler)

    @app.get("/")
    def root():
        return {"status": "ok", "message": settings.app_name}

    app.include_router(api_router, prefix=settings.api_v1_prefix)
    return app


app = create_application()
