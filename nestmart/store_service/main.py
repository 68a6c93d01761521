"""
NestMart store service - users, JWT login, role-gated product catalog
"""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import Optional
import logging

from .config import Settings, load_settings
from .db import build_engine, build_session_factory, init_db
from .exceptions import StoreServiceError, Unauthenticated
from .routes import auth, health, products, users
from .security import PasswordHasher, TokenService

SERVICE_NAME = "NestMart Store Service"
SERVICE_VERSION = "1.0.0"

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


async def store_error_handler(_request: Request, exc: StoreServiceError) -> JSONResponse:
    headers = None
    if isinstance(exc, Unauthenticated):
        headers = {"WWW-Authenticate": "Bearer"}
    if exc.status_code >= 500:
        logger.error("Unhandled service error %s: %s", exc.code, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"detail": "Internal server error"})
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message}, headers=headers)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application.

    Settings are resolved here, once. A missing JWT_SECRET_KEY raises
    ConfigurationError and the app is never created.
    """
    settings = settings or load_settings()
    configure_logging(settings.LOG_LEVEL)

    engine = build_engine(settings.DATABASE_URL)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        """Initialize database on startup"""
        init_db(engine)
        yield
        engine.dispose()

    app = FastAPI(
        title=SERVICE_NAME,
        description="Users, JWT login and a role-gated product catalog",
        version=SERVICE_VERSION,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.password_hasher = PasswordHasher(rounds=settings.PASSWORD_HASH_ROUNDS)
    app.state.token_service = TokenService(
        settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
        ttl=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StoreServiceError, store_error_handler)

    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(products.router)
    app.include_router(health.router)

    @app.get("/")
    def root():
        return {
            "service": SERVICE_NAME,
            "version": SERVICE_VERSION,
            "status": "running",
        }

    logger.info(
        "Store service configured: token_ttl=%smin password_length=%s..%s",
        settings.ACCESS_TOKEN_EXPIRE_MINUTES, settings.PASSWORD_MIN_LENGTH, settings.PASSWORD_MAX_LENGTH,
    )
    return app


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run(create_app(), host="0.0.0.0", port=8000)
