# app/api/__init__.py
from fastapi import FastAPI

from app.api.context import AccessGate, RequestLogger, install_interceptors
from app.api.errors import register_exception_handlers
from app.api.routers import carts, catalog, orders, users
from app.data.database import Base, create_db_engine, create_session_factory
from app.services.lock_service import LockService
from app.services.password_hasher import PasswordHasher
from app.services.token_service import TokenService
from app.utils.settings import DATABASE_URL
from app.utils.logging import get_logger

#rejestracja modeli w Base.metadata
import app.data.models  # noqa: F401

logger = get_logger(__name__)


def create_app(
    database_url: str | None = None,
    lock_service: LockService | None = None,
    token_service: TokenService | None = None,
    password_hasher: PasswordHasher | None = None,
    create_tables: bool = True,
) -> FastAPI:
    app = FastAPI(
        title="Storefront API",
        version="1.0.0",
    )

    engine = create_db_engine(database_url or DATABASE_URL)
    if create_tables:
        Base.metadata.create_all(bind=engine)
        logger.info(f"Tables ready: {sorted(Base.metadata.tables.keys())}")

    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.lock_service = lock_service or LockService()
    app.state.token_service = token_service or TokenService()
    app.state.password_hasher = password_hasher or PasswordHasher()

    # AccessGate zawsze pierwszy
    install_interceptors(app, [AccessGate(app.state.token_service), RequestLogger()])
    register_exception_handlers(app)

    # Include routers
    app.include_router(users.router)
    app.include_router(catalog.router)
    app.include_router(carts.router)
    app.include_router(orders.router)

    return app
