from contextlib import asynccontextmanager
import logging
from typing import Optional
from fastapi import FastAPI
from sqlalchemy.exc import SQLAlchemyError

from app import __version__
from .db import Base, make_engine, make_session_factory
from .registration import RegistrationService
from .routers.customers import router as customers_router
from .routers.health import router as health_router
from .settings import Settings, load_settings
from app.setup_logging import setup_logging

log = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the API around one Settings object.
    The engine, session factory and registration service are created
    here and shared through `app.state`.
    """
    settings = settings or load_settings()
    if settings.environment != "test":
        # pytest captures output itself
        setup_logging(settings.log_level, sql_echo=settings.sql_echo)

    engine = make_engine(settings)
    session_factory = make_session_factory(engine)

    # --------------------------------------------------------------------
    # Lifespan: create tables at start-up, release the pool at shutdown
    # --------------------------------------------------------------------
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.schema_error = None
        try:
            Base.metadata.create_all(bind=engine)
        except SQLAlchemyError as e:
            # keep serving; /api/health reports the database as down
            log.exception("schema setup failed")
            app.state.schema_error = str(e)
        yield
        engine.dispose()

    app = FastAPI(title="Customer Registration", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = session_factory
    app.state.registration = RegistrationService(session_factory, settings)

    # Register API routers:
    app.include_router(customers_router)
    app.include_router(health_router)
    return app


_app: Optional[FastAPI] = None


def __getattr__(name: str):
    """
    `uvicorn app.main:app` resolves `app` here, so the environment is only
    read and the engine only built when the module is actually served.
    """
    global _app
    if name == "app":
        if _app is None:
            _app = create_app()
        return _app
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
