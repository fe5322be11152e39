from concurrent.futures import ThreadPoolExecutor, TimeoutError as FuturesTimeout

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base

from app.settings import Settings

Base = declarative_base()


def make_engine(settings: Settings) -> Engine:
    """
    Build the engine for `settings.database_url`.
    PostgreSQL connections fail fast: 2s to connect, 5s per statement.
    """
    url = settings.database_url
    kwargs = {"future": True}
    if url.startswith("sqlite"):
        # sessions are opened from the service's worker threads
        kwargs["connect_args"] = {"check_same_thread": False}
    elif url.startswith("postgresql"):
        kwargs["connect_args"] = {
            "connect_timeout": 2,
            "options": "-c statement_timeout=5000",
        }
        kwargs["pool_pre_ping"] = True
    return create_engine(url, **kwargs)


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


# Worker pool for database calls that must not outlive a deadline.
_pool = ThreadPoolExecutor(max_workers=8, thread_name_prefix="db")


def run_with_timeout(fn, timeout: float, *args):
    """
    Run `fn(*args)` on the db worker pool and wait at most `timeout` seconds.
    On expiry raise TimeoutError; the worker itself is not interrupted.
    """
    future = _pool.submit(fn, *args)
    try:
        return future.result(timeout=timeout)
    except FuturesTimeout:
        future.cancel()
        raise TimeoutError(
            f"Database operation timed out after {timeout:g}s. The service may be unavailable."
        ) from None


def ping(engine: Engine) -> None:
    """Trivial liveness query."""
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
