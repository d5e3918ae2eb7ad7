from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from csa_market.core.logging import get_logger
from csa_market.core.settings import get_settings

logger = get_logger(__name__)


class Base(DeclarativeBase):
    pass


# Global engine instance
_engine: Engine | None = None
_SessionLocal: sessionmaker | None = None


def init_db() -> None:
    """Initialize database engine and session factory."""
    global _engine, _SessionLocal

    if _engine is not None:
        return

    settings = get_settings()

    engine_kwargs: dict = {"pool_pre_ping": True, "echo": settings.debug}
    if settings.is_sqlite:
        engine_kwargs["connect_args"] = {"check_same_thread": False}
    else:
        engine_kwargs["pool_size"] = settings.database_pool_size
        engine_kwargs["max_overflow"] = settings.database_max_overflow

    _engine = create_engine(str(settings.database_url), **engine_kwargs)
    _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_engine)

    @event.listens_for(_engine, "connect")
    def log_connect(dbapi_conn, connection_record):
        logger.debug(f"New database connection established: {id(dbapi_conn)}")

    logger.info("Database initialized successfully")


def get_engine() -> Engine:
    """Get the database engine, initializing if necessary."""
    if _engine is None:
        init_db()
    return _engine


def get_session_factory() -> sessionmaker:
    """Get the session factory, initializing if necessary."""
    if _SessionLocal is None:
        init_db()
    return _SessionLocal


def create_tables() -> None:
    """Create all tables that do not exist yet (development convenience)."""
    from csa_market.models import schema  # noqa: F401

    Base.metadata.create_all(bind=get_engine())


@contextmanager
def get_db() -> Generator[Session, None, None]:
    """
    Context manager for database sessions.

    Usage:
        with get_db() as db:
            farms = db.query(Farm).all()
    """
    SessionLocal = get_session_factory()
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def get_db_session() -> Generator[Session, None, None]:
    """Yield a database session for FastAPI dependency injection."""
    SessionLocal = get_session_factory()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
