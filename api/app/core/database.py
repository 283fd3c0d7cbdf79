from sqlmodel import SQLModel, create_engine, Session
from sqlalchemy.pool import StaticPool
from app.core.config import settings
import logging

logger = logging.getLogger(__name__)


def normalize_database_url(url: str) -> str:
    """SQLAlchemy expects postgresql:// rather than the postgres:// scheme some hosts hand out."""
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql://", 1)
    return url


def build_engine(url: str):
    """
    Create a database engine for the given URL.

    PostgreSQL gets a small connection pool with pre-ping. SQLite connections
    may be used from any thread, and an in-memory database keeps a single
    connection so every session sees the same data.
    """
    url = normalize_database_url(url)

    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, echo=False, **kwargs)

    return create_engine(
        url,
        echo=False,
        pool_pre_ping=True,  # Verify connections before using
        pool_size=5,
        max_overflow=10,
    )


db_url = normalize_database_url(settings.database_url)
logger.info(f"Connecting to database: {db_url[:20]}...")  # Log partial URL for debugging

engine = build_engine(db_url)


def get_session():
    """Dependency for getting database sessions."""
    with Session(engine) as session:
        yield session


def init_db():
    """Initialize database tables."""
    SQLModel.metadata.create_all(engine)
