"""
Database session management.
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from tripjournal.core.config import settings
from tripjournal.db.base import Base

connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    # Background tasks use their own session from another thread
    connect_args["check_same_thread"] = False

engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DB_ECHO,
    pool_pre_ping=True,
    pool_recycle=3600,
    connect_args=connect_args,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Session:
    """Dependency for getting database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Initialize database tables."""
    # Register every model on the metadata before creating tables
    import tripjournal.models  # noqa: F401
    Base.metadata.create_all(bind=engine)


def drop_db():
    """Drop all tables (used by tests)."""
    import tripjournal.models  # noqa: F401
    Base.metadata.drop_all(bind=engine)
