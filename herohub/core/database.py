"""
Database configuration and session management
"""
from sqlalchemy import create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import StaticPool
from typing import Generator
import logging

from herohub.core.config import settings

logger = logging.getLogger(__name__)

# Create Base class for models
Base = declarative_base()

# Lazy initialization for engine and session
_engine = None
_SessionLocal = None


def get_database_url() -> str:
    """Get database URL from settings"""
    url = settings.DATABASE_URL
    if not url:
        raise ValueError("DATABASE_URL is not configured")
    return url


def build_engine(database_url: str):
    """
    Create a SQLAlchemy engine for the given URL
    
    SQLite gets a thread-agnostic connection (and a single shared
    connection for in-memory databases) with foreign keys enforced;
    every other backend gets a sized pool and, for PostgreSQL, an
    optional statement timeout.
    """
    url = make_url(database_url)
    echo = settings.DEBUG
    
    if url.get_backend_name() == "sqlite":
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
        engine = create_engine(database_url, echo=echo, **kwargs)
        
        # SQLite leaves REFERENCES / ON DELETE CASCADE off per connection
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()
        
        return engine
    
    connect_args = {}
    if url.get_backend_name() == "postgresql" and settings.DB_STATEMENT_TIMEOUT_MS > 0:
        connect_args["options"] = f"-c statement_timeout={settings.DB_STATEMENT_TIMEOUT_MS}"
    
    return create_engine(
        database_url,
        pool_pre_ping=True,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_recycle=settings.DB_POOL_RECYCLE,
        connect_args=connect_args,
        echo=echo,
    )


def get_engine():
    """Get or create SQLAlchemy engine lazily"""
    global _engine
    
    if _engine is None:
        database_url = get_database_url()
        logger.info("Creating database engine...")
        try:
            _engine = build_engine(database_url)
            logger.info("Database engine created successfully")
        except Exception as e:
            logger.error(f"Failed to create database engine: {e}")
            raise
    
    return _engine


def get_session_local():
    """Get or create SessionLocal lazily"""
    global _SessionLocal
    
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(
            autocommit=False, 
            autoflush=False, 
            bind=get_engine()
        )
    
    return _SessionLocal


def get_db() -> Generator[Session, None, None]:
    """
    Dependency function to get database session.
    Use this in FastAPI route dependencies.
    
    Example:
        @router.get("/leaderboard")
        def leaderboard(db: Session = Depends(get_db)):
            return AggregationService.leaderboard(db)
    """
    SessionLocal = get_session_local()
    db = SessionLocal()
    try:
        yield db
    except Exception as e:
        logger.error(f"Database session error: {e}")
        db.rollback()
        raise
    finally:
        db.close()


def init_db(engine=None):
    """Initialize database - creates tables if needed"""
    # Register every table on Base.metadata
    import herohub.models  # noqa: F401
    
    try:
        engine = engine or get_engine()
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables initialized")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        raise
