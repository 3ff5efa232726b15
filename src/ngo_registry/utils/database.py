import logging

from fastapi import HTTPException
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from sqlalchemy.exc import SQLAlchemyError
from dotenv import load_dotenv

from src.ngo_registry.config import settings

# Configure logging for better error tracing
logger = logging.getLogger(__name__)
logging.basicConfig(level=logging.INFO)

# Load environment variables from .env file
load_dotenv()


def build_engine(url: str) -> AsyncEngine:
    """
    Create the async engine. Pool sizing only applies to server databases;
    SQLite (used by the test-suite) manages its own pool.
    """
    kwargs = {"echo": settings.DB_ECHO, "pool_pre_ping": True}
    if not url.startswith("sqlite"):
        kwargs.update(
            pool_size=settings.DB_POOL_SIZE,  # Pool size for database connections
            max_overflow=settings.DB_MAX_OVERFLOW,  # Max connections that can exceed pool_size
            connect_args={"timeout": settings.DB_TIMEOUT},  # Connection timeout
        )
    return create_async_engine(url, **kwargs)


try:
    engine = build_engine(settings.database_url)
    logger.info("Database engine created for driver: %s", settings.database_url.split("://", 1)[0])
except SQLAlchemyError as e:
    logger.error(f"Error creating database engine: {e}")
    raise Exception(f"Database connection failed: {e}")

# Use async_sessionmaker to create sessionmaker for async SQLAlchemy session
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    autoflush=False,  # To avoid flushing automatically
    autocommit=False,  # To manually commit transactions
    expire_on_commit=False,  # Don't expire objects after commit
)

# Base class for SQLAlchemy ORM models (for declarative base models)
Base = declarative_base()

# Dependency to retrieve a database session in FastAPI
# Ensures the session is properly closed after use
async def get_db():
    try:
        async with AsyncSessionLocal() as session:
            yield session
    except SQLAlchemyError as e:
        logger.error(f"Error: while interacting with the database: {e}")
        raise HTTPException(status_code=500, detail=f"Database operation failed: {e}")
