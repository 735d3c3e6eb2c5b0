"""Database connection and session management."""
import logging
from collections.abc import AsyncIterator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.engine.url import make_url

from surveydesk.config import Settings

logger = logging.getLogger(__name__)

# Base class for models
Base = declarative_base()


class Database:
    """Store client owning the async engine and the session factory.

    One instance is built by ``create_app`` and lives for the whole process on
    ``app.state.database``. Request handlers receive sessions through
    :func:`get_db`; nothing else creates engines.
    """

    def __init__(self, settings: Settings, *, engine: AsyncEngine | None = None):
        self.settings = settings
        self.engine = engine or self._create_engine(settings)
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autocommit=False,
            autoflush=False,
        )

    @staticmethod
    def _create_engine(settings: Settings) -> AsyncEngine:
        url = make_url(settings.database_url)
        engine_kwargs = {
            "echo": False,
            "future": True,
            "pool_pre_ping": True,
        }

        if url.get_backend_name() == "sqlite":
            logger.debug("Using SQLite (no password or pool sizing required)")
        else:
            pool_size = max(1, settings.db_pool_size)
            max_overflow = max(0, settings.db_max_overflow)
            if settings.environment == "production":
                # Keep production connection usage conservative
                pool_size = min(pool_size, 2)
                max_overflow = min(max_overflow, 2)
                engine_kwargs["connect_args"] = {"ssl": "require"}
                logger.debug("SSL connection enabled (ssl=require)")
            engine_kwargs.update(pool_size=pool_size, max_overflow=max_overflow, pool_recycle=3600)

        engine = create_async_engine(settings.database_url, **engine_kwargs)
        logger.debug("Database engine created successfully")
        return engine

    async def create_all(self) -> None:
        """Create any missing tables from the model metadata."""
        import surveydesk.models  # noqa: F401  (registers every table on Base.metadata)

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ensured")

    async def session(self) -> AsyncIterator[AsyncSession]:
        async with self.session_factory() as session:
            try:
                yield session
            finally:
                await session.close()

    async def dispose(self) -> None:
        await self.engine.dispose()


# Dependency for FastAPI
async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """FastAPI dependency to get database session."""
    database: Database = request.app.state.database
    async for session in database.session():
        yield session
