import logging

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from .config import Settings
from .models import Base

logger = logging.getLogger(__name__)


class Database:
    """Owns the async engine and session factory for one application instance.

    Opened from the application lifespan and disposed on shutdown.
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine
        self.session_factory = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        engine = create_async_engine(
            settings.database_url,
            echo=settings.echo_sql,
            pool_pre_ping=True,
            pool_recycle=3600,
        )
        return cls(engine)

    async def create_tables(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("reservation schema ensured")

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("database engine disposed")
