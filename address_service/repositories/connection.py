"""Database connection management with health checks and error handling."""

import logging
from typing import Any, Dict, Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from address_service.config.settings import settings
from address_service.models.tables import Base

logger = logging.getLogger(__name__)


class DatabaseConnectionManager:
    """Manages the async engine and session factory with health checks."""

    def __init__(self, database_url: Optional[str] = None):
        self._database_url = database_url
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker] = None
        self._is_connected = False

    @property
    def database_url(self) -> str:
        return self._database_url or settings.database_url

    def _engine_options(self) -> Dict[str, Any]:
        """Engine keyword arguments for the configured backend."""
        url = self.database_url
        options: Dict[str, Any] = {"echo": settings.database_echo}

        if url.startswith("sqlite"):
            options["connect_args"] = {"check_same_thread": False}
            # In-memory databases live as long as their single connection
            if ":memory:" in url or url.rstrip("/").endswith(":"):
                options["poolclass"] = StaticPool
        else:
            options["pool_size"] = settings.database_pool_size
            options["pool_pre_ping"] = True

        return options

    async def _dispose_engine(self) -> None:
        """Dispose of the current engine, if any, and forget its session factory."""
        engine, self._engine = self._engine, None
        self._session_factory = None
        self._is_connected = False
        if engine is not None:
            await engine.dispose()

    async def initialize(self) -> None:
        """Create the engine, the session factory and the schema.

        A previous engine is disposed first, and a new engine that fails to
        come up is disposed before the error is re-raised.
        """
        await self._dispose_engine()

        try:
            self._engine = create_async_engine(self.database_url, **self._engine_options())
            self._session_factory = async_sessionmaker(self._engine, expire_on_commit=False)

            async with self._engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)

            self._is_connected = await self.health_check()

            logger.info(
                "Database connection initialized successfully",
                extra={
                    "database_backend": self._engine.url.get_backend_name(),
                    "database_name": self._engine.url.database,
                }
            )

        except Exception as e:
            logger.error(
                "Failed to initialize database connection",
                extra={
                    "error": str(e),
                    "database_url": self._masked_url(),
                }
            )
            await self._dispose_engine()
            raise

    def _masked_url(self) -> str:
        if self._engine is not None:
            return self._engine.url.render_as_string(hide_password=True)
        return self.database_url.split("@")[-1]

    async def get_session_factory(self) -> async_sessionmaker:
        """Get session factory, initializing the connection if needed."""
        if not self._session_factory or not self._is_connected:
            await self.initialize()

        return self._session_factory

    async def health_check(self) -> bool:
        """Perform database health check."""
        try:
            if not self._engine:
                return False

            async with self._engine.connect() as conn:
                result = await conn.execute(text("SELECT 1"))
                value = result.scalar()

            if value == 1:
                logger.debug("Database health check passed")
                return True

            logger.warning("Database health check failed: unexpected result")
            self._is_connected = False
            return False

        except SQLAlchemyError as e:
            logger.warning(
                "Database health check failed: database error",
                extra={"error": str(e)}
            )
            self._is_connected = False
            return False

        except Exception as e:
            logger.error(
                "Database health check failed: unexpected error",
                extra={"error": str(e)}
            )
            self._is_connected = False
            return False

    async def close(self) -> None:
        """Dispose of the engine and its pool."""
        try:
            await self._dispose_engine()
            logger.info("Database connection closed successfully")

        except Exception as e:
            logger.error(
                "Error closing database connection",
                extra={"error": str(e)}
            )

    @property
    def is_connected(self) -> bool:
        return self._is_connected


# Global connection manager instance
database_manager = DatabaseConnectionManager()
