"""Database configuration for the wiki app."""

from advanced_alchemy.config import EngineConfig
from advanced_alchemy.extensions.litestar import AsyncSessionConfig, SQLAlchemyAsyncConfig

from wikirev.config import Settings
from wikirev.db.base import Base


def build_db_config(settings: Settings) -> SQLAlchemyAsyncConfig:
    """Build the SQLAlchemy async database configuration.

    Edit handlers commit their own transactions, so sessions are not
    auto-committed by the plugin.
    """
    if "sqlite" in settings.db.url:
        engine_config = EngineConfig(echo=settings.db.echo)
    else:
        engine_config = EngineConfig(
            pool_size=settings.db.pool_size,
            max_overflow=settings.db.pool_overflow,
            pool_timeout=settings.db.pool_timeout,
            pool_pre_ping=settings.db.pool_pre_ping,
            echo=settings.db.echo,
        )

    return SQLAlchemyAsyncConfig(
        connection_string=settings.db.url,
        metadata=Base.metadata,
        create_all=settings.db.create_all,
        session_config=AsyncSessionConfig(expire_on_commit=False),
        engine_config=engine_config,
    )
