"""Async database engine and session factory."""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.core.config import Settings, get_settings

settings = get_settings()


def _engine_options(cfg: Settings) -> dict:
    """Pool tuning applies to PostgreSQL only; SQLite (dev/tests) uses its default pool."""
    options: dict = {"echo": cfg.debug}
    if cfg.async_database_url.startswith("postgresql"):
        options.update(
            pool_size=cfg.database_pool_size,
            max_overflow=cfg.database_max_overflow,
            pool_pre_ping=True,
            # asyncpg: fail connect and statements instead of hanging past the store timeout
            connect_args={
                "timeout": cfg.store_timeout_seconds,
                "command_timeout": cfg.store_timeout_seconds,
            },
        )
    return options


engine = create_async_engine(settings.async_database_url, **_engine_options(settings))

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency that yields an async DB session."""
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
