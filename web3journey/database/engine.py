from typing import Any

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from web3journey.config.settings import get_settings


# Pool settings per deployment target
POOL_PROFILES: dict[str, dict[str, Any]] = {
    "supabase_pooler": {
        "pool_size": 3,
        "max_overflow": 2,
        "pool_recycle": 1800,
        "connect_args": {"connect_timeout": 10, "prepare_threshold": None},
    },
    "postgres": {
        "pool_size": 5,
        "max_overflow": 10,
        "pool_recycle": 3600,
        "connect_args": {"connect_timeout": 10},
    },
}


def _pool_profile(database_url: str) -> dict[str, Any]:
    if ".supabase." in database_url or ".pooler." in database_url:
        return POOL_PROFILES["supabase_pooler"]
    return POOL_PROFILES["postgres"]


def create_app_engine() -> AsyncEngine:
    """Async engine for Postgres (direct or Supabase pooler) or SQLite in tests."""
    settings = get_settings()
    if settings.is_sqlite:
        return create_async_engine(settings.DATABASE_URL, echo=settings.DEBUG)

    return create_async_engine(
        settings.DATABASE_URL,
        echo=settings.DEBUG,
        pool_pre_ping=True,
        pool_use_lifo=True,
        **_pool_profile(settings.DATABASE_URL),
    )


engine: AsyncEngine = create_app_engine()
