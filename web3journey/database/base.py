from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all database models."""


async def create_all_tables() -> None:
    """Create all tables in the database."""
    from .engine import engine

    # Register every model with the metadata before creating tables
    from web3journey.notes import models as _notes_models  # noqa: F401
    from web3journey.progress import models as _progress_models  # noqa: F401
    from web3journey.stats import models as _stats_models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_all_tables() -> None:
    """Drop all tables in the database."""
    from .engine import engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
