"""Shared fixtures.

The environment is configured before anything from ``web3journey`` is
imported: settings, the engine and the auth mode are all read at import time.
"""

import os
import tempfile
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest


_TEST_DIR = Path(tempfile.mkdtemp(prefix="web3journey-tests-"))

os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DIR / 'test.db'}"
os.environ["AUTH_PROVIDER"] = "none"
os.environ["ENVIRONMENT"] = "test"
os.environ["LOCAL_PROGRESS_DIR"] = str(_TEST_DIR / "local-progress")
os.environ["CERTIFICATE_MINT_DELAY_SECONDS"] = "0"
os.environ["DEFAULT_LOCALE"] = "en"

from httpx import ASGITransport, AsyncClient  # noqa: E402

from web3journey.database.base import create_all_tables, drop_all_tables  # noqa: E402
from web3journey.database.engine import engine  # noqa: E402
from web3journey.progress.dependencies import registry, reset_local_cache  # noqa: E402
from web3journey.progress.realtime import ChangeFeed  # noqa: E402

from .fakes import FakeProgressRepository, FakeStatsRepository  # noqa: E402


@pytest.fixture
def feed() -> ChangeFeed:
    return ChangeFeed()


@pytest.fixture
def progress_repository() -> FakeProgressRepository:
    return FakeProgressRepository()


@pytest.fixture
def stats_repository() -> FakeStatsRepository:
    return FakeStatsRepository()


@pytest.fixture
async def database() -> AsyncGenerator[None, None]:
    """Fresh tables in the SQLite test database."""
    await create_all_tables()
    yield
    await drop_all_tables()
    await engine.dispose()


@pytest.fixture
async def client(database, tmp_path, monkeypatch) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client against the app in single-user mode."""
    from web3journey.config.settings import get_settings
    from web3journey.main import app

    monkeypatch.setattr(get_settings(), "LOCAL_PROGRESS_DIR", str(tmp_path / "local-progress"))
    registry.clear()
    reset_local_cache()

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http_client:
        yield http_client

    registry.clear()
    reset_local_cache()
