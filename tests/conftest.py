import os
import tempfile
from pathlib import Path

import pytest
import pytest_asyncio
from fakeredis import aioredis as fakeredis_aioredis

_TEST_DATA_DIR = Path(tempfile.mkdtemp(prefix="surveyapp-tests-"))

TEST_ENV = {
    "ENVIRONMENT": "test",
    "DATA_DIR": str(_TEST_DATA_DIR),
    "DATABASE_URL": f"sqlite+aiosqlite:///{_TEST_DATA_DIR / 'survey.db'}",
    "REDIS_URL": "",
    "LOG_FILE": str(_TEST_DATA_DIR / "logs" / "app.log"),
    "LOG_LEVEL": "WARNING",
}

for key, value in TEST_ENV.items():
    os.environ[key] = value

from fakes import TODAY, FakeSurveyDataSource  # noqa: E402

from surveyapp.core.cache import CacheClient  # noqa: E402
from surveyapp.core.cache_keys import CacheSettings  # noqa: E402
from surveyapp.core.cache_manager import CacheManager  # noqa: E402
from surveyapp.core.db import Database  # noqa: E402
from surveyapp.core.microcache import LocalCache  # noqa: E402
from surveyapp.repositories.results import ResultsRepository  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def _set_test_env():
    """Force deterministic env for tests and reset cached settings."""
    for key, value in TEST_ENV.items():
        os.environ[key] = value

    from surveyapp.core import settings as settings_module

    settings_module.get_settings.cache_clear()
    yield
    settings_module.get_settings.cache_clear()


@pytest.fixture
def cache_settings() -> CacheSettings:
    return CacheSettings()


@pytest.fixture
def local_cache(cache_settings) -> LocalCache:
    return LocalCache(
        default_ttl_seconds=cache_settings.default_ttl_seconds,
        max_entries=cache_settings.max_local_entries,
        check_period_seconds=cache_settings.local_check_period_seconds,
    )


@pytest_asyncio.fixture
async def fake_redis():
    client = fakeredis_aioredis.FakeRedis(decode_responses=True)
    await client.flushall()
    yield client
    await client.aclose()


@pytest_asyncio.fixture
async def distributed(fake_redis) -> CacheClient:
    client = CacheClient(client=fake_redis)
    await client.connect()
    return client


@pytest.fixture
def cache_manager(distributed, local_cache, cache_settings) -> CacheManager:
    return CacheManager(distributed, local_cache, cache_settings)


@pytest.fixture
def data_source() -> FakeSurveyDataSource:
    return FakeSurveyDataSource()


@pytest.fixture
def results_repository(data_source, cache_manager, cache_settings) -> ResultsRepository:
    return ResultsRepository(data_source, cache_manager, cache_settings, today=lambda: TODAY)


@pytest_asyncio.fixture
async def database(tmp_path):
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'survey.db'}")
    await db.create_all()
    yield db
    await db.dispose()
