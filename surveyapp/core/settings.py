from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from surveyapp.core.cache_keys import CacheKeys, CacheSettings, StatisticTTLs
from surveyapp.core.env import load_env


PROJECT_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_USER_DATA_DIR = Path.home() / ".surveyapp" / "data"

_ENVIRONMENTS = {"development", "production", "staging", "test"}
_EMPTY_RATING_POLICIES = {"zero", "null"}


@dataclass(frozen=True)
class Settings:
    environment: str  # development, production, staging, test
    data_dir: Path
    database_url: str
    sql_echo: bool
    db_pool_size: int
    db_max_overflow: int
    db_pool_timeout: int
    db_pool_recycle: int
    redis_url: str
    redis_socket_timeout: float
    redis_connect_timeout: float
    redis_max_connections: int
    cache_default_ttl: int
    cache_max_local_entries: int
    cache_local_check_period: int
    cache_namespace: str
    cache_key_version: int
    cache_ttl_total_count: int
    cache_ttl_rating_avg: int
    cache_ttl_food_dist: int
    cache_ttl_age_stats: int
    results_empty_rating: str
    log_level: str
    log_json: bool
    log_file: str

    @property
    def redis_enabled(self) -> bool:
        return bool(self.redis_url)

    @property
    def empty_rating_value(self) -> Optional[float]:
        """Value reported for a rating average computed over no rows."""
        return 0.0 if self.results_empty_rating == "zero" else None

    def cache_settings(self) -> CacheSettings:
        return CacheSettings(
            default_ttl_seconds=self.cache_default_ttl,
            max_local_entries=self.cache_max_local_entries,
            local_check_period_seconds=self.cache_local_check_period,
            keys=CacheKeys(namespace=self.cache_namespace, version=self.cache_key_version),
            ttls=StatisticTTLs(
                total_count=self.cache_ttl_total_count,
                rating_averages=self.cache_ttl_rating_avg,
                food_distribution=self.cache_ttl_food_dist,
                age_statistics=self.cache_ttl_age_stats,
            ),
        )


def _get_int(name: str, default: int, *, minimum: Optional[int] = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw.strip())
    except (TypeError, ValueError):
        return default
    if minimum is not None and value < minimum:
        return default
    return value


def _get_float(name: str, default: float, *, minimum: Optional[float] = None) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw.strip())
    except (TypeError, ValueError):
        return default
    if minimum is not None and value < minimum:
        return default
    return value


def _get_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _default_data_dir() -> Path:
    env_dir = os.getenv("DATA_DIR")
    if env_dir and env_dir.strip():
        return Path(env_dir).expanduser()
    return DEFAULT_USER_DATA_DIR


def _normalize_sqlite_url(url: str) -> str:
    if url.startswith("sqlite") and not url.startswith("sqlite+aiosqlite"):
        path = url.split("///", maxsplit=1)[-1]
        return f"sqlite+aiosqlite:///{path}"
    return url


load_env()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    environment = os.getenv("ENVIRONMENT", "development").strip().lower()
    if environment not in _ENVIRONMENTS:
        environment = "development"

    data_dir = _default_data_dir()
    data_dir.mkdir(parents=True, exist_ok=True)

    database_url = (os.getenv("DATABASE_URL") or "").strip()
    if not database_url:
        database_url = f"sqlite+aiosqlite:///{data_dir / 'survey.db'}"
    database_url = _normalize_sqlite_url(database_url)

    results_empty_rating = os.getenv("RESULTS_EMPTY_RATING", "zero").strip().lower() or "zero"
    if results_empty_rating not in _EMPTY_RATING_POLICIES:
        logging.warning(
            "Unknown RESULTS_EMPTY_RATING=%r, falling back to 'zero'", results_empty_rating
        )
        results_empty_rating = "zero"

    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"
    log_file = os.getenv("LOG_FILE", "").strip()
    if not log_file:
        log_dir = data_dir / "logs"
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = str(log_dir / "app.log")

    cache_namespace = os.getenv("CACHE_NAMESPACE", "survey").strip() or "survey"

    return Settings(
        environment=environment,
        data_dir=data_dir,
        database_url=database_url,
        sql_echo=_get_bool("SQL_ECHO", default=False),
        db_pool_size=_get_int("DB_POOL_SIZE", 20, minimum=1),
        db_max_overflow=_get_int("DB_MAX_OVERFLOW", 10, minimum=0),
        db_pool_timeout=_get_int("DB_POOL_TIMEOUT", 30, minimum=1),
        db_pool_recycle=_get_int("DB_POOL_RECYCLE", 3600, minimum=60),
        redis_url=os.getenv("REDIS_URL", "").strip(),
        redis_socket_timeout=_get_float("REDIS_SOCKET_TIMEOUT", 5.0, minimum=0.1),
        redis_connect_timeout=_get_float("REDIS_CONNECT_TIMEOUT", 10.0, minimum=0.1),
        redis_max_connections=_get_int("REDIS_MAX_CONNECTIONS", 50, minimum=1),
        cache_default_ttl=_get_int("CACHE_DEFAULT_TTL", 300, minimum=1),
        cache_max_local_entries=_get_int("CACHE_MAX_LOCAL_ENTRIES", 1000, minimum=1),
        cache_local_check_period=_get_int("CACHE_LOCAL_CHECK_PERIOD", 600, minimum=1),
        cache_namespace=cache_namespace,
        cache_key_version=_get_int("CACHE_KEY_VERSION", 1, minimum=1),
        cache_ttl_total_count=_get_int("CACHE_TTL_TOTAL_COUNT", 120, minimum=1),
        cache_ttl_rating_avg=_get_int("CACHE_TTL_RATING_AVG", 300, minimum=1),
        cache_ttl_food_dist=_get_int("CACHE_TTL_FOOD_DIST", 300, minimum=1),
        cache_ttl_age_stats=_get_int("CACHE_TTL_AGE_STATS", 300, minimum=1),
        results_empty_rating=results_empty_rating,
        log_level=log_level,
        log_json=_get_bool("LOG_JSON", default=False),
        log_file=log_file,
    )
