"""Explicit wiring of the database, cache tiers, repositories and services.

One ``Container`` is built per application. Nothing here is a process-wide
singleton, so tests construct their own with fake collaborators.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from surveyapp.core.cache import CacheClient, CacheConfig
from surveyapp.core.cache_manager import CacheManager
from surveyapp.core.db import Database
from surveyapp.core.microcache import LocalCache
from surveyapp.core.settings import Settings
from surveyapp.repositories.data_source import SqlAlchemySurveyDataSource, SurveyDataSource
from surveyapp.repositories.results import ResultsRepository
from surveyapp.services.results import ResultsService
from surveyapp.services.survey import SurveyService

logger = logging.getLogger(__name__)


@dataclass
class Container:
    settings: Settings
    database: Database
    cache: CacheManager
    results_repository: ResultsRepository
    results_service: ResultsService
    survey_service: SurveyService

    @classmethod
    def build(
        cls,
        settings: Settings,
        *,
        database: Optional[Database] = None,
        distributed: Optional[CacheClient] = None,
        data_source: Optional[SurveyDataSource] = None,
    ) -> "Container":
        database = database or Database.from_settings(settings)
        cache_settings = settings.cache_settings()

        if distributed is None and settings.redis_enabled:
            distributed = CacheClient(
                CacheConfig.from_url(
                    settings.redis_url,
                    max_connections=settings.redis_max_connections,
                    socket_timeout=settings.redis_socket_timeout,
                    socket_connect_timeout=settings.redis_connect_timeout,
                )
            )
        if distributed is None:
            logger.info("Distributed cache disabled (no REDIS_URL), using local cache only")

        local = LocalCache(
            default_ttl_seconds=cache_settings.default_ttl_seconds,
            max_entries=cache_settings.max_local_entries,
            check_period_seconds=cache_settings.local_check_period_seconds,
        )
        cache = CacheManager(distributed, local, cache_settings)
        results_repository = ResultsRepository(
            data_source or SqlAlchemySurveyDataSource(database.session_factory),
            cache,
            cache_settings,
            empty_rating_value=settings.empty_rating_value,
        )
        return cls(
            settings=settings,
            database=database,
            cache=cache,
            results_repository=results_repository,
            results_service=ResultsService(results_repository),
            survey_service=SurveyService(database.session_factory, results_repository),
        )

    async def start(self) -> None:
        if self.settings.environment in {"development", "test"}:
            await self.database.create_all()
        if self.cache.distributed is not None:
            await self.cache.distributed.connect()

    async def close(self) -> None:
        await self.cache.shutdown()
        await self.database.dispose()


__all__ = ["Container"]
