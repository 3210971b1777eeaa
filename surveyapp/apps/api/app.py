from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from surveyapp.apps.api.container import Container
from surveyapp.apps.api.routers import health, results, survey
from surveyapp.apps.api.schemas import ErrorResponse
from surveyapp.core.logging import configure_logging
from surveyapp.core.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, container: Optional[Container] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.container = container or Container.build(settings)
        await app.state.container.start()
        logger.info("Survey API started (environment=%s)", settings.environment)
        try:
            yield
        finally:
            await app.state.container.close()
            logger.info("Survey API stopped")

    app = FastAPI(title="Survey Results API", version="0.1.0", lifespan=lifespan)
    app.include_router(results.router)
    app.include_router(survey.router)
    app.include_router(health.router)

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "Unhandled error on %s %s",
            request.method,
            request.url.path,
            exc_info=exc,
            extra={"request_id": request.headers.get("x-request-id")},
        )
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(error="Internal server error").model_dump(),
        )

    return app
