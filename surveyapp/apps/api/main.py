"""ASGI entrypoint: ``uvicorn surveyapp.apps.api.main:app``."""

from surveyapp.apps.api.app import create_app

app = create_app()
