import logging

from fastapi import FastAPI

from ..config.logging_config import configure_logging
from .bootstrap import describe_services
from .models import StatusResponse
from .registry import ServiceRegistry

configure_logging()
logger = logging.getLogger(__name__)


def create_app(registry: ServiceRegistry) -> FastAPI:
    summary = describe_services(registry)
    app = FastAPI()
    app.state.services = registry

    @app.get("/health", response_model=StatusResponse)
    async def health() -> StatusResponse:
        return StatusResponse(status="ok", **summary)

    logger.info("HTTP app created", extra=summary)
    return app
