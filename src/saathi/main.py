"""
Saathi service entry point.

The classifier is built once in the lifespan hook so malformed
vocabulary or thresholds stop the process before it accepts traffic.
Run with `saathi-api` or `uvicorn saathi.main:app`.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from saathi import __version__
from saathi.api.middleware.error_handler import ErrorHandlerMiddleware
from saathi.api.v1.router import api_router
from saathi.config import Settings, get_settings
from saathi.config.logging_config import configure_logging, get_logger
from saathi.infrastructure.metrics import metrics_router, update_system_info
from saathi.services.classification.classification_engine import create_classifier

logger = get_logger(__name__)

SERVICE_NAME = "Saathi Risk Classifier"


@asynccontextmanager
async def classifier_lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings: Settings = app.state.settings
    classifier = create_classifier(settings)
    app.state.classifier = classifier
    update_system_info(settings.env)

    logger.info(
        "Classifier started",
        env=settings.env,
        version=__version__,
        oracle_available=classifier.oracle_available,
        oracle_provider=classifier.oracle_provider,
    )
    try:
        yield
    finally:
        app.state.classifier = None
        logger.info("Classifier stopped")


def _install_middleware(app: FastAPI, settings: Settings) -> None:
    # Registered last so it wraps CORS and sees every response
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.add_middleware(ErrorHandlerMiddleware)


def create_application(settings: Optional[Settings] = None) -> FastAPI:
    """Build the ASGI app; tests pass their own Settings."""
    settings = settings or get_settings()
    configure_logging(settings)

    interactive_docs = not settings.is_production()
    app = FastAPI(
        title=SERVICE_NAME,
        description="Risk classification for support-call transcripts",
        version=__version__,
        docs_url="/docs" if interactive_docs else None,
        redoc_url="/redoc" if interactive_docs else None,
        lifespan=classifier_lifespan,
    )
    app.state.settings = settings

    _install_middleware(app, settings)
    app.include_router(api_router, prefix=f"/api/{settings.api_version}")
    app.include_router(metrics_router)

    @app.get("/", include_in_schema=False)
    async def service_info() -> dict:
        return {"name": SERVICE_NAME, "version": __version__, "status": "operational"}

    return app


app = create_application()


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "saathi.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.env == "development",
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
