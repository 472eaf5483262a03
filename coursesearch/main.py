"""
FastAPI application entry point.
Challenge: Mount routes, middleware (Prometheus), startup events (ES client, index, sample data).
"""

import logging
from contextlib import asynccontextmanager

from elasticsearch import ApiError, TransportError
from elasticsearch.helpers import BulkIndexError
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import make_asgi_app

from coursesearch import __version__
from coursesearch.api.errors import register_exception_handlers
from coursesearch.api.router import api_router
from coursesearch.config import Settings, get_settings
from coursesearch.search.elasticsearch_client import create_elasticsearch, ensure_courses_index
from coursesearch.services.data_loader import load_sample_courses

logger = logging.getLogger(__name__)


async def bootstrap_index(es, settings: Settings) -> None:
    """Create the courses index and load sample data. ES may be down; the API still starts."""
    try:
        await ensure_courses_index(es, settings.courses_index)
        if settings.load_sample_data:
            await load_sample_courses(es, settings.courses_index, settings.sample_data_path)
    except (ApiError, TransportError, BulkIndexError, OSError, ValueError) as exc:
        logger.warning("Index bootstrap skipped: %s", exc)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: one shared Elasticsearch client, index bootstrap. Shutdown: close the client."""
    settings = get_settings()
    es = create_elasticsearch(settings)
    app.state.elasticsearch = es
    try:
        await bootstrap_index(es, settings)
        yield
    finally:
        await es.close()


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings)
    app = FastAPI(
        title=settings.app_name,
        description="Course search over Elasticsearch: filters, sorting, pagination and title autocomplete.",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )

    # CORS for frontend/API consumers
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Prometheus metrics at /metrics
    metrics_app = make_asgi_app()
    app.mount("/metrics", metrics_app)

    register_exception_handlers(app)
    app.include_router(api_router, prefix="/api")

    return app


app = create_app()
