import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from search_features.config import get_settings
from search_features.db.factory import make_database
from search_features.features.registry import build_feature_registry
from search_features.routers import autosuggest, features, indexing, ping, status_report
from search_features.services.opensearch.factory import make_opensearch_client


# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting search features API...")

    settings = get_settings()
    app.state.settings = settings

    database = make_database(settings)
    app.state.database = database
    logger.info("Database connected")

    # Assembled once; handed to requests through app.state
    app.state.feature_registry = build_feature_registry()
    app.state.autosuggest_option_filters = []
    logger.info(f"Registered features: {', '.join(app.state.feature_registry.slugs())}")

    app.state.opensearch_client = make_opensearch_client()
    if app.state.opensearch_client.health_check():
        logger.info("OpenSearch connected successfully")
    else:
        logger.warning("OpenSearch connection failed")

    logger.info("API ready")
    yield

    # Cleanup
    database.teardown()
    logger.info("API shutdown complete")


app = FastAPI(
    title="Search Features API",
    description="Feature modules (autosuggest) for a WordPress-style search index",
    version=os.getenv("APP_VERSION", "0.1.0"),
    lifespan=lifespan,
)

# Include routers
app.include_router(ping.router, prefix="/api/v1")
app.include_router(features.router, prefix="/api/v1")
app.include_router(autosuggest.router, prefix="/api/v1")
app.include_router(indexing.router, prefix="/api/v1")
app.include_router(status_report.router, prefix="/api/v1")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, port=8000, host="0.0.0.0")
