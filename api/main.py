import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from api import config
from api.db import create_db_engine, init_db, make_session_factory
from api.graphql.schema import create_graphql_router
from api.metrics import MetricsMiddleware
from api.middleware.auth import APIKeyMiddleware
from api.services.earthquakes import EarthquakeService

logger = logging.getLogger(__name__)


def create_app(database_url: Optional[str] = None) -> FastAPI:
    engine = create_db_engine(database_url or config.DATABASE)
    session_factory = make_session_factory(engine)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_db(engine)
        logger.info("Database ready at %s", engine.url.render_as_string(hide_password=True))
        try:
            yield
        finally:
            engine.dispose()

    app = FastAPI(
        title="Earthquakes API",
        version="0.2",
        description="Earthquake records with a paginated, filterable GraphQL API.",
        lifespan=lifespan,
    )
    app.state.engine = engine
    app.state.earthquake_service = EarthquakeService(session_factory)

    app.add_middleware(APIKeyMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(MetricsMiddleware)

    # Healthcheck - Don't need auth
    @app.get("/health")
    def health():
        return {"status": "ok"}

    # Prometheus text format
    @app.get("/metrics")
    def metrics():
        data = generate_latest()
        return Response(content=data, media_type=CONTENT_TYPE_LATEST)

    app.include_router(create_graphql_router(), prefix="/graphql")

    return app


# ASGI entrypoint: uvicorn api.main:app
app = create_app()


if __name__ == "__main__":
    config.configure_logging()
    uvicorn.run(app, host="0.0.0.0", port=config.PORT)
