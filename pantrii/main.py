from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pantrii.catalog import SAMPLE_RECIPES
from pantrii.config import LOG_LEVEL, get_cors_allow_origins
from pantrii.logging_utils import configure_logging
from pantrii.routers.flavors import router as flavors_router
from pantrii.routers.health import router as health_router
from pantrii.routers.pantry import router as pantry_router
from pantrii.routers.preferences import router as preferences_router
from pantrii.routers.recipes import router as recipes_router
from pantrii.storage import InMemoryStore

logger = logging.getLogger(__name__)


def create_app(store: InMemoryStore | None = None) -> FastAPI:
    configure_logging(LOG_LEVEL)

    app = FastAPI(
        title="Pantrii API",
        version="0.1.0",
        description="Pantry tracking and pantry-aware recipe suggestions.",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_cors_allow_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.store = store or InMemoryStore(recipes=SAMPLE_RECIPES)

    app.include_router(health_router)
    app.include_router(pantry_router)
    app.include_router(preferences_router)
    app.include_router(recipes_router)
    app.include_router(flavors_router)

    @app.get("/")
    async def root() -> dict:
        return {
            "name": "pantrii",
            "status": "ok",
            "docs": "/docs",
        }

    logger.info("pantrii app ready with %d catalog recipes", len(app.state.store.list_recipes()))
    return app


app = create_app()
