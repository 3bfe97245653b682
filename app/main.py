from __future__ import annotations
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from app.api import router
from app.web import APP_VERSION, router as web_router
from datastore.reading_store import build_default_store
from logging_config import configure_logging
from services.classifier import build_default_classifier


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    # Threshold configuration errors abort startup here.
    build_default_classifier()
    build_default_store()
    try:
        yield
    finally:
        build_default_classifier.cache_clear()
        build_default_store.cache_clear()


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(
        title="SeaWatch",
        description="Sea-quality reading classification and dashboard service.",
        version=APP_VERSION,
        lifespan=lifespan,
    )
    static_dir = Path(__file__).resolve().parent.parent / "static"
    app.mount("/static", StaticFiles(directory=static_dir), name="static")
    app.include_router(router)
    app.include_router(web_router)
    return app

app = create_app()
