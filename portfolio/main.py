# portfolio/main.py

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from portfolio.api.v1.api import api_router
from portfolio.core.config import Settings, get_settings
from portfolio.core.errors import CollectionCorruptError
from portfolio.core.logging import get_logger
from portfolio.services.project_service import ProjectService


def create_application(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    logger = get_logger("portfolio", level=settings.log_level)
    service = ProjectService.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await service.bootstrap()
        logger.info(
            f"[BOOTSTRAP] Storage ready: images in {settings.blob_dir}, "
            f"collection at {settings.collection_file}"
        )
        try:
            orphans = await service.orphaned_images()
        except CollectionCorruptError as e:
            logger.error(f"[BOOTSTRAP] {e}")
        else:
            if orphans:
                logger.warning(f"[BOOTSTRAP] {len(orphans)} image(s) without a project record in {settings.blob_dir}")
        yield

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.project_service = service

    # ---------- CORS ----------
    origins = [str(o).rstrip("/") for o in settings.backend_cors_origins] or [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ---------- STATIC FILES ----------
    # Project images, served under the same URL stored in each record's "image"
    app.mount(
        settings.blob_url_prefix,
        StaticFiles(directory=str(settings.blob_dir), check_dir=False),
        name="project-images",
    )

    # ---------- ROUTERS ----------
    app.include_router(api_router, prefix=settings.api_v1_prefix)

    @app.get("/healthz", tags=["health"])
    async def healthz():
        return {"status": "ok"}

    return app


app = create_application()
