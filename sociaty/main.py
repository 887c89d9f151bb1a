import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from sociaty.core.config import Settings, get_settings
from sociaty.core.errors import register_exception_handlers
from sociaty.core.logging_config import configure_logging
from sociaty.core.store import JsonStore
from sociaty.routers import auth, health, listings, users

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    explicit_settings = settings is not None
    settings = settings or get_settings()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # static directories must exist before the first request is served
        settings.upload_dir.mkdir(parents=True, exist_ok=True)
        settings.public_dir.mkdir(parents=True, exist_ok=True)
        JsonStore(settings.data_file).init()
        logger.info(
            "%s running (%s), store=%s uploads=%s",
            settings.app_name, settings.app_env, settings.data_file, settings.upload_dir,
        )
        yield

    app = FastAPI(title=settings.app_name, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    if explicit_settings:
        app.dependency_overrides[get_settings] = lambda: settings

    # --- Routers ---
    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(listings.router)

    # --- Static files ---
    app.mount(
        settings.upload_url,
        StaticFiles(directory=settings.upload_dir, check_dir=False),
        name="uploads",
    )
    # frontend goes last so it never shadows /api or /uploads
    app.mount(
        "/",
        StaticFiles(directory=settings.public_dir, html=True, check_dir=False),
        name="public",
    )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run("sociaty.main:app", host=_settings.host, port=_settings.port)
