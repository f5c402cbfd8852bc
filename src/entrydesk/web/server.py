from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from entrydesk.app import App
from entrydesk.config import Config
from entrydesk.errors import UserError
from entrydesk.web.error_handlers import general_exception_handler, user_error_handler
from entrydesk.web.routers import cadets_router, poomsae_router


def create_fastapi_app(app_instance: App, config: Config) -> FastAPI:
    """Create and configure FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
        """FastAPI application lifespan management."""
        app.state.app = app_instance
        app.state.config = config
        async with app_instance.lifespan():
            yield

    app = FastAPI(title="EntryDesk API", lifespan=lifespan)

    if config.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    app.include_router(cadets_router, prefix="/api/v1")
    app.include_router(poomsae_router, prefix="/api/v1")

    # Rendered application forms; the directory is created on startup
    app.mount("/forms", StaticFiles(directory=config.forms_path, check_dir=False), name="forms")

    app.add_exception_handler(UserError, user_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    return app
