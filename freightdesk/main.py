from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from freightdesk import __version__
from freightdesk.core.config import get_settings
from freightdesk.core.container import get_container
from freightdesk.core.logging import configure_logging
from freightdesk.infrastructure.database.session import dispose_engine, init_db
from freightdesk.interfaces.http.routers import create_api_router

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    yield
    await get_container().shutdown()
    await dispose_engine()


def create_app() -> FastAPI:
    configure_logging(settings)

    app = FastAPI(
        title=settings.project_name,
        description="Freight brokerage API: quotes, orders, balances and top-ups",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(create_api_router(settings.api_prefix))

    @app.get("/health", tags=["health"])
    async def health() -> dict[str, str]:
        return {"status": "ok", "version": __version__}

    return app


app = create_app()
