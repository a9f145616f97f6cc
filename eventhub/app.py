"""
EventHub Storefront - FastAPI Application

Serves the storefront and admin dashboard endpoints over the events API.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from eventhub import __version__
from eventhub.errors import ERROR_INTERNAL
from eventhub.logging import get_logger
from eventhub.routers import router
from eventhub.routers.deps import shutdown_services

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    yield
    await shutdown_services()


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(status_code=500, content={"detail": ERROR_INTERNAL})


def create_app() -> FastAPI:
    app = FastAPI(
        title="EventHub Storefront",
        description="Event ticketing storefront and admin dashboard API",
        version=__version__,
        lifespan=lifespan,
    )

    # The UI is served from another origin during development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(router)

    @app.get("/api/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "ok", "service": "eventhub"}

    return app


app = create_app()
