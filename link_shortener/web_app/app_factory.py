"""FastAPI application factory."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shortener.errors import ShortenerError
from shortener.common.logging_config import get_logger
from .api import api_router
from .web import web_router
from .middleware.logging import LoggingMiddleware


def create_app(
    store_instance,
    cache_instance,
    service_instance,
    config,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        store_instance: Link store instance
        cache_instance: Cache instance
        service_instance: Service instance
        config: Configuration instance

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="Link Shortener",
        description="Short links with a fixed lifetime and a bounded inventory",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )

    # Store instances in app state for access in routes
    app.state.store = store_instance
    app.state.cache = cache_instance
    app.state.service = service_instance
    app.state.config = config

    logger = get_logger("web")

    @app.exception_handler(ShortenerError)
    async def shortener_error_handler(request: Request, exc: ShortenerError):
        if exc.status_code >= 500:
            logger.error(
                f"{request.method} {request.url.path} failed: {exc.__class__.__name__}",
                exc_info=exc.__cause__,
            )
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        # The only request body is the url; anything unusable there is a missing url
        logger.info(f"{request.method} {request.url.path} rejected: {len(exc.errors())} validation error(s)")
        return JSONResponse(status_code=400, content={"error": "url parameter is required"})

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)

    # API first so /api/* never reaches the /{code} redirect route
    app.include_router(api_router, prefix="/api", tags=["API"])
    app.include_router(web_router, tags=["Links"])

    return app
