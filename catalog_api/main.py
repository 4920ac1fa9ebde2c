# catalog_api/main.py
"""
FastAPI application for the product catalog.

Run with: uvicorn catalog_api.main:app --port 3000
or the ``catalog-api`` console script, which reads HOST/PORT/API_KEY.
"""

from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .config import API_KEY_HEADER, Settings, get_settings
from .database import CatalogStore
from .log import configure_logging, get_logger
from .middleware import ROUTE_NOT_FOUND, catch_faults, error_response, log_requests
from .routes import router

logger = get_logger(__name__)

WELCOME = "Welcome to the Product API! Go to /api/products to see all products."


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # unmatched path or unbound method on a known path
    if exc.status_code in (404, 405):
        return error_response(404, ROUTE_NOT_FOUND)
    return error_response(exc.status_code, str(exc.detail))


def create_app(settings: Optional[Settings] = None, store: Optional[CatalogStore] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.log_format)

    # no /docs, /redoc or /openapi.json: every unbound path is "Route not found"
    app = FastAPI(
        title="catalog-api (in-memory product catalog)",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings
    app.state.store = store if store is not None else CatalogStore()

    # last registered runs first: logging wraps the fault boundary
    app.middleware("http")(catch_faults)
    app.middleware("http")(log_requests)

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    @app.api_route("/", methods=["GET", "HEAD"], response_class=PlainTextResponse)
    async def welcome():
        return WELCOME

    app.include_router(router)
    return app


app = create_app()


def _mask(secret: str) -> str:
    return secret[:2] + "***" if len(secret) > 4 else "***"


def run() -> None:
    settings = app.state.settings
    logger.info(
        "server_starting",
        url=f"http://localhost:{settings.port}",
        host=settings.host,
        port=settings.port,
        api_key_header=API_KEY_HEADER,
        api_key=_mask(settings.api_key),
    )
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
