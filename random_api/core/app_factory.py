from __future__ import annotations

"""Application factory for the FastAPI app.

Centralizes app construction (metadata, middleware, handlers, routers,
static site) so tests can build isolated instances.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from random_api import __version__
from random_api.api.routes import generators_router, health_router, identifiers_router
from random_api.core.config import settings
from random_api.core.exception_handlers import setup_exception_handlers
from random_api.core.logging import configure_logging
from random_api.core.middleware import recovery_middleware, request_id_middleware
from random_api.core.openapi import apply_openapi_customizations
from random_api.core.rate_limit import rate_limit_middleware
from random_api.core.static import mount_static_site

CORS_ALLOW_METHODS = ["GET", "POST", "HEAD", "PUT", "DELETE", "PATCH"]
CORS_ALLOW_HEADERS = ["Origin", "Content-Type", "Accept"]


def create_app(*, serve_static: bool = True) -> FastAPI:
    """Create and configure the FastAPI application instance.

    Args:
        serve_static: Mount the bundled front-end at ``/``.

    Returns:
        Configured FastAPI app with middleware, handlers, routers and docs.
    """
    # Logging first so subsequent init logs are formatted as desired
    configure_logging(settings.log)

    app = FastAPI(
        title="Random API",
        description=(
            "Random integers, floats, dictionary words, dice rolls and unique "
            "identifiers (UUID v4/v7, ULID, NanoID) as plain text. Requests are "
            "rate limited per client."
        ),
        version=__version__,
        license_info={
            "name": "MIT License",
            "url": "https://opensource.org/licenses/MIT",
        },
    )

    # Middleware: the last one added runs first, so CORS answers preflights
    # before a request is counted or assigned an id. Recovery sits innermost
    # so a 500 still gets every header added on the way out.
    app.middleware("http")(recovery_middleware)
    app.middleware("http")(rate_limit_middleware)
    app.middleware("http")(request_id_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.app.cors_origins,
        allow_methods=CORS_ALLOW_METHODS,
        allow_headers=CORS_ALLOW_HEADERS,
    )

    setup_exception_handlers(app)

    app.include_router(generators_router, prefix="/v1")
    app.include_router(identifiers_router, prefix="/v1")
    app.include_router(health_router)

    apply_openapi_customizations(app)

    # Mounted last: "/" would otherwise shadow every route above
    if serve_static:
        mount_static_site(app, max_age=settings.app.static_cache_seconds)

    return app
