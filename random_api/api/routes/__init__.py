from __future__ import annotations

from random_api.api.routes.generators import router as generators_router
from random_api.api.routes.health import router as health_router
from random_api.api.routes.identifiers import router as identifiers_router

__all__ = ["generators_router", "health_router", "identifiers_router"]
