"""FastAPI entry point for the custom domain API (`uvicorn custom_domains.main:app`).

Settings are read inside create_app(), so tests can set env and clear the
get_settings cache before building an app.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from custom_domains.api.v1 import api_router
from custom_domains.core.config import get_settings
from custom_domains.core.exception_handlers import register_exception_handlers
from custom_domains.core.lifespan import create_lifespan
from custom_domains.core.limiter import limiter
from custom_domains.middleware import RequestIDMiddleware


def create_app() -> FastAPI:
    """App with the domain and health routers under /api/v1."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    register_exception_handlers(app)

    # First added = innermost; request ID wraps CORS so every response carries it.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)

    app.include_router(api_router, prefix="/api/v1")
    return app


app = create_app()
