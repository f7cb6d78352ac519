"""Main entrypoint for the Karaoke Lounge API.

``create_app`` builds and configures the FastAPI application; ``app`` is
created at import time so an ASGI server can find it::

    uvicorn karaoke.main:app --reload
"""

from fastapi import FastAPI

from karaoke import __version__
from karaoke.api.exception_handlers import register_exception_handlers
from karaoke.api.routers import api_router, health
from karaoke.config import Settings, get_settings
from karaoke.infrastructure.lifecycle import lifespan
from karaoke.infrastructure.observability import RequestLoggingMiddleware


# Hey future me - settings go on app.state right here (not in lifespan), so the dependencies can
# read them even when tests drive the app without running lifespan. Tests pass their own
# Settings; production uses the cached env-based ones.
def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use, defaults to get_settings()

    Returns:
        Configured application (resources are opened by the lifespan)
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version or __version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        RequestLoggingMiddleware,
        log_request_body=settings.observability.log_request_body,
    )
    register_exception_handlers(app)

    app.include_router(api_router, prefix=settings.api_prefix)
    app.include_router(health.router, prefix="/health", tags=["Health"])

    return app


app = create_app()
