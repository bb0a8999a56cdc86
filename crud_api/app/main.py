"""
Main entrypoint for the CRUD API.

This module assembles the FastAPI application: logging, middleware,
exception handlers, the service instances and the routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``, e.g.::

    uvicorn crud_api.app.main:app --reload

Services are created per application and stored on ``app.state``;
pass your own instances to ``create_app`` to start from a known state.
"""

import logging
import time
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.endpoints import info
from .api.router import router as api_router
from .core.config import Settings, settings as default_settings
from .core.logging_config import setup_logging
from .core.middleware import add_security_headers, limit_body_size, log_requests, register_exception_handlers
from .core.rate_limit import init_rate_limiting
from .services.post_service import PostService
from .services.user_service import UserService


logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    user_service: Optional[UserService] = None,
    post_service: Optional[PostService] = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use; defaults to the module‑level settings read
        from the environment.
    user_service, post_service : optional
        Pre‑built services.  Fresh, seeded services are created when
        omitted.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        description=settings.description,
    )

    app.state.settings = settings
    app.state.user_service = user_service or UserService()
    app.state.post_service = post_service or PostService()
    init_rate_limiting(app, settings)
    app.state.started_at = time.monotonic()

    origins = settings.allowed_origins()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    app.middleware("http")(limit_body_size)
    app.middleware("http")(add_security_headers)
    # Request logs would only add noise to test output.
    if not settings.is_test:
        app.middleware("http")(log_requests)

    register_exception_handlers(app)

    app.include_router(info.router, tags=["info"])
    app.include_router(api_router, prefix="/api")

    logger.info("Application configured for %s environment", settings.environment)
    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
