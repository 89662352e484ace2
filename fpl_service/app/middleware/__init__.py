"""Middleware configuration for the FastAPI application.

Order (outermost first):
1. RequestIDMiddleware: request id in state, logs and response header, also
   on CORS preflight responses. Unhandled-exception 500s are rendered outside
   it, so the problem details handler sets the header on those itself
2. CORSMiddleware: browser origins from APP_CORS_ORIGINS / ALLOWED_ORIGINS;
   requests without an Origin header (curl, health checks, server-side
   clients) pass through untouched
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi.middleware.cors import CORSMiddleware

from fpl_service.app.middleware.request_id import RequestIDMiddleware

if TYPE_CHECKING:
    from fastapi import FastAPI

    from fpl_service.core.settings import AppSettings

logger = logging.getLogger(__name__)

__all__ = ["RequestIDMiddleware", "configure_middleware"]


def configure_middleware(app: FastAPI, app_settings: AppSettings) -> None:
    """Install the middleware stack.

    Starlette runs the most recently added middleware first, so the
    outermost one is added last.
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=app_settings.cors_allow_credentials,
        allow_methods=app_settings.cors_allow_methods,
        allow_headers=app_settings.cors_allow_headers,
        expose_headers=["X-Request-ID"],
        max_age=app_settings.cors_max_age,
    )
    app.add_middleware(RequestIDMiddleware)

    logger.debug(
        "Middleware configured",
        extra={"cors_origins": app_settings.cors_origins},
    )
