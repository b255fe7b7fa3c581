"""Main application entry point with SubApp mounting."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from neuroglia.hosting.web import SubAppConfig, WebApplicationBuilder
from neuroglia.mapping import Mapper
from neuroglia.mediation import Mediator
from neuroglia.observability import Observability
from neuroglia.serialization.json import JsonSerializer

from api.services import BearerAuthService, configure_api_openapi, configure_error_handlers, configure_mounted_apps_openapi_prefix
from application.services import configure_logging
from application.settings import app_settings
from integration.repositories import Persistence

configure_logging(log_level=app_settings.log_level)
log = logging.getLogger(__name__)


def configure_api_app(app: FastAPI) -> None:
    """Custom setup of the API sub-app: documentation and the JSON error boundary."""
    configure_api_openapi(app, app_settings)
    configure_error_handlers(app)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Mounts the task board REST API under /api.

    Returns:
        Configured FastAPI application
    """
    log.debug("🚀 Creating Taskboard application...")

    builder = WebApplicationBuilder(app_settings=app_settings)

    # Configure core services
    Mediator.configure(builder, ["application.commands", "application.queries"])
    Mapper.configure(builder, ["application.commands", "application.queries", "integration.models"])
    JsonSerializer.configure(builder, ["domain.entities", "integration.models"])
    if app_settings.observability_enabled:
        Observability.configure(builder)

    # Configure task store and user directory (MongoDB or in-memory)
    persistence = Persistence.configure(builder, app_settings)

    # Configure authentication (bearer JWT, verified against the user directory)
    BearerAuthService.configure(builder, persistence.user_directory)

    # Add SubApp for API with controllers
    builder.add_sub_app(
        SubAppConfig(
            path="/api",
            name="api",
            title=f"{app_settings.app_name} API",
            description="Task board REST API with bearer JWT authentication",
            version=app_settings.app_version,
            controllers=["api.controllers"],
            custom_setup=lambda app, service_provider: configure_api_app(app),
            docs_url="/docs",
            debug=app_settings.debug,
        )
    )

    # Build the application
    app = builder.build_app_with_lifespan(
        title=app_settings.app_name,
        description="Task board application",
        version=app_settings.app_version,
        debug=app_settings.debug,
    )

    # Configure OpenAPI path prefixes for all mounted sub-apps
    configure_mounted_apps_openapi_prefix(app)

    # Configure middlewares
    BearerAuthService.configure_middleware(app)

    if app_settings.enable_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=app_settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    log.info("✅ Application created successfully!")
    log.info(f"   - API Docs: http://{app_settings.app_host}:{app_settings.app_port}/api/docs")
    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:create_app",
        factory=True,
        host=app_settings.app_host,
        port=app_settings.app_port,
        reload=app_settings.debug,
    )
