"""OpenAPI/Swagger configuration for the task board API documentation."""

import logging
from pathlib import Path
from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from starlette.routing import Mount

from application.settings import Settings

log = logging.getLogger(__name__)

DESCRIPTION_FILE = Path(__file__).parent.parent / "description.md"


def configure_mounted_apps_openapi_prefix(app: FastAPI) -> None:
    """Record on each mounted sub-app the path it is served under.

    The prefix becomes the OpenAPI ``servers`` URL so Swagger UI calls
    ``/api/tasks`` rather than ``/tasks``.
    """
    for route in app.routes:
        if not isinstance(route, Mount) or route.app is None:
            continue
        prefix = "/" + route.path.strip("/") if route.path.strip("/") else ""
        route.app.state.openapi_path_prefix = prefix  # type: ignore[attr-defined]
        log.debug(f"Sub-app mounted at '{prefix or '/'}'")


def configure_api_openapi(app: FastAPI, settings: Settings) -> None:
    """Load the markdown description and install the bearer-aware schema generator."""
    if DESCRIPTION_FILE.exists():
        app.description = DESCRIPTION_FILE.read_text(encoding="utf-8")
    else:
        log.warning(f"API description file not found: {DESCRIPTION_FILE}")

    OpenAPIConfigService.configure_security_schemes(app, settings)
    OpenAPIConfigService.configure_swagger_ui(app)


class OpenAPIConfigService:
    """Service to configure OpenAPI schema with the bearer security scheme for Swagger UI."""

    @staticmethod
    def build_schema(app: FastAPI, settings: Settings) -> dict[str, Any]:
        schema = get_openapi(title=app.title, version=app.version, description=app.description, routes=app.routes)

        prefix = getattr(app.state, "openapi_path_prefix", "")
        if prefix:
            schema["servers"] = [{"url": prefix}]

        components = schema.setdefault("components", {})
        components.setdefault("securitySchemes", {})["bearer"] = {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": f"JWT ({settings.jwt_algorithm})",
            "description": "Access token issued by the identity service",
        }
        return schema

    @staticmethod
    def configure_security_schemes(app: FastAPI, settings: Settings) -> None:
        """Describe the bearer JWT scheme so Swagger UI can send an Authorization header.

        Args:
            app: FastAPI application instance
            settings: Application settings with the JWT algorithm
        """

        def custom_openapi() -> dict[str, Any]:
            if not app.openapi_schema:
                app.openapi_schema = OpenAPIConfigService.build_schema(app, settings)
            return app.openapi_schema

        app.openapi = custom_openapi  # type: ignore

    @staticmethod
    def configure_swagger_ui(app: FastAPI) -> None:
        """Persist the bearer token across doc reloads."""
        app.swagger_ui_parameters = {
            **(app.swagger_ui_parameters or {}),
            "persistAuthorization": True,
            "docExpansion": "none",
            "operationsSorter": "alpha",
        }
