"""API services package."""

from .auth import BearerAuthService
from .error_handlers import configure_error_handlers
from .openapi_config import configure_api_openapi, configure_mounted_apps_openapi_prefix

__all__ = [
    "BearerAuthService",
    "configure_error_handlers",
    "configure_api_openapi",
    "configure_mounted_apps_openapi_prefix",
]
