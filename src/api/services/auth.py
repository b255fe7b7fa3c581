"""Bearer token authentication service.

Tokens are issued by the identity service and signed with a shared HS256
secret. Verification maps the claims to the internal user-info dict; when
``auth_require_known_user`` is enabled the user must also exist in the
user directory.
"""

import logging
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Optional

import jwt
from starlette.responses import Response

from application.settings import Settings, app_settings
from domain.repositories import UserDirectory

if TYPE_CHECKING:
    from fastapi import FastAPI, Request
    from neuroglia.hosting.web import WebApplicationBuilder


class BearerAuthService:
    """Service for bearer JWT authentication."""

    _log = logging.getLogger("AuthService")

    def __init__(self, user_directory: UserDirectory, settings: Settings = app_settings):
        """Initialize auth service with the user directory from DI.

        Args:
            user_directory: Directory used to confirm the token's user exists
            settings: Settings providing the secret, algorithm and known-user switch
        """
        self.user_directory = user_directory
        self.settings = settings

    def decode_token(self, token: str) -> Optional[dict[str, Any]]:
        """Verify the signature and expiry of ``token`` and return its claims, or None."""
        if not token:
            return None
        try:
            return jwt.decode(
                token,
                self.settings.jwt_secret_key,
                algorithms=[self.settings.jwt_algorithm],
                options={"verify_aud": False},
            )
        except jwt.ExpiredSignatureError:
            self._log.info("Bearer token expired")
        except jwt.InvalidTokenError as e:
            self._log.info(f"Bearer token invalid: {e}")
        return None

    def _map_claims(self, payload: dict) -> dict:
        """Normalize JWT claims to internal user representation."""
        user_id = payload.get("userId") or payload.get("user_id") or payload.get("sub")
        return {
            "sub": payload.get("sub") or user_id,
            "user_id": str(user_id) if user_id else None,
            "username": payload.get("preferred_username") or payload.get("username"),
            "email": payload.get("email"),
            "name": payload.get("name"),
            "roles": list(payload.get("roles") or []),
        }

    async def authenticate_async(self, token: Optional[str]) -> Optional[dict]:
        """Authenticate a bearer token.

        Args:
            token: Raw JWT from the Authorization header

        Returns:
            User info dict or None if authentication fails
        """
        payload = self.decode_token(token or "")
        if payload is None:
            return None

        user = self._map_claims(payload)
        if not user["user_id"]:
            self._log.info("Bearer token carries no user id claim")
            return None

        if self.settings.auth_require_known_user:
            known = await self.user_directory.get_async(user["user_id"])
            if known is None:
                self._log.info(f"Bearer token user '{user['user_id']}' is not a known user")
                return None
            user["name"] = user["name"] or known.name
            user["email"] = user["email"] or known.email

        return user

    @staticmethod
    def configure(builder: "WebApplicationBuilder", user_directory: UserDirectory) -> None:
        """Configure authentication services in the application builder.

        Args:
            builder: WebApplicationBuilder instance for service registration
            user_directory: The directory registered for the application
        """
        log = logging.getLogger(__name__)
        auth_service = BearerAuthService(user_directory)
        log.info(f"🔐 Bearer authentication configured (algorithm={app_settings.jwt_algorithm}, require_known_user={app_settings.auth_require_known_user})")
        builder.services.add_singleton(BearerAuthService, singleton=auth_service)

    @staticmethod
    def configure_middleware(app: "FastAPI") -> None:
        """Configure authentication middleware for the FastAPI application.

        This middleware injects the BearerAuthService instance from the DI container
        into the request state, making it available to FastAPI dependencies.

        Args:
            app: FastAPI application instance
        """

        @app.middleware("http")
        async def inject_auth_service(request: "Request", call_next: Callable[["Request"], Awaitable[Response]]) -> Response:
            """Middleware to inject AuthService into FastAPI request state."""
            request.state.auth_service = app.state.services.get_required_service(BearerAuthService)
            response = await call_next(request)
            return response
