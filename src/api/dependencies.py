"""FastAPI dependencies for authentication.

Note: These dependencies bridge FastAPI's dependency injection with Neuroglia's DI container.
Since FastAPI dependencies can't directly access the service provider, we retrieve the
BearerAuthService from the request state, which is injected by middleware.

Enhancements:
- Explicit 401 feedback for expired bearer tokens (helps clients refresh/re-authorize).
- Adds RFC6750-compliant `WWW-Authenticate` header with error details.
"""

import time
from typing import Optional

import jwt
from fastapi import HTTPException, Request, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from api.services import BearerAuthService

# Optional bearer token (won't raise error if missing, so we control the 401 body)
security_optional = HTTPBearer(auto_error=False, scheme_name="bearer")


def get_auth_service(request: Request) -> BearerAuthService:
    """Get BearerAuthService from request state (injected by middleware).

    Raises:
        RuntimeError: If BearerAuthService not found in request state
    """
    auth_service = getattr(request.state, "auth_service", None)
    if auth_service is None:
        raise RuntimeError("AuthService not found in request state. " "Ensure DI middleware is properly configured.")
    return auth_service


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security_optional),
) -> dict:
    """Get current user from the JWT Bearer token.

    Args:
        request: FastAPI request object
        credentials: JWT Bearer token from Authorization header

    Returns:
        User information dictionary

    Raises:
        HTTPException: 401 if the token is missing, malformed, expired or unknown
    """
    token = credentials.credentials if credentials else None
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required. Provide a Bearer token.",
            headers={"WWW-Authenticate": 'Bearer realm="taskboard"'},
        )

    # Pre-check bearer token expiry to provide clearer error feedback
    try:
        unverified = jwt.decode(token, options={"verify_signature": False})
    except (jwt.PyJWTError, ValueError, TypeError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid bearer token format.",
            headers={"WWW-Authenticate": 'Bearer error="invalid_token", error_description="Malformed token"'},
        )
    exp = unverified.get("exp")
    if isinstance(exp, int) and exp < int(time.time()):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Bearer token expired. Re-authenticate to obtain a new access token.",
            headers={"WWW-Authenticate": 'Bearer error="invalid_token", error_description="The access token expired"'},
        )

    user = await get_auth_service(request).authenticate_async(token)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication failed",
            headers={"WWW-Authenticate": 'Bearer error="invalid_token", error_description="Invalid token or unknown user"'},
        )

    return user
