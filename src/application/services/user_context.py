"""Helpers for reading the authenticated user passed along with requests."""

from typing import Any, Optional


def acting_user_id(user_info: Optional[dict[str, Any]]) -> Optional[str]:
    """Return the id of the user issuing a command or query.

    Bearer tokens minted by the identity service carry ``userId``, standard
    OIDC tokens carry ``sub``; the auth service maps both to ``user_id``.
    """
    if not user_info:
        return None
    user_id = user_info.get("user_id") or user_info.get("sub")
    return str(user_id) if user_id else None
