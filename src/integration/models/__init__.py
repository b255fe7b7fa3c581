"""Integration layer DTOs package.

Contains read model DTOs for MongoDB projections.
"""

from .user_dto import UserDto

__all__ = [
    "UserDto",
]
