"""Test fixtures package."""

from .factories import TaskFactory, TokenFactory, UserFactory
from .mixins import BaseTestCase

__all__ = [
    "TaskFactory",
    "TokenFactory",
    "UserFactory",
    "BaseTestCase",
]
