"""Integration layer repositories package.

Contains the MongoDB (Motor) and in-memory implementations of the
abstract stores defined in domain/repositories/.
"""

from .in_memory_task_store import InMemoryTaskStore
from .in_memory_user_directory import InMemoryUserDirectory
from .mongo_filter_translator import MongoFilterTranslator
from .motor_task_store import MotorTaskStore
from .motor_user_directory import MotorUserDirectory
from .persistence import Persistence, TaskIndexInitializer

__all__ = [
    "InMemoryTaskStore",
    "InMemoryUserDirectory",
    "MongoFilterTranslator",
    "MotorTaskStore",
    "MotorUserDirectory",
    "Persistence",
    "TaskIndexInitializer",
]
