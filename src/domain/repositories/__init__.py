"""Domain repositories package.

Contains abstract store interfaces. Implementations (MongoDB via Motor, and
in-memory for tests and local runs) are in src/integration/repositories/.
"""

from .task_store import TaskStore
from .user_directory import UserDirectory

__all__: list[str] = [
    "TaskStore",
    "UserDirectory",
]
