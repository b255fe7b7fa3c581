"""Registers the task store and user directory in the application builder."""

import logging
from typing import TYPE_CHECKING

from motor.motor_asyncio import AsyncIOMotorClient
from neuroglia.hosting.abstractions import HostedService

from application.settings import Settings
from domain.repositories import TaskStore, UserDirectory

from .in_memory_task_store import InMemoryTaskStore
from .in_memory_user_directory import InMemoryUserDirectory
from .motor_task_store import MotorTaskStore
from .motor_user_directory import MotorUserDirectory

if TYPE_CHECKING:
    from neuroglia.hosting.web import WebApplicationBuilder

log = logging.getLogger(__name__)


class TaskIndexInitializer(HostedService):
    """Hosted service creating the task collection indexes on startup."""

    def __init__(self, task_store: MotorTaskStore):
        self.task_store = task_store

    async def start_async(self) -> None:
        try:
            await self.task_store.ensure_indexes_async()
            log.info("✅ Task indexes ensured")
        except Exception as e:
            # Indexes only speed up queries; serving continues without them
            log.error(f"❌ Failed to ensure task indexes: {e}")

    async def stop_async(self) -> None:
        pass


class Persistence:
    """Builds and registers the stores selected by settings."""

    def __init__(self, task_store: TaskStore, user_directory: UserDirectory):
        self.task_store = task_store
        self.user_directory = user_directory

    @staticmethod
    def create(settings: Settings) -> "Persistence":
        if settings.use_in_memory_store:
            log.warning("💾 Using in-memory task store and user directory (development only)")
            return Persistence(InMemoryTaskStore(), InMemoryUserDirectory())

        client: AsyncIOMotorClient = AsyncIOMotorClient(settings.connection_strings["mongo"], tz_aware=True)
        database = client[settings.database_name]
        log.info(f"🍃 Using MongoDB database '{settings.database_name}' (tasks='{settings.tasks_collection_name}', users='{settings.users_collection_name}')")
        return Persistence(
            MotorTaskStore(database[settings.tasks_collection_name]),
            MotorUserDirectory(database[settings.users_collection_name]),
        )

    @staticmethod
    def configure(builder: "WebApplicationBuilder", settings: Settings) -> "Persistence":
        """Register TaskStore and UserDirectory singletons.

        With MongoDB storage, a TaskIndexInitializer hosted service is also
        registered so indexes are created at startup.

        Args:
            builder: WebApplicationBuilder instance for service registration
            settings: Settings selecting MongoDB or in-memory storage

        Returns:
            The registered stores, for services configured later in startup
        """
        persistence = Persistence.create(settings)
        builder.services.add_singleton(TaskStore, singleton=persistence.task_store)
        builder.services.add_singleton(UserDirectory, singleton=persistence.user_directory)
        if isinstance(persistence.task_store, MotorTaskStore):
            builder.services.add_singleton(HostedService, singleton=TaskIndexInitializer(persistence.task_store))
        return persistence
