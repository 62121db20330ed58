"""Dependency Injection Container."""

from injector import Injector, Module, provider, singleton

from builder.persistence import PagePersistence
from builder.storage import FileStorage, KeyValueStorage, MemoryStorage
from builder.store import PageModelStore
from .config import Settings, get_settings


class BuilderModule(Module):
    """Builder dependencies."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    @singleton
    @provider
    def provide_settings(self) -> Settings:
        return self.settings

    @singleton
    @provider
    def provide_storage(self, settings: Settings) -> KeyValueStorage:
        """Provide the configured key-value backend."""
        if settings.storage_backend == "file":
            return FileStorage(settings.storage_dir)
        return MemoryStorage()

    @singleton
    @provider
    def provide_persistence(self, settings: Settings, storage: KeyValueStorage) -> PagePersistence:
        return PagePersistence(
            storage,
            max_blob_size=settings.max_blob_size,
            max_depth=settings.max_tree_depth,
        )

    @singleton
    @provider
    def provide_store(self, settings: Settings, persistence: PagePersistence) -> PageModelStore:
        """Provide the application's page model store."""
        return PageModelStore(
            persistence=persistence,
            default_theme=settings.default_theme,
            duplicate_offset=settings.duplicate_offset,
        )


def create_container(settings: Settings | None = None) -> Injector:
    """Create configured injector. Each injector owns one store."""
    return Injector([BuilderModule(settings)])
