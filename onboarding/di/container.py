# Standard library imports
from typing import Any, Hashable, Mapping, Optional

# Local application imports
from ..core.config import Settings, get_settings
from .base_container import BaseContainer
from .providers import (
    AuthProvider,
    DatabaseProvider,
    RepositoryProvider,
    StorageProvider,
)


class DIContainer(BaseContainer):
    """
    Main dependency injection container.
    Composes all providers in the correct order.

    Registration order is important:
    1. Settings and any explicit overrides
    2. Database connections (DatabaseProvider)
    3. Repositories and storage (RepositoryProvider, StorageProvider)
    4. Use cases (AuthProvider) - depend on repositories and storage

    Providers leave alone anything already registered, so passing
    ``overrides={UserRepository: fake}`` swaps in a fake without touching MongoDB.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        overrides: Optional[Mapping[Hashable, Any]] = None,
    ) -> None:
        super().__init__()
        self.settings = settings or get_settings()
        self.register_singleton(Settings, self.settings)
        for key, instance in (overrides or {}).items():
            self.register_singleton(key, instance)
        self.setup()

    def setup(self) -> None:
        """
        Setup dependency registrations by composing all providers.
        Order matters: database → repositories/storage → use cases
        """
        DatabaseProvider.register(self)
        RepositoryProvider.register(self)
        StorageProvider.register(self)
        AuthProvider.register(self)


# Global container instance (singleton pattern)
_container: DIContainer | None = None


def get_container() -> DIContainer:
    """
    Get the global DI container instance (singleton pattern)

    Returns:
        DIContainer instance with all dependencies registered
    """
    global _container
    if _container is None:
        _container = DIContainer()
    return _container


def set_container(container: Optional[DIContainer]) -> None:
    """Install (or with None, reset) the global container"""
    global _container
    _container = container
