"""
Service Container - Dependency Injection Container

Simple DI container for managing service instances and their dependencies.
Uses lazy loading to only instantiate services when first accessed.
"""

from dataclasses import dataclass, field
from typing import Optional
import logging

from endurance_rpg.config import DEFAULT_GAME_CONFIG, GameConfig

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """
    Simple dependency injection container for services.

    Services are lazy-loaded on first access via properties.
    Infrastructure dependencies (store, config) are injected.
    """

    # Infrastructure dependencies (injected)
    store: object  # Profile store instance
    config: GameConfig = DEFAULT_GAME_CONFIG

    # Services (lazy-loaded via properties)
    _progression_service: Optional[object] = field(default=None, init=False, repr=False)

    @property
    def progression_service(self):
        """Get ProgressionService instance (lazy-loaded)"""
        if self._progression_service is None:
            from endurance_rpg.services.progression_service import ProgressionService
            self._progression_service = ProgressionService(self.store, self.config)
            logger.debug("ProgressionService instantiated")
        return self._progression_service


# Global container instance (initialized in main.py)
_container: Optional[ServiceContainer] = None


def get_container() -> ServiceContainer:
    """
    Get the global service container.

    Raises:
        RuntimeError: If container not initialized (call init_container first)
    """
    if _container is None:
        raise RuntimeError(
            "Service container not initialized. "
            "Call init_container() before using services."
        )
    return _container


def init_container(store: object, config: GameConfig = DEFAULT_GAME_CONFIG) -> ServiceContainer:
    """
    Initialize the global service container.

    Args:
        store: Profile store instance
        config: Game configuration

    Returns:
        ServiceContainer: The initialized container
    """
    global _container

    _container = ServiceContainer(store=store, config=config)

    logger.info("Service container initialized")
    return _container
