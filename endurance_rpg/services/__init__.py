"""
Service Layer Package

Business logic services sitting between callers (webhook handlers, sync
jobs, the CLI) and storage.

Core Services:
- ProgressionService: XP awards, game profiles, activity stats
"""

from endurance_rpg.services.container import ServiceContainer, get_container, init_container
from endurance_rpg.services.progression_service import ProgressionService

__all__ = [
    "ServiceContainer",
    "get_container",
    "init_container",
    "ProgressionService",
]
