"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.

Dependencies: All config modules
System role: Central configuration aggregator for the package
"""

from functools import lru_cache

from couchrepo.configs.base import BaseSettings
from couchrepo.configs.repository import RepositorySettings
from couchrepo.configs.store import StoreSettings


class Settings(BaseSettings):
    """Unified settings aggregating all config modules."""

    # Aggregated settings
    store: StoreSettings = StoreSettings()
    repository: RepositorySettings = RepositorySettings()


@lru_cache
def get_settings() -> Settings:
    """
    Get settings singleton.

    Returns Settings instance, cached after the first call.
    Environment variables loaded once at startup.

    Returns:
        Settings: Settings instance

    Usage:
        from couchrepo.configs import get_settings
        settings = get_settings()
    """
    return Settings()
