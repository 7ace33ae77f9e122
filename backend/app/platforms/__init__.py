"""
NFL data providers.

Provides standings, schedules and completed games to the scenario engine.
"""

from .base import (
    ScheduleProvider,
    LeagueData,
    SeasonDataNotFoundError,
    PlatformError
)
from .espn import ESPNAdapter


def get_adapter(provider: str = "espn") -> ScheduleProvider:
    """
    Get the adapter for a data provider.

    Args:
        provider: Provider name ('espn')

    Returns:
        Provider adapter instance

    Raises:
        ValueError: If the provider is not supported
    """
    if provider.lower() == "espn":
        return ESPNAdapter()

    raise ValueError(f"Unsupported provider: {provider}. Supported: espn")


__all__ = [
    "ScheduleProvider",
    "LeagueData",
    "SeasonDataNotFoundError",
    "PlatformError",
    "ESPNAdapter",
    "get_adapter",
]
