# Data providers module
from .errors import (
    ProviderError, ProviderRequestError, ProviderStatusError,
    ProviderDecodeError, WeekNotFoundError
)
from .football_data import FootballDataProvider
from .nfl_data import NFLDataProvider, NFLWeek, NFLWhitelist

__all__ = [
    "ProviderError", "ProviderRequestError", "ProviderStatusError",
    "ProviderDecodeError", "WeekNotFoundError",
    "FootballDataProvider",
    "NFLDataProvider", "NFLWeek", "NFLWhitelist"
]
