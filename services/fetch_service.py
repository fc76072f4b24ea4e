"""
Fetch Service - one manual fetch-and-forward run.

Fetches a batch from the selected provider and hands it to the
forwarder. Fetch errors always propagate. What happens when forwarding
fails is a named policy:

    exit  - re-raise ForwardError (the entry point exits non-zero)
    log   - log the failure and return the fetched batch
"""
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, timedelta
from enum import Enum
from typing import List, Optional, Sequence, Union
from loguru import logger

from config.settings import Settings
from core.models import Match, NFLMatch
from data_providers.football_data import FootballDataProvider
from data_providers.nfl_data import NFLDataProvider
from services.forwarder import ForwardError, IngestionForwarder

DEFAULT_WINDOW_DAYS = 7


class ProviderName(str, Enum):
    """Providers selectable for a run."""
    FOOTBALL = "football"
    NFL = "nfl"


class ForwardFailurePolicy(str, Enum):
    """What a run does when the ingestion service rejects the batch."""
    EXIT = "exit"
    LOG = "log"


# Football runs stop on a forwarding failure; NFL runs only report it.
DEFAULT_FORWARD_POLICY = {
    ProviderName.FOOTBALL: ForwardFailurePolicy.EXIT,
    ProviderName.NFL: ForwardFailurePolicy.LOG,
}


@dataclass(frozen=True)
class FetchRequest:
    """Selectors for a run. Unset fields fall back to the provider's default fetch."""
    competition_id: Optional[str] = None
    team_id: Optional[str] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    on_date: Optional[datetime] = None
    year: Optional[int] = None
    week: Optional[int] = None


@dataclass
class FetchResult:
    """Outcome of a run. ``matches`` is the batch exactly as fetched."""
    provider: ProviderName
    matches: Sequence[Union[Match, NFLMatch]] = field(default_factory=list)
    forwarded: bool = False
    forward_error: Optional[str] = None


class FetchService:
    """Runs fetch-and-forward for one provider."""

    def __init__(
        self,
        forwarder: IngestionForwarder,
        football_provider: Optional[FootballDataProvider] = None,
        nfl_provider: Optional[NFLDataProvider] = None
    ):
        self.forwarder = forwarder
        self.football_provider = football_provider
        self.nfl_provider = nfl_provider

    @classmethod
    def from_settings(cls, settings: Settings, provider: ProviderName) -> "FetchService":
        """Wire a service for ``provider`` using credentials from ``settings``."""
        forwarder = IngestionForwarder(settings.ingestion_url, timeout=settings.request_timeout)

        if provider == ProviderName.FOOTBALL:
            return cls(
                forwarder,
                football_provider=FootballDataProvider(
                    api_key=settings.require_football_data_api_key(),
                    base_url=settings.football_data_base_url,
                    timeout=settings.request_timeout
                )
            )

        return cls(
            forwarder,
            nfl_provider=NFLDataProvider(
                api_key=settings.require_nfl_api_key(),
                api_host=settings.nfl_api_host,
                base_url=settings.nfl_base_url,
                timeout=settings.request_timeout
            )
        )

    async def close(self):
        """Close provider HTTP clients."""
        for provider in (self.football_provider, self.nfl_provider):
            if provider is not None:
                await provider.close()

    async def _fetch_football(self, request: FetchRequest) -> List[Match]:
        if self.football_provider is None:
            raise RuntimeError("Football provider is not configured")

        if request.competition_id or request.team_id:
            date_from = request.date_from or date.today()
            date_to = request.date_to or date_from + timedelta(days=DEFAULT_WINDOW_DAYS)
            if request.competition_id:
                return await self.football_provider.fetch_matches_by_competition(
                    request.competition_id, date_from, date_to
                )
            return await self.football_provider.fetch_matches_by_team(
                request.team_id, date_from, date_to
            )

        return await self.football_provider.fetch_matches()

    async def _fetch_nfl(self, request: FetchRequest) -> List[NFLMatch]:
        if self.nfl_provider is None:
            raise RuntimeError("NFL provider is not configured")

        if request.week is not None:
            year = request.year or (request.on_date or datetime.now(UTC)).year
            return await self.nfl_provider.fetch_games_for_week(year, request.week)

        return await self.nfl_provider.fetch_games_for_current_week(today=request.on_date)

    async def fetch(
        self,
        provider: ProviderName,
        request: Optional[FetchRequest] = None
    ) -> List[Union[Match, NFLMatch]]:
        """Fetch a batch from ``provider``. Provider errors propagate."""
        request = request or FetchRequest()
        if provider == ProviderName.FOOTBALL:
            return await self._fetch_football(request)
        return await self._fetch_nfl(request)

    async def run(
        self,
        provider: ProviderName,
        request: Optional[FetchRequest] = None,
        policy: Optional[ForwardFailurePolicy] = None
    ) -> FetchResult:
        """
        Fetch a batch and forward it.

        Args:
            provider: Which provider to fetch from.
            request: Optional selectors.
            policy: Forward failure policy; defaults per provider.

        Returns:
            FetchResult with the fetched batch.

        Raises:
            ProviderError: the fetch failed.
            ForwardError: forwarding failed under ForwardFailurePolicy.EXIT.
        """
        provider = ProviderName(provider)
        policy = ForwardFailurePolicy(policy) if policy else DEFAULT_FORWARD_POLICY[provider]

        matches = await self.fetch(provider, request)
        logger.info(f"Fetched {len(matches)} {provider.value} matches")

        try:
            await self.forwarder.forward(matches)
        except ForwardError as e:
            if policy == ForwardFailurePolicy.EXIT:
                logger.error(f"Failed to send {provider.value} data to ingestion service: {e}")
                raise
            logger.warning(f"Failed to send {provider.value} data to ingestion service: {e}")
            return FetchResult(provider=provider, matches=matches, forward_error=str(e))

        logger.info(f"{provider.value} data sent to ingestion service successfully")
        return FetchResult(provider=provider, matches=matches, forwarded=True)
