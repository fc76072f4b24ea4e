"""
Football match provider using the Football-Data.org API.

API Documentation: https://www.football-data.org/documentation/quickstart
Free tier: 10 requests/minute. No pagination handling, no retry.
"""
from datetime import date, datetime
from typing import Any, Dict, List, Optional
import httpx
from loguru import logger

from core.models import Competition, Match, Score, ScoreDetail, Team
from data_providers.base import DEFAULT_TIMEOUT, BaseProviderClient
from data_providers.dates import format_day, parse_rfc3339

MATCH_ID_PREFIX = "football-data-"


def _str_id(value: Any) -> str:
    return "" if value is None else str(value)


class FootballDataProvider(BaseProviderClient):
    """
    Fetches football matches and competitions from Football-Data.org
    and normalizes them into Match / Competition models.
    """

    provider_name = "football-data"

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.football-data.org/v4",
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        super().__init__(
            base_url,
            headers={"X-Auth-Token": api_key},
            timeout=timeout,
            transport=transport
        )

    def _parse_start_time(self, match_id: Any, utc_date: Any) -> Optional[datetime]:
        """Kickoff is a soft field: an unparseable value becomes None."""
        try:
            return parse_rfc3339(utc_date)
        except ValueError as e:
            logger.warning(f"Match {match_id}: could not parse utcDate {utc_date!r}: {e}")
            return None

    def _parse_score(self, score_data: Dict[str, Any]) -> Score:
        full_time = score_data.get("fullTime") or {}
        half_time = score_data.get("halfTime") or {}
        return Score(
            winner=score_data.get("winner"),
            duration=score_data.get("duration") or "",
            full_time=ScoreDetail(home=full_time.get("home"), away=full_time.get("away")),
            half_time=ScoreDetail(home=half_time.get("home"), away=half_time.get("away"))
        )

    def _parse_match(self, match_data: Dict[str, Any]) -> Match:
        """Parse API match data into Match."""
        provider_id = match_data["id"]
        competition = match_data.get("competition") or {}
        season = match_data.get("season") or {}
        home = match_data.get("homeTeam") or {}
        away = match_data.get("awayTeam") or {}

        return Match(
            id=f"{MATCH_ID_PREFIX}{provider_id}",
            sport="Soccer",
            league=competition.get("name") or "",
            season=season.get("id") or 0,
            home_team=Team(id=_str_id(home.get("id")), name=home.get("name") or ""),
            away_team=Team(id=_str_id(away.get("id")), name=away.get("name") or ""),
            start_time=self._parse_start_time(provider_id, match_data.get("utcDate")),
            status=match_data.get("status") or "",
            matchday=match_data.get("matchday"),
            stage=match_data.get("stage") or "",
            group=match_data.get("group"),
            score=self._parse_score(match_data.get("score") or {})
        )

    def _parse_matches(self, data: Dict[str, Any]) -> List[Match]:
        return [self._parse_match(m) for m in data.get("matches") or []]

    def _parse_competition(self, competition_data: Dict[str, Any]) -> Competition:
        area = competition_data.get("area") or {}
        return Competition(
            id=_str_id(competition_data["id"]),
            name=competition_data.get("name") or "",
            code=competition_data.get("code"),
            type=competition_data.get("type") or "",
            area=area.get("name") or ""
        )

    async def _fetch_matches(self, path: str, params: Optional[Dict[str, str]] = None) -> List[Match]:
        data = await self._get_object(path, params=params)
        matches = self._map(self._parse_matches, data, "matches")
        logger.info(f"Fetched {len(matches)} matches from {path}")
        return matches

    async def fetch_matches(self) -> List[Match]:
        """Fetch today's matches across all competitions available to the key."""
        return await self._fetch_matches("/matches")

    async def fetch_matches_by_competition(
        self,
        competition_id: str,
        date_from: date,
        date_to: date
    ) -> List[Match]:
        """
        Fetch matches of one competition within a date range.

        Args:
            competition_id: Competition id or code (e.g. "PL" or "2021").
            date_from: First day, inclusive.
            date_to: Last day, inclusive.
        """
        return await self._fetch_matches(
            f"/competitions/{competition_id}/matches",
            params={"dateFrom": format_day(date_from), "dateTo": format_day(date_to)}
        )

    async def fetch_matches_by_team(
        self,
        team_id: str,
        date_from: date,
        date_to: date
    ) -> List[Match]:
        """Fetch matches of one team within a date range."""
        return await self._fetch_matches(
            f"/teams/{team_id}/matches",
            params={"dateFrom": format_day(date_from), "dateTo": format_day(date_to)}
        )

    async def fetch_competitions(self) -> List[Competition]:
        """Fetch the competitions available to the key."""
        data = await self._get_object("/competitions")
        competitions = self._map(
            lambda d: [self._parse_competition(c) for c in d.get("competitions") or []],
            data,
            "competitions"
        )
        logger.info(f"Fetched {len(competitions)} competitions")
        return competitions
