"""
NFL provider using the NFL API Data service on RapidAPI.

Game details come from a deeply nested single-event payload and are
mapped field by field into NFLMatch. Week batches are fetched one event
at a time; a failing event is skipped so one bad event never sinks the
batch.
"""
from datetime import UTC, date, datetime
from typing import Any, ClassVar, Dict, List, Optional
import httpx
from loguru import logger
from pydantic import BaseModel, Field, ValidationError, field_validator

from core.models import (
    NFLCompetition, NFLCompetitor, NFLMatch, NFLModel, NFLSituation, NFLStatus,
    NFLStatusType, NFLTeam, NFLType, NFLVenue, NFLVenueAddress, NFLVenueImage
)
from data_providers.base import DEFAULT_TIMEOUT, BaseProviderClient
from data_providers.dates import NFL_GAME_DATE_FORMAT, ensure_utc, parse_rfc3339, parse_with_format
from data_providers.errors import ProviderDecodeError, ProviderError, WeekNotFoundError

DEFAULT_NFL_HOST = "nfl-api-data.p.rapidapi.com"

# Season types accepted by /nfl-weeks-events: 1=preseason, 2=regular, 3=postseason
SEASON_TYPE_REGULAR = 2


def _value(data: Dict[str, Any], key: str, default: Any) -> Any:
    """Upstream value for ``key``, or ``default`` when missing or null."""
    value = data.get(key)
    return default if value is None else value


# =============================================================================
# Whitelist (schedule) schema
# =============================================================================

class NFLWeek(NFLModel):
    """One schedule week: [start_date, end_date)."""
    value: int
    label: Optional[str] = None
    start_date: datetime
    end_date: datetime

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _parse_boundary(cls, value: Any) -> datetime:
        # Week boundaries are RFC3339 with fractional seconds.
        return parse_rfc3339(value)

    def contains(self, when: datetime) -> bool:
        return self.start_date <= when < self.end_date


class NFLWhitelistSection(BaseModel):
    """A whitelist section. Entry shapes differ between sections."""
    label: Optional[str] = None
    entries: List[Any] = Field(default_factory=list)


class NFLWhitelist(BaseModel):
    """The /nfl-whitelist payload."""
    sections: List[NFLWhitelistSection]

    # The second section lists the season's weeks.
    WEEKS_SECTION: ClassVar[int] = 1

    @classmethod
    def weeks_from_payload(cls, payload: Any) -> List[NFLWeek]:
        """
        Validate a whitelist payload and return its week entries.

        Every schema problem surfaces here as ProviderDecodeError.
        """
        try:
            whitelist = cls.model_validate(payload)
            if len(whitelist.sections) <= cls.WEEKS_SECTION:
                raise ProviderDecodeError("unexpected sections structure")
            entries = whitelist.sections[cls.WEEKS_SECTION].entries
            return [NFLWeek.model_validate(entry) for entry in entries]
        except ValidationError as e:
            raise ProviderDecodeError(f"unexpected whitelist payload: {e}") from e


# =============================================================================
# Provider
# =============================================================================

class NFLDataProvider(BaseProviderClient):
    """
    Fetches NFL schedule, game detail, team and score data.

    All requests carry the RapidAPI key and host headers.
    """

    provider_name = "nfl-api-data"

    def __init__(
        self,
        api_key: str,
        api_host: str = DEFAULT_NFL_HOST,
        base_url: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        super().__init__(
            base_url or f"https://{api_host}",
            headers={
                "x-rapidapi-key": api_key,
                "x-rapidapi-host": api_host
            },
            timeout=timeout,
            transport=transport
        )

    # -------------------------------------------------------------------------
    # Schedule
    # -------------------------------------------------------------------------

    async def fetch_week_for_date(self, when: date) -> int:
        """
        Find the schedule week containing ``when``.

        Args:
            when: Date or datetime. Naive values are treated as UTC.

        Returns:
            The week number.

        Raises:
            WeekNotFoundError: no week interval contains the date.
        """
        if not isinstance(when, datetime):
            when = datetime(when.year, when.month, when.day, tzinfo=UTC)
        when = ensure_utc(when)

        payload = await self._get_json("/nfl-whitelist")
        for week in NFLWhitelist.weeks_from_payload(payload):
            if week.contains(when):
                return week.value

        raise WeekNotFoundError(f"week not found for the given date: {when.isoformat()}")

    async def fetch_event_ids(self, year: int, week: int, season_type: int = SEASON_TYPE_REGULAR) -> List[str]:
        """List the event ids scheduled in a week."""
        data = await self._get_object(
            "/nfl-weeks-events",
            params={"year": year, "week": week, "type": season_type}
        )

        def parse(payload: Dict[str, Any]) -> List[str]:
            return [str(item["eventid"]) for item in payload.get("items") or []]

        return self._map(parse, data, "weeks-events")

    async def fetch_games_for_week(
        self,
        year: int,
        week: int,
        season_type: int = SEASON_TYPE_REGULAR
    ) -> List[NFLMatch]:
        """
        Fetch details for every event in a week, one event at a time.

        An event whose details cannot be fetched or mapped is logged and
        skipped. Only a failure of the event listing itself is raised.
        """
        event_ids = await self.fetch_event_ids(year, week, season_type)

        matches = []
        for event_id in event_ids:
            try:
                match = await self.fetch_game_details(event_id)
            except ProviderError as e:
                logger.warning(f"Error fetching game details for event {event_id}: {e}")
                continue
            matches.append(match)

        logger.info(
            f"Fetched {len(matches)}/{len(event_ids)} NFL games for {year} week {week}"
        )
        return matches

    async def fetch_games_for_current_week(
        self,
        today: Optional[datetime] = None,
        season_type: int = SEASON_TYPE_REGULAR
    ) -> List[NFLMatch]:
        """Resolve the week containing ``today`` (default: now) and fetch its games."""
        today = ensure_utc(today) if today is not None else datetime.now(UTC)
        week = await self.fetch_week_for_date(today)
        return await self.fetch_games_for_week(today.year, week, season_type)

    # -------------------------------------------------------------------------
    # Game details
    # -------------------------------------------------------------------------

    def _parse_team(self, team_data: Dict[str, Any]) -> NFLTeam:
        return NFLTeam(
            id=_value(team_data, "id", ""),
            display_name=_value(team_data, "displayName", ""),
            logos=team_data.get("logos")
        )

    def _parse_competitor(self, competitor_data: Dict[str, Any]) -> NFLCompetitor:
        return NFLCompetitor(
            id=_value(competitor_data, "id", ""),
            home_away=_value(competitor_data, "homeAway", ""),
            winner=_value(competitor_data, "winner", False),
            team=self._parse_team(competitor_data.get("team") or {})
        )

    def _parse_situation(self, situation_data: Dict[str, Any]) -> NFLSituation:
        return NFLSituation(
            down=_value(situation_data, "down", 0),
            yard_line=_value(situation_data, "yardLine", 0),
            distance=_value(situation_data, "distance", 0),
            is_red_zone=_value(situation_data, "isRedZone", False),
            home_timeouts=_value(situation_data, "homeTimeouts", 0),
            away_timeouts=_value(situation_data, "awayTimeouts", 0)
        )

    def _parse_competition(self, competition_data: Dict[str, Any]) -> NFLCompetition:
        type_data = competition_data.get("type") or {}
        return NFLCompetition(
            id=_value(competition_data, "id", ""),
            attendance=_value(competition_data, "attendance", 0),
            type=NFLType(
                id=_value(type_data, "id", ""),
                text=_value(type_data, "text", ""),
                abbreviation=_value(type_data, "abbreviation", ""),
                slug=_value(type_data, "slug", "")
            ),
            neutral_site=_value(competition_data, "neutralSite", False),
            competitors=tuple(
                self._parse_competitor(c) for c in competition_data.get("competitors") or []
            ),
            situation=self._parse_situation(competition_data.get("situation") or {}),
            has_defensive_stats=_value(competition_data, "hasDefensiveStats", False)
        )

    def _parse_venue_image(self, image_data: Dict[str, Any]) -> NFLVenueImage:
        return NFLVenueImage(
            href=_value(image_data, "href", ""),
            width=_value(image_data, "width", 0),
            height=_value(image_data, "height", 0),
            alt=_value(image_data, "alt", ""),
            rel=image_data.get("rel") or ()
        )

    def _parse_venue(self, venue_data: Dict[str, Any]) -> NFLVenue:
        address = venue_data.get("address") or {}
        return NFLVenue(
            id=_value(venue_data, "id", ""),
            full_name=_value(venue_data, "fullName", ""),
            address=NFLVenueAddress(
                city=_value(address, "city", ""),
                state=_value(address, "state", ""),
                zip_code=_value(address, "zipCode", "")
            ),
            grass=_value(venue_data, "grass", False),
            indoor=_value(venue_data, "indoor", False),
            images=tuple(self._parse_venue_image(i) for i in venue_data.get("images") or [])
        )

    def _parse_status(self, status_data: Dict[str, Any]) -> NFLStatus:
        type_data = status_data.get("type") or {}
        return NFLStatus(
            clock=_value(status_data, "clock", 0),
            display_clock=_value(status_data, "displayClock", ""),
            period=_value(status_data, "period", 0),
            type=NFLStatusType(
                id=_value(type_data, "id", ""),
                name=_value(type_data, "name", ""),
                state=_value(type_data, "state", ""),
                completed=_value(type_data, "completed", False),
                description=_value(type_data, "description", ""),
                detail=_value(type_data, "detail", ""),
                short_detail=_value(type_data, "shortDetail", "")
            )
        )

    def _parse_game_details(
        self,
        event_data: Dict[str, Any],
        date_format: str = NFL_GAME_DATE_FORMAT
    ) -> NFLMatch:
        """Parse a single-event payload into NFLMatch."""
        # The game date is a hard field: without it the event is rejected.
        raw_date = event_data.get("date")
        try:
            game_date = parse_with_format(raw_date, date_format)
        except ValueError as e:
            raise ProviderDecodeError(f"failed to parse date {raw_date!r}: {e}") from e

        return NFLMatch(
            id=_value(event_data, "id", ""),
            uid=_value(event_data, "uid", ""),
            name=_value(event_data, "name", ""),
            short_name=_value(event_data, "shortName", ""),
            date=game_date,
            competitions=tuple(
                self._parse_competition(c) for c in event_data.get("competitions") or []
            ),
            venue=self._parse_venue(event_data.get("venue") or {}),
            status=self._parse_status(event_data.get("status") or {})
        )

    async def fetch_game_details(
        self,
        event_id: str,
        date_format: str = NFL_GAME_DATE_FORMAT
    ) -> NFLMatch:
        """
        Fetch one event and map it into NFLMatch.

        Args:
            event_id: Provider event id.
            date_format: strptime layout of the event's ``date`` field.

        Raises:
            ProviderDecodeError: the payload does not fit the schema or the
                date does not match ``date_format``.
        """
        data = await self._get_object("/nfl-single-events", params={"id": event_id})
        return self._map(
            lambda d: self._parse_game_details(d, date_format),
            data,
            f"event {event_id}"
        )

    # -------------------------------------------------------------------------
    # Teams and scores
    # -------------------------------------------------------------------------

    async def fetch_nfl_teams(self) -> List[NFLTeam]:
        """Fetch all NFL teams."""
        data = await self._get_object("/nfl-teams")
        teams = self._map(
            lambda d: [NFLTeam.model_validate(t) for t in d.get("teams") or []],
            data,
            "teams"
        )
        logger.info(f"Fetched {len(teams)} NFL teams")
        return teams

    async def fetch_nfl_team_detail(self, team_id: str) -> NFLTeam:
        """Fetch a single NFL team."""
        data = await self._get_object("/nfl-team", params={"team_id": team_id})
        return self._map(NFLTeam.model_validate, data, f"team {team_id}")

    async def _fetch_matches(self, path: str) -> List[NFLMatch]:
        data = await self._get_object(path)
        matches = self._map(
            lambda d: [NFLMatch.model_validate(m) for m in d.get("matches") or []],
            data,
            "matches"
        )
        logger.info(f"Fetched {len(matches)} NFL matches from {path}")
        return matches

    async def fetch_nfl_live_score(self) -> List[NFLMatch]:
        """Fetch live NFL scores."""
        return await self._fetch_matches("/nfl-livescores")

    async def fetch_nfl_matches(self) -> List[NFLMatch]:
        """Fetch NFL matches."""
        return await self._fetch_matches("/nfl-matches")
