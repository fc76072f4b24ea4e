"""
Internal match models shared by the providers, the forwarder and the
ingestion service.

Football-Data.org matches serialize with snake_case keys; NFL models
serialize with the camelCase keys of the upstream NFL API. All models are
frozen: a batch is built once per fetch and never modified afterwards.
"""
from datetime import datetime
from typing import Annotated, Any, Optional, Tuple, Union
from pydantic import BaseModel, Discriminator, Field, Tag, field_validator
from pydantic.alias_generators import to_camel


# =============================================================================
# Football-Data.org
# =============================================================================

class Team(BaseModel):
    """Football team reference."""
    model_config = {"frozen": True}

    id: str = ""
    name: str = ""


class ScoreDetail(BaseModel):
    """Home/away goal pair. Unplayed periods stay None."""
    model_config = {"frozen": True}

    home: Optional[int] = None
    away: Optional[int] = None


class Score(BaseModel):
    """Match score as reported by the provider."""
    model_config = {"frozen": True}

    winner: Optional[str] = None
    duration: str = ""
    full_time: ScoreDetail = Field(default_factory=ScoreDetail)
    half_time: ScoreDetail = Field(default_factory=ScoreDetail)


class Match(BaseModel):
    """Normalized football match."""
    model_config = {"frozen": True}

    id: str
    sport: str = "Soccer"
    league: str = ""
    season: int = 0
    home_team: Team = Field(default_factory=Team)
    away_team: Team = Field(default_factory=Team)
    start_time: Optional[datetime] = None
    status: str = ""
    matchday: Optional[int] = None
    stage: str = ""
    group: Optional[str] = None
    score: Score = Field(default_factory=Score)


class Competition(BaseModel):
    """Football competition summary."""
    model_config = {"frozen": True}

    id: str
    name: str = ""
    code: Optional[str] = None
    type: str = ""
    area: str = ""


# =============================================================================
# NFL
# =============================================================================

class NFLModel(BaseModel):
    """Base for NFL models: frozen, camelCase on the wire."""
    model_config = {
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


class NFLTeam(NFLModel):
    """NFL team with its basic details."""
    id: str = ""
    display_name: str = ""
    logos: str = ""

    @field_validator("logos", mode="before")
    @classmethod
    def _first_logo_href(cls, value: Any) -> Any:
        # The API sends either a plain URL or a list of logo objects.
        if value is None:
            return ""
        if isinstance(value, list):
            if not value:
                return ""
            first = value[0]
            if isinstance(first, dict):
                return first.get("href") or ""
            return first
        return value


class NFLType(NFLModel):
    """Competition type (e.g. standard)."""
    id: str = ""
    text: str = ""
    abbreviation: str = ""
    slug: str = ""


class NFLCompetitor(NFLModel):
    """One side of a competition."""
    id: str = ""
    home_away: str = ""
    winner: bool = False
    team: NFLTeam = Field(default_factory=NFLTeam)


class NFLSituation(NFLModel):
    """Down and distance snapshot."""
    down: int = 0
    yard_line: int = 0
    distance: int = 0
    is_red_zone: bool = False
    home_timeouts: int = 0
    away_timeouts: int = 0


class NFLCompetition(NFLModel):
    """Competition details including competitors and situation."""
    id: str = ""
    attendance: int = 0
    type: NFLType = Field(default_factory=NFLType)
    neutral_site: bool = False
    competitors: Tuple[NFLCompetitor, ...] = ()
    situation: NFLSituation = Field(default_factory=NFLSituation)
    has_defensive_stats: bool = False

    @property
    def home(self) -> Optional[NFLCompetitor]:
        return next((c for c in self.competitors if c.home_away == "home"), None)

    @property
    def away(self) -> Optional[NFLCompetitor]:
        return next((c for c in self.competitors if c.home_away == "away"), None)


class NFLVenueAddress(NFLModel):
    city: str = ""
    state: str = ""
    zip_code: str = ""


class NFLVenueImage(NFLModel):
    href: str = ""
    width: int = 0
    height: int = 0
    alt: str = ""
    rel: Tuple[str, ...] = ()


class NFLVenue(NFLModel):
    """Venue where the match takes place."""
    id: str = ""
    full_name: str = ""
    address: NFLVenueAddress = Field(default_factory=NFLVenueAddress)
    grass: bool = False
    indoor: bool = False
    images: Tuple[NFLVenueImage, ...] = ()


class NFLStatusType(NFLModel):
    """Completion state of a match (e.g. final, post)."""
    id: str = ""
    name: str = ""
    state: str = ""
    completed: bool = False
    description: str = ""
    detail: str = ""
    short_detail: str = ""


class NFLStatus(NFLModel):
    """Clock and period of a match."""
    clock: int = 0
    display_clock: str = ""
    period: int = 0
    type: NFLStatusType = Field(default_factory=NFLStatusType)


class NFLMatch(NFLModel):
    """Normalized NFL game."""
    id: str = ""
    uid: str = ""
    name: str = ""
    short_name: str = ""
    date: Optional[datetime] = None
    competitions: Tuple[NFLCompetition, ...] = ()
    venue: NFLVenue = Field(default_factory=NFLVenue)
    status: NFLStatus = Field(default_factory=NFLStatus)


# =============================================================================
# Ingestion
# =============================================================================

def _match_kind(value: Any) -> str:
    if isinstance(value, dict):
        return "football" if "sport" in value else "nfl"
    return "football" if isinstance(value, Match) else "nfl"


# A single element of a forwarded batch.
IngestedMatch = Annotated[
    Union[
        Annotated[Match, Tag("football")],
        Annotated[NFLMatch, Tag("nfl")],
    ],
    Discriminator(_match_kind),
]


def dump_batch(matches) -> list:
    """Serialize a batch into its JSON wire shape."""
    return [m.model_dump(mode="json", by_alias=True) for m in matches]
