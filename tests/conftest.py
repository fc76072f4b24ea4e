"""
Pytest configuration and fixtures.
"""
import copy
import pytest
from datetime import UTC, datetime

from core.models import (
    Match, Team, Score, ScoreDetail,
    NFLMatch, NFLCompetition, NFLCompetitor, NFLTeam, NFLType, NFLSituation,
    NFLVenue, NFLVenueAddress, NFLVenueImage, NFLStatus, NFLStatusType
)


FOOTBALL_MATCHES_PAYLOAD = {
    "filters": {},
    "resultSet": {"count": 2},
    "matches": [
        {
            "id": 497410,
            "utcDate": "2024-08-16T19:00:00Z",
            "status": "FINISHED",
            "matchday": 1,
            "stage": "REGULAR_SEASON",
            "group": None,
            "competition": {"id": 2021, "name": "Premier League", "code": "PL"},
            "season": {"id": 2287},
            "homeTeam": {"id": 66, "name": "Manchester United FC", "tla": "MUN"},
            "awayTeam": {"id": 63, "name": "Fulham FC", "tla": "FUL"},
            "score": {
                "winner": "HOME_TEAM",
                "duration": "REGULAR",
                "fullTime": {"home": 1, "away": 0},
                "halfTime": {"home": 0, "away": 0}
            }
        },
        {
            "id": 497411,
            "utcDate": "2024-08-17T11:30:00Z",
            "status": "TIMED",
            "matchday": 1,
            "stage": "REGULAR_SEASON",
            "group": None,
            "competition": {"id": 2021, "name": "Premier League", "code": "PL"},
            "season": {"id": 2287},
            "homeTeam": {"id": 349, "name": "Ipswich Town FC"},
            "awayTeam": {"id": 64, "name": "Liverpool FC"},
            "score": {
                "winner": None,
                "duration": "REGULAR",
                "fullTime": {"home": None, "away": None},
                "halfTime": {"home": None, "away": None}
            }
        }
    ]
}


NFL_EVENT_PAYLOAD = {
    "id": "401671789",
    "uid": "s:20~l:28~e:401671789",
    "name": "Baltimore Ravens at Kansas City Chiefs",
    "shortName": "BAL @ KC",
    "date": "2024-09-06T00:20Z",
    "competitions": [
        {
            "id": "401671789",
            "attendance": 73523,
            "type": {"id": "1", "text": "Standard", "abbreviation": "STD", "slug": "standard"},
            "neutralSite": False,
            "competitors": [
                {
                    "id": "12",
                    "homeAway": "home",
                    "winner": True,
                    "team": {
                        "id": "12",
                        "displayName": "Kansas City Chiefs",
                        "logos": [{"href": "https://a.espncdn.com/i/teamlogos/nfl/500/kc.png"}]
                    }
                },
                {
                    "id": "33",
                    "homeAway": "away",
                    "winner": False,
                    "team": {
                        "id": "33",
                        "displayName": "Baltimore Ravens",
                        "logos": "https://a.espncdn.com/i/teamlogos/nfl/500/bal.png"
                    }
                }
            ],
            "situation": {
                "down": 1,
                "yardLine": 35,
                "distance": 10,
                "isRedZone": False,
                "homeTimeouts": 3,
                "awayTimeouts": 2
            },
            "hasDefensiveStats": True
        }
    ],
    "venue": {
        "id": "3622",
        "fullName": "GEHA Field at Arrowhead Stadium",
        "address": {"city": "Kansas City", "state": "MO", "zipCode": "64129"},
        "grass": True,
        "indoor": False,
        "images": [
            {
                "href": "https://a.espncdn.com/i/venues/nfl/day/3622.jpg",
                "width": 2000,
                "height": 1125,
                "alt": "",
                "rel": ["full", "day"]
            }
        ]
    },
    "status": {
        "clock": 0,
        "displayClock": "0:00",
        "period": 4,
        "type": {
            "id": "3",
            "name": "STATUS_FINAL",
            "state": "post",
            "completed": True,
            "description": "Final",
            "detail": "Final",
            "shortDetail": "Final"
        }
    }
}


WHITELIST_PAYLOAD = {
    "sections": [
        {"label": "Season", "entries": [{"label": "2024", "value": "2024"}]},
        {
            "label": "Week",
            "entries": [
                {
                    "label": "Week 1",
                    "value": 1,
                    "startDate": "2024-09-01T07:00:00.000Z",
                    "endDate": "2024-09-08T06:59:00.000Z"
                },
                {
                    "label": "Week 2",
                    "value": 2,
                    "startDate": "2024-09-08T07:00:00.000Z",
                    "endDate": "2024-09-15T06:59:00.000Z"
                }
            ]
        }
    ]
}


@pytest.fixture
def football_matches_payload():
    """Football-Data.org /matches response."""
    return copy.deepcopy(FOOTBALL_MATCHES_PAYLOAD)


@pytest.fixture
def nfl_event_payload():
    """NFL /nfl-single-events response."""
    return copy.deepcopy(NFL_EVENT_PAYLOAD)


@pytest.fixture
def whitelist_payload():
    """NFL /nfl-whitelist response with two weeks."""
    return copy.deepcopy(WHITELIST_PAYLOAD)


@pytest.fixture
def sample_match():
    """Create a sample football match."""
    return Match(
        id="football-data-497410",
        sport="Soccer",
        league="Premier League",
        season=2287,
        home_team=Team(id="66", name="Manchester United FC"),
        away_team=Team(id="63", name="Fulham FC"),
        start_time=datetime(2024, 8, 16, 19, 0, tzinfo=UTC),
        status="FINISHED",
        matchday=1,
        stage="REGULAR_SEASON",
        group=None,
        score=Score(
            winner="HOME_TEAM",
            duration="REGULAR",
            full_time=ScoreDetail(home=1, away=0),
            half_time=ScoreDetail(home=0, away=0)
        )
    )


@pytest.fixture
def sample_nfl_match():
    """Create a sample NFL match."""
    return NFLMatch(
        id="401671789",
        uid="s:20~l:28~e:401671789",
        name="Baltimore Ravens at Kansas City Chiefs",
        short_name="BAL @ KC",
        date=datetime(2024, 9, 6, 0, 20, tzinfo=UTC),
        competitions=(
            NFLCompetition(
                id="401671789",
                attendance=73523,
                type=NFLType(id="1", text="Standard", abbreviation="STD", slug="standard"),
                neutral_site=False,
                competitors=(
                    NFLCompetitor(
                        id="12",
                        home_away="home",
                        winner=True,
                        team=NFLTeam(id="12", display_name="Kansas City Chiefs", logos="kc.png")
                    ),
                    NFLCompetitor(
                        id="33",
                        home_away="away",
                        winner=False,
                        team=NFLTeam(id="33", display_name="Baltimore Ravens", logos="bal.png")
                    ),
                ),
                situation=NFLSituation(
                    down=3, yard_line=22, distance=7, is_red_zone=True,
                    home_timeouts=1, away_timeouts=2
                ),
                has_defensive_stats=True
            ),
        ),
        venue=NFLVenue(
            id="3622",
            full_name="GEHA Field at Arrowhead Stadium",
            address=NFLVenueAddress(city="Kansas City", state="MO", zip_code="64129"),
            grass=True,
            indoor=False,
            images=(NFLVenueImage(href="3622.jpg", width=2000, height=1125, alt="", rel=("full", "day")),)
        ),
        status=NFLStatus(
            clock=0,
            display_clock="0:00",
            period=4,
            type=NFLStatusType(
                id="3", name="STATUS_FINAL", state="post", completed=True,
                description="Final", detail="Final", short_detail="Final"
            )
        )
    )
