# Core module
from .models import (
    Team, ScoreDetail, Score, Match, Competition,
    # NFL models
    NFLTeam, NFLType, NFLCompetitor, NFLSituation, NFLCompetition,
    NFLVenueAddress, NFLVenueImage, NFLVenue, NFLStatusType, NFLStatus, NFLMatch,
    # Ingestion
    IngestedMatch, dump_batch
)

__all__ = [
    "Team", "ScoreDetail", "Score", "Match", "Competition",
    # NFL
    "NFLTeam", "NFLType", "NFLCompetitor", "NFLSituation", "NFLCompetition",
    "NFLVenueAddress", "NFLVenueImage", "NFLVenue", "NFLStatusType", "NFLStatus", "NFLMatch",
    # Ingestion
    "IngestedMatch", "dump_batch"
]
