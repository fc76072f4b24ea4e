"""
Ingest sinks - where accepted batches go.

The ingestion service has no store yet; the default sink only logs each
match. A persistent store plugs in by implementing IngestSink.
"""
from typing import Protocol, Sequence, Union
from loguru import logger

from core.models import Match, NFLMatch


class IngestSink(Protocol):
    """Receives every batch accepted by POST /ingest."""

    def ingest(self, matches: Sequence[Union[Match, NFLMatch]]) -> None:
        ...


class LoggingSink:
    """Logs received matches and keeps nothing."""

    def ingest(self, matches: Sequence[Union[Match, NFLMatch]]) -> None:
        for match in matches:
            logger.info(f"Received match: {match!r}")
        logger.info(f"Ingested batch of {len(matches)} matches")


logging_sink = LoggingSink()
