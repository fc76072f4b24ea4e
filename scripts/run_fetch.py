"""
Fetch matches from one provider and forward them to the ingestion service.

Usage:
    python scripts/run_fetch.py --provider football [--competition PL --date-from 2024-09-01 --date-to 2024-09-08]
    python scripts/run_fetch.py --provider nfl [--date 2024-09-10 | --year 2024 --week 2]
    python scripts/run_fetch.py --provider nfl --on-forward-failure exit

A fetch failure is fatal (exit status 1). A forwarding failure exits 1
under the "exit" policy and is only logged under "log".
"""
import asyncio
import argparse
import sys
from datetime import date, datetime
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from loguru import logger
from config import get_settings
from data_providers.errors import ProviderError
from services.fetch_service import (
    FetchRequest, FetchService, ForwardFailurePolicy, ProviderName
)
from services.forwarder import ForwardError


async def main(provider: ProviderName, request: FetchRequest, policy) -> int:
    """Run one fetch-and-forward. Returns the process exit status."""
    settings = get_settings()
    policy = policy or settings.forward_failure_policy

    # Configure logging
    logger.remove()
    logger.add(
        sys.stderr,
        level=settings.log_level,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
    )

    try:
        service = FetchService.from_settings(settings, provider)
    except RuntimeError as e:
        logger.error(str(e))
        return 1

    try:
        result = await service.run(provider, request, policy=policy)
    except ProviderError as e:
        logger.error(f"Failed to fetch {provider.value} matches: {e}")
        return 1
    except ForwardError:
        return 1
    finally:
        await service.close()

    logger.info(
        f"Run finished: {len(result.matches)} matches, "
        f"forwarded={result.forwarded}"
    )
    return 0


def _parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Fetch matches and forward them for ingestion")
    parser.add_argument(
        "--provider",
        choices=[p.value for p in ProviderName],
        required=True,
        help="Data provider to fetch from"
    )
    parser.add_argument(
        "--on-forward-failure",
        choices=[p.value for p in ForwardFailurePolicy],
        default=None,
        help="exit: stop with status 1; log: report and continue (default depends on provider)"
    )

    football = parser.add_argument_group("football")
    football.add_argument("--competition", help="Competition id or code (e.g. PL)")
    football.add_argument("--team", help="Team id")
    football.add_argument("--date-from", type=date.fromisoformat, help="YYYY-MM-DD")
    football.add_argument("--date-to", type=date.fromisoformat, help="YYYY-MM-DD")

    nfl = parser.add_argument_group("nfl")
    nfl.add_argument("--date", type=datetime.fromisoformat, help="Resolve the week containing this date")
    nfl.add_argument("--year", type=int, help="Season year (with --week)")
    nfl.add_argument("--week", type=int, help="Week number, skips the week lookup")

    return parser.parse_args(argv)


if __name__ == "__main__":
    args = _parse_args()
    request = FetchRequest(
        competition_id=args.competition,
        team_id=args.team,
        date_from=args.date_from,
        date_to=args.date_to,
        on_date=args.date,
        year=args.year,
        week=args.week
    )

    try:
        status = asyncio.run(main(ProviderName(args.provider), request, args.on_forward_failure))
    except KeyboardInterrupt:
        print("\nShutdown requested...")
        status = 130
    sys.exit(status)
