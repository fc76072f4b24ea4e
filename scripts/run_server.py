"""
Script to run the ingestion service.

Usage:
    python scripts/run_server.py [--host 0.0.0.0] [--port 8080] [--reload]
"""
import argparse
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import uvicorn
from loguru import logger
from config import get_settings


def main():
    """Run the ingestion service."""
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Match Ingestion Service")
    parser.add_argument(
        "--port",
        type=int,
        default=settings.ingest_port,
        help="Port to run the server on"
    )
    parser.add_argument(
        "--host",
        default=settings.ingest_host,
        help="Host to bind to"
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development"
    )
    args = parser.parse_args()

    # Configure logging
    logger.remove()
    logger.add(
        sys.stderr,
        level=settings.log_level,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan> - <level>{message}</level>"
    )

    logger.info(f"Ingestion service listening on http://{args.host}:{args.port}/ingest")

    uvicorn.run(
        "api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level="info"
    )


if __name__ == "__main__":
    main()
