# API Routers
from . import ingest

__all__ = ["ingest"]
