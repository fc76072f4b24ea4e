# Services module
from .forwarder import ForwardError, IngestionForwarder
from .ingest_sink import IngestSink, LoggingSink, logging_sink
from .fetch_service import (
    FetchRequest, FetchResult, FetchService, ForwardFailurePolicy, ProviderName
)

__all__ = [
    "ForwardError", "IngestionForwarder",
    "IngestSink", "LoggingSink", "logging_sink",
    "FetchRequest", "FetchResult", "FetchService", "ForwardFailurePolicy", "ProviderName"
]
