"""
Ingest API router - accepts match batches from the fetchers.

POST only. The body must be a JSON array of Match / NFLMatch objects;
field values are not checked beyond their types.
"""
from typing import List
from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse
from loguru import logger
from pydantic import TypeAdapter, ValidationError
from starlette.requests import ClientDisconnect

from core.models import IngestedMatch
from services.ingest_sink import IngestSink, logging_sink

router = APIRouter()

ACK_MESSAGE = "Data ingested successfully"

_batch_adapter = TypeAdapter(List[IngestedMatch])


def get_sink() -> IngestSink:
    """Sink for accepted batches. Override this dependency to persist them."""
    return logging_sink


@router.post("/ingest", response_class=PlainTextResponse)
async def ingest(request: Request, sink: IngestSink = Depends(get_sink)):
    """Decode a forwarded batch and hand it to the sink."""
    try:
        body = await request.body()
    except ClientDisconnect:
        logger.warning("Ingest: client disconnected before the body was read")
        return PlainTextResponse("Failed to read request body", status_code=400)

    try:
        matches = _batch_adapter.validate_json(body)
    except ValidationError as e:
        logger.warning(f"Ingest: rejected malformed batch ({e.error_count()} errors)")
        return PlainTextResponse("Failed to parse JSON", status_code=400)

    sink.ingest(matches)
    return PlainTextResponse(ACK_MESSAGE)
