"""
Ingestion Forwarder - POSTs a fetched batch to the ingestion service.

The batch is serialized as a JSON array. Anything other than HTTP 200 is
raised as ForwardError; the caller decides whether that is fatal.
"""
from typing import Optional, Sequence
import httpx
from loguru import logger
from pydantic import BaseModel

from core.models import dump_batch

DEFAULT_TIMEOUT = 10.0


class ForwardError(RuntimeError):
    """Forwarding a batch to the ingestion service failed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class IngestionForwarder:
    """Sends normalized match batches to the ingestion endpoint."""

    def __init__(
        self,
        ingestion_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.ingestion_url = ingestion_url
        self.timeout = timeout
        self._transport = transport

    async def forward(self, matches: Sequence[BaseModel]) -> None:
        """
        Serialize ``matches`` and POST them to the ingestion endpoint.

        Args:
            matches: Match or NFLMatch values. The sequence is not modified.

        Raises:
            ForwardError: transport failure or non-200 response.
        """
        payload = dump_batch(matches)

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                response = await client.post(
                    self.ingestion_url,
                    json=payload,
                    headers={"Content-Type": "application/json"}
                )
            except httpx.RequestError as e:
                raise ForwardError(f"failed to send request: {e}") from e

        if response.status_code != httpx.codes.OK:
            raise ForwardError(
                f"ingestion service returned status code: {response.status_code}",
                status_code=response.status_code
            )

        logger.info(f"Forwarded {len(payload)} matches to {self.ingestion_url}")
