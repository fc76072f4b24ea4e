"""
Shared HTTP plumbing for the provider clients.

Each provider owns one lazily created httpx.AsyncClient with its auth
headers and timeout. Calls are awaited one at a time; there is no retry.
"""
from typing import Any, Dict, Mapping, Optional
import httpx
from loguru import logger
from pydantic import ValidationError

from data_providers.errors import ProviderDecodeError, ProviderRequestError, ProviderStatusError

DEFAULT_TIMEOUT = 10.0


class BaseProviderClient:
    """
    Base class for provider API clients.

    Subclasses set ``provider_name`` and pass their auth headers in.
    """

    provider_name: str = "unknown"

    def __init__(
        self,
        base_url: str,
        headers: Optional[Mapping[str, str]] = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = base_url.rstrip("/")
        self.headers = dict(headers or {})
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                headers=self.headers,
                timeout=self.timeout,
                transport=self._transport
            )
        return self._client

    async def close(self):
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def _get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        GET ``path`` and return the decoded JSON body.

        Raises:
            ProviderRequestError: request failure (timeout, connection, protocol).
            ProviderStatusError: any status other than 200.
            ProviderDecodeError: body cannot be content-decoded or is not valid JSON.
        """
        client = await self._get_client()
        url = f"{self.base_url}{path}"

        try:
            response = await client.get(url, params=params)
        except httpx.DecodingError as e:
            logger.error(f"{self.provider_name}: could not decode response from {url}: {e}")
            raise ProviderDecodeError(f"response from {url} could not be decoded: {e}") from e
        except httpx.RequestError as e:
            logger.error(f"{self.provider_name}: request to {url} failed: {e}")
            raise ProviderRequestError(f"request to {url} failed: {e}") from e

        if response.status_code != httpx.codes.OK:
            logger.error(f"{self.provider_name}: HTTP {response.status_code} for GET {url}")
            raise ProviderStatusError(response.status_code, url=str(response.request.url))

        try:
            return response.json()
        except ValueError as e:
            raise ProviderDecodeError(f"response from {url} was not valid JSON: {e}") from e

    async def _get_object(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Like _get_json but requires a JSON object."""
        data = await self._get_json(path, params=params)
        if not isinstance(data, dict):
            raise ProviderDecodeError(f"expected JSON object from {path}, got {type(data).__name__}")
        return data

    @staticmethod
    def _map(mapper, payload, context: str):
        """Run a mapping function, turning schema mismatches into ProviderDecodeError."""
        try:
            return mapper(payload)
        except (ValidationError, KeyError, TypeError, AttributeError) as e:
            raise ProviderDecodeError(f"unexpected {context} payload: {e}") from e
