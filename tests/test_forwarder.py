"""
Tests for the ingestion forwarder.
"""
import asyncio
import json
import pytest
import httpx

from services.forwarder import ForwardError, IngestionForwarder

INGEST_URL = "http://ingest.test/ingest"


def forward(handler, matches):
    forwarder = IngestionForwarder(INGEST_URL, transport=httpx.MockTransport(handler))
    return asyncio.run(forwarder.forward(matches))


class TestIngestionForwarder:
    """Transport contract of IngestionForwarder.forward."""

    def test_posts_json_array(self, sample_match, sample_nfl_match):
        """The batch is POSTed as a JSON array with the JSON content type."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["content_type"] = request.headers.get("Content-Type")
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, text="Data ingested successfully")

        forward(handler, [sample_match, sample_nfl_match])

        assert seen["method"] == "POST"
        assert seen["url"] == INGEST_URL
        assert seen["content_type"] == "application/json"
        assert len(seen["body"]) == 2
        assert seen["body"][0]["id"] == "football-data-497410"
        assert seen["body"][0]["score"]["full_time"] == {"home": 1, "away": 0}
        assert seen["body"][1]["shortName"] == "BAL @ KC"
        assert seen["body"][1]["competitions"][0]["situation"]["isRedZone"] is True

    def test_503_raises_and_keeps_batch(self, sample_match):
        """A 503 is a ForwardError naming the status; the batch is untouched."""
        batch = [sample_match]
        snapshot = [m.model_copy() for m in batch]

        with pytest.raises(ForwardError) as exc_info:
            forward(lambda request: httpx.Response(503), batch)

        assert exc_info.value.status_code == 503
        assert "503" in str(exc_info.value)
        assert batch == snapshot

    def test_transport_error(self, sample_match):
        """Connection failures are ForwardError without a status code."""
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(ForwardError) as exc_info:
            forward(handler, [sample_match])

        assert exc_info.value.status_code is None
        assert "failed to send request" in str(exc_info.value)

    def test_undecodable_response_is_forward_error(self, sample_match):
        """Any request failure, including a corrupt response body, is a ForwardError."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                headers={"content-encoding": "gzip"},
                stream=httpx.ByteStream(b"not gzip")
            )

        with pytest.raises(ForwardError) as exc_info:
            forward(handler, [sample_match])

        assert exc_info.value.status_code is None

    def test_empty_batch(self):
        """An empty batch is sent as []."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = json.loads(request.content)
            return httpx.Response(200)

        forward(handler, [])

        assert seen["body"] == []
