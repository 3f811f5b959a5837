"""OMDb repository implementation."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from cinesearch.config import DEFAULT_BASE_URL, PlotLength
from cinesearch.errors import DecodeError, RepositoryError, UpstreamError
from cinesearch.models import CatalogPayload, DetailRecord
from cinesearch.repository._errors import to_error_info
from cinesearch.result import Failure, Result, Success

logger = logging.getLogger(__name__)

# OMDb answers a search without hits with Response=False and one of these.
# They are a valid empty result, not a failure.
NO_MATCH_MESSAGES: frozenset[str] = frozenset(
    {
        "movie not found!",
        "series not found!",
        "episode not found!",
        "not found",
    }
)

_FAILURES = (httpx.HTTPError, RepositoryError, ValidationError, ValueError)


class OmdbRepository:
    """Catalog repository backed by the OMDb HTTP API."""

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout_s: float = 10.0,
        plot: PlotLength = "full",
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize; pass *client* to share a connection pool (not closed by us)."""
        self.base_url = base_url
        self.timeout_s = timeout_s
        self.plot = plot
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        """Lazily initialize and return the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout_s)
        return self._client

    async def search_catalog(
        self, api_key: str, query: str
    ) -> Result[CatalogPayload]:
        """Search titles matching *query*; no matches is an empty success."""
        try:
            body = await self._get_json({"apikey": api_key, "s": query})
            payload = _parse_search(body)
        except _FAILURES as exc:
            error = to_error_info(exc, operation=f"Search for {query!r}")
            logger.debug("%s", error.message)
            return Failure(error)
        logger.debug("Search %r returned %d items", query, len(payload.items))
        return Success(payload)

    async def fetch_detail(self, api_key: str, item_id: str) -> Result[DetailRecord]:
        """Fetch the full record for *item_id*."""
        try:
            body = await self._get_json(
                {"apikey": api_key, "i": item_id, "plot": self.plot}
            )
            record = _parse_detail(body)
        except _FAILURES as exc:
            error = to_error_info(exc, operation=f"Details for {item_id!r}")
            logger.debug("%s", error.message)
            return Failure(error)
        logger.debug("Fetched details for %s", item_id)
        return Success(record)

    async def _get_json(self, params: dict[str, str]) -> dict[str, Any]:
        client = self._get_client()
        response = await client.get(
            self.base_url, params=params, timeout=self.timeout_s
        )
        if response.is_error:
            # The request URL carries the API key; keep it out of messages.
            raise UpstreamError(
                _upstream_message(response), status_code=response.status_code
            )
        try:
            body = response.json()
        except ValueError as e:
            raise DecodeError("malformed response body") from e
        if not isinstance(body, dict):
            raise DecodeError(
                f"expected a JSON object, got {type(body).__name__}"
            )
        return body

    async def aclose(self) -> None:
        """Close the HTTP client if this repository created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> OmdbRepository:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


def _upstream_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("Error"), str):
        return body["Error"]
    return response.reason_phrase or "unexpected response"


def _is_negative(body: dict[str, Any]) -> bool:
    return str(body.get("Response", "True")).lower() == "false"


def _parse_search(body: dict[str, Any]) -> CatalogPayload:
    if _is_negative(body):
        message = str(body.get("Error") or "unknown upstream error")
        if message.strip().lower() in NO_MATCH_MESSAGES:
            return CatalogPayload()
        raise UpstreamError(message)
    return CatalogPayload.model_validate(body)


def _parse_detail(body: dict[str, Any]) -> DetailRecord:
    if _is_negative(body):
        raise UpstreamError(str(body.get("Error") or "unknown upstream error"))
    return DetailRecord.model_validate(body)
