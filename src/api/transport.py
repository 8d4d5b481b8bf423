"""HTTP transport for the Typesense API.

``APIClientInterface`` is the capability the client layer depends on.
``APIClient`` implements it over httpx; tests substitute their own
implementation.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

import httpx

from src.api.models import MultiSearchParams, MultiSearchResult, MultiSearchSearchesParameter

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-TYPESENSE-API-KEY"


@dataclass
class MultiSearchResponse:
    """Outcome of a multi-search call that reached the server."""

    status_code: int
    body: bytes = b""
    json200: MultiSearchResult | None = None
    http_response: httpx.Response | None = None

    @property
    def is_success(self) -> bool:
        """Whether the status code is in the 2xx range."""
        return 200 <= self.status_code < 300


class APIClientInterface(ABC):
    """Transport capability for performing typed multi-search calls."""

    @abstractmethod
    def multi_search_with_response(
        self,
        params: MultiSearchParams,
        body: MultiSearchSearchesParameter,
        *,
        timeout: float | None = None,
    ) -> MultiSearchResponse:
        """Perform a multi-search call.

        Args:
            params: Query-string search parameters
            body: Batch of per-collection searches
            timeout: Per-call timeout in seconds

        Returns:
            Response with the decoded body set when the server answered 200

        Raises:
            Exception: If the call could not be completed
        """


class APIClient(APIClientInterface):
    """httpx-backed implementation of the Typesense API transport."""

    def __init__(
        self,
        server_url: str,
        api_key: str,
        timeout: float = 5.0,
        http_client: httpx.Client | None = None,
    ):
        """Initialize the API client.

        Args:
            server_url: Base URL of the Typesense server, e.g. http://localhost:8108
            api_key: API key sent with every request
            timeout: Default request timeout in seconds
            http_client: Preconfigured httpx client (tests, custom transports)
        """
        self.server_url = server_url.rstrip("/")
        self.timeout = timeout
        self._owns_http_client = http_client is None
        self._http_client = http_client or httpx.Client(timeout=timeout)
        self._headers = {
            API_KEY_HEADER: api_key,
            "Content-Type": "application/json",
        }

    def __enter__(self) -> "APIClient":
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP client if this transport created it."""
        if self._owns_http_client:
            self._http_client.close()

    def multi_search_with_response(
        self,
        params: MultiSearchParams,
        body: MultiSearchSearchesParameter,
        *,
        timeout: float | None = None,
    ) -> MultiSearchResponse:
        """POST the batch to ``/multi_search``.

        httpx errors and body decoding errors propagate to the caller.
        """
        url = f"{self.server_url}/multi_search"
        logger.debug(f"POST {url} with {len(body.searches)} searches")

        response = self._http_client.post(
            url,
            params=params.to_query_params(),
            json=body.to_body(),
            headers=self._headers,
            timeout=timeout if timeout is not None else self.timeout,
        )

        json200 = None
        if response.status_code == 200:
            json200 = MultiSearchResult.from_json(response.content)

        return MultiSearchResponse(
            status_code=response.status_code,
            body=response.content,
            json200=json200,
            http_response=response,
        )
