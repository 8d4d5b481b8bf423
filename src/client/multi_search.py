"""Multi-search: several searches in one round trip."""

import logging

from src.api.models import MultiSearchParams, MultiSearchResult, MultiSearchSearchesParameter
from src.api.transport import APIClientInterface
from src.client.errors import HTTPStatusError, TransportError

logger = logging.getLogger(__name__)


class MultiSearch:
    """Performs multi-search requests through an injected transport.

    Holds no state beyond the transport and the per-call timeout, so one
    instance can serve concurrent callers.
    """

    def __init__(self, api_client: APIClientInterface, timeout: float | None = None):
        """Initialize the multi-search endpoint.

        Args:
            api_client: Transport used to reach the server
            timeout: Timeout in seconds passed to every call
        """
        self.api_client = api_client
        self.timeout = timeout

    def perform(
        self,
        params: MultiSearchParams,
        body: MultiSearchSearchesParameter,
    ) -> MultiSearchResult:
        """Run a batch of searches.

        Args:
            params: Query-string parameters applied to every search
            body: Ordered batch of per-collection searches

        Returns:
            One result per search, in request order

        Raises:
            TransportError: If the call could not be completed
            HTTPStatusError: If the server answered with a failure status
        """
        logger.info(f"Performing multi-search with {len(body.searches)} searches")

        try:
            response = self.api_client.multi_search_with_response(
                params,
                body,
                timeout=self.timeout,
            )
        except Exception as e:
            logger.error(f"Multi-search request failed: {e}")
            raise TransportError(e) from e

        if response.json200 is None or not response.is_success:
            logger.warning(f"Multi-search returned status {response.status_code}")
            raise HTTPStatusError(response.status_code, response.body)

        return response.json200
