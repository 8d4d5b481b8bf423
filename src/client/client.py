"""Typesense client facade."""

import logging
from typing import Any

from src.api.transport import APIClient, APIClientInterface
from src.client.multi_search import MultiSearch
from src.client.settings import Settings, get_settings

logger = logging.getLogger(__name__)

DEFAULT_CONNECTION_TIMEOUT = 5.0


class Client:
    """Entry point for talking to a Typesense server.

    Either pass a ready transport via ``api_client`` or the server settings
    from which an httpx-backed transport is built.
    """

    def __init__(
        self,
        api_client: APIClientInterface | None = None,
        server_url: str | None = None,
        api_key: str | None = None,
        connection_timeout: float = DEFAULT_CONNECTION_TIMEOUT,
    ):
        """Initialize the client.

        Args:
            api_client: Transport to use instead of building one
            server_url: Typesense server URL (required without api_client)
            api_key: API key (required without api_client)
            connection_timeout: Timeout in seconds for every call

        Raises:
            ValueError: If neither a transport nor server settings are given
        """
        if api_client is None:
            if not server_url or not api_key:
                raise ValueError("server_url and api_key are required when no api_client is given")
            api_client = APIClient(server_url, api_key, timeout=connection_timeout)
            self._owns_api_client = True
        else:
            self._owns_api_client = False

        self.api_client = api_client
        self.connection_timeout = connection_timeout
        self.multi_search = MultiSearch(api_client, timeout=connection_timeout)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "Client":
        """Build a client from settings, loading them from the environment if not given."""
        settings = settings or get_settings()
        logger.debug(f"Creating client for {settings.url}")
        return cls(
            server_url=settings.url,
            api_key=settings.api_key,
            connection_timeout=settings.connection_timeout,
        )

    def __enter__(self) -> "Client":
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()

    def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_api_client and isinstance(self.api_client, APIClient):
            self.api_client.close()
