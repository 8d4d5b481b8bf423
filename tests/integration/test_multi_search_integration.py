"""Integration tests for multi-search against a live Typesense server.

These tests require a running Typesense server and will be skipped unless
the TYPESENSE_INTEGRATION_TESTS environment variable is set.

Prerequisites:
- Typesense server reachable at TYPESENSE_URL (default http://localhost:8108)
- TYPESENSE_API_KEY set to an admin key (collections are created and dropped)
"""

import os
from datetime import UTC, datetime

import httpx
import pytest

from src.api.models import (
    MultiSearchCollectionParameters,
    MultiSearchParams,
    MultiSearchSearchesParameter,
)
from src.api.transport import API_KEY_HEADER
from src.client import Client, HTTPStatusError

# Skip all tests unless integration tests are enabled
pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(
        not os.getenv("TYPESENSE_INTEGRATION_TESTS"),
        reason="Integration tests disabled. Set TYPESENSE_INTEGRATION_TESTS=1 to enable.",
    ),
]


@pytest.fixture
def server_url():
    """Get Typesense server URL from environment."""
    return os.getenv("TYPESENSE_URL", "http://localhost:8108")


@pytest.fixture
def api_key():
    """Get Typesense API key from environment."""
    key = os.getenv("TYPESENSE_API_KEY")
    if not key:
        pytest.skip("TYPESENSE_API_KEY not set")
    return key


@pytest.fixture
def companies_collection(server_url, api_key):
    """Create a companies collection with one document, dropped afterwards."""
    timestamp = datetime.now(UTC).strftime("%Y%m%d%H%M%S%f")
    name = f"test-companies-{timestamp}"
    headers = {API_KEY_HEADER: api_key}

    with httpx.Client(base_url=server_url, headers=headers, timeout=10.0) as http:
        http.post(
            "/collections",
            json={
                "name": name,
                "fields": [
                    {"name": "company_name", "type": "string"},
                    {"name": "num_employees", "type": "int32"},
                    {"name": "country", "type": "string", "facet": True},
                ],
                "default_sorting_field": "num_employees",
            },
        ).raise_for_status()
        http.post(
            f"/collections/{name}/documents",
            json={
                "id": "124",
                "company_name": "Stark Industries",
                "num_employees": 5215,
                "country": "USA",
            },
        ).raise_for_status()

        yield name

        http.delete(f"/collections/{name}")


class TestMultiSearchIntegration:
    """Multi-search against a live server."""

    def test_two_searches_return_two_results(self, server_url, api_key, companies_collection):
        """Test that each search gets its own result, in order."""
        body = MultiSearchSearchesParameter(
            searches=[
                MultiSearchCollectionParameters(
                    collection=companies_collection, q="stark", query_by="company_name"
                ),
                MultiSearchCollectionParameters(
                    collection=companies_collection, q="nothing-matches", query_by="company_name"
                ),
            ]
        )

        with Client(server_url=server_url, api_key=api_key) as client:
            result = client.multi_search.perform(MultiSearchParams(), body)

        assert len(result.results) == 2
        assert result.results[0].found == 1
        assert result.results[0].hits[0].document["company_name"] == "Stark Industries"
        assert result.results[0].hits[0].document["num_employees"] == 5215
        assert result.results[1].found == 0

    def test_common_params_apply_to_every_search(self, server_url, api_key, companies_collection):
        """Test that query-string params are shared by all searches."""
        body = MultiSearchSearchesParameter(
            searches=[MultiSearchCollectionParameters(collection=companies_collection, q="stark")]
        )
        params = MultiSearchParams(query_by="company_name", facet_by="country")

        with Client(server_url=server_url, api_key=api_key) as client:
            result = client.multi_search.perform(params, body)

        assert result.results[0].facet_counts[0].field_name == "country"

    def test_invalid_api_key_raises(self, server_url, api_key, companies_collection):
        """Test that a rejected key surfaces as HTTPStatusError."""
        body = MultiSearchSearchesParameter(
            searches=[MultiSearchCollectionParameters(collection=companies_collection, q="stark")]
        )

        with Client(server_url=server_url, api_key="wrong-key") as client:
            with pytest.raises(HTTPStatusError) as exc_info:
                client.multi_search.perform(MultiSearchParams(query_by="company_name"), body)

        assert exc_info.value.status_code == 401
