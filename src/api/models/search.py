"""Multi-search request and response models.

Field names match the keys used on the wire, so models can be dumped straight
into query strings and JSON bodies.
"""

import json
from typing import Any

from pydantic import BaseModel, Field


class _SearchFields(BaseModel):
    """Search options shared by query-string params and per-search bodies."""

    q: str | None = Field(default=None, description="Query text")
    query_by: str | None = Field(default=None, description="Comma-separated fields to search by")
    max_hits: int | str | None = Field(default=None, description="Maximum hits to consider, or 'all'")
    prefix: str | bool | None = Field(default=None, description="Treat last query word as a prefix")
    filter_by: str | None = Field(default=None, description="Filter expression")
    sort_by: str | None = Field(default=None, description="Sort expression")
    facet_by: str | None = Field(default=None, description="Comma-separated facet fields")
    max_facet_values: int | None = Field(default=None, description="Max values returned per facet")
    facet_query: str | None = Field(default=None, description="Filter on facet values")
    num_typos: int | None = Field(default=None, description="Number of typos tolerated")
    page: int | None = Field(default=None, description="Results page, 1-based")
    per_page: int | None = Field(default=None, description="Hits per page")
    group_by: str | None = Field(default=None, description="Field to group hits by")
    group_limit: int | None = Field(default=None, description="Hits kept per group")
    include_fields: str | None = Field(default=None, description="Fields to return in documents")
    exclude_fields: str | None = Field(default=None, description="Fields to strip from documents")
    highlight_full_fields: str | None = Field(default=None, description="Fields highlighted in full")
    highlight_start_tag: str | None = Field(default=None, description="Tag opening a highlight")
    highlight_end_tag: str | None = Field(default=None, description="Tag closing a highlight")
    pinned_hits: str | None = Field(default=None, description="Document ids pinned to positions")
    hidden_hits: str | None = Field(default=None, description="Document ids hidden from results")
    drop_tokens_threshold: int | None = Field(default=None)
    typo_tokens_threshold: int | None = Field(default=None)
    snippet_threshold: int | None = Field(default=None)


class MultiSearchParams(_SearchFields):
    """Parameters sent in the query string of a multi-search request.

    Values here apply to every search in the batch unless a search
    overrides them in the body.
    """

    def to_query_params(self) -> dict[str, str]:
        """Render set fields as query-string values.

        Returns:
            Mapping of wire key to string value, unset fields omitted
        """
        params = {}
        for key, value in self.model_dump(exclude_none=True).items():
            if isinstance(value, bool):
                params[key] = "true" if value else "false"
            else:
                params[key] = str(value)
        return params


class MultiSearchParameters(_SearchFields):
    """Search options for a single entry of a multi-search body."""


class MultiSearchCollectionParameters(MultiSearchParameters):
    """A single search in a multi-search batch, bound to a collection."""

    collection: str = Field(..., min_length=1, description="Target collection name")


class MultiSearchSearchesParameter(BaseModel):
    """Multi-search request body.

    Order matters: result ``i`` answers search ``i``.
    """

    searches: list[MultiSearchCollectionParameters] = Field(default_factory=list)

    def to_body(self) -> dict[str, Any]:
        """Render as the JSON request body, unset fields omitted."""
        return self.model_dump(mode="json", exclude_none=True)


class SearchHighlight(BaseModel):
    """Highlighted excerpt of a matched field."""

    field: str | None = None
    snippet: str | None = None
    snippets: list[str] | None = None
    value: str | None = None
    indices: list[int] | None = None
    matched_tokens: list[Any] | None = None


class SearchResultHit(BaseModel):
    """A single matching document."""

    highlights: list[SearchHighlight] | None = None
    # Schemaless: arbitrary JSON values keyed by field name
    document: dict[str, Any] | None = None
    text_match: int | None = None


class FacetCount(BaseModel):
    """Count for one facet value."""

    count: int | None = None
    value: str | None = None
    highlighted: str | None = None


class FacetCounts(BaseModel):
    """Facet counts for one facet field."""

    field_name: str | None = None
    counts: list[FacetCount] | None = None
    stats: dict[str, Any] | None = None


class SearchGroupedHit(BaseModel):
    """Hits sharing the same group key."""

    group_key: list[Any]
    hits: list[SearchResultHit]


class SearchResult(BaseModel):
    """Result of one search within a multi-search."""

    found: int | None = None
    out_of: int | None = None
    page: int | None = None
    search_time_ms: int | None = None
    facet_counts: list[FacetCounts] | None = None
    hits: list[SearchResultHit] | None = None
    grouped_hits: list[SearchGroupedHit] | None = None
    request_params: dict[str, Any] | None = None
    # Set instead of hits when this search failed inside an otherwise successful batch
    error: str | None = None
    code: int | None = None


class MultiSearchResult(BaseModel):
    """Multi-search response body: one result per search, in request order."""

    results: list[SearchResult] = Field(default_factory=list)

    @classmethod
    def from_json(cls, data: bytes | str) -> "MultiSearchResult":
        """Decode a multi-search response body."""
        return cls.model_validate_json(data)

    def to_json(self) -> str:
        """Encode back to the response JSON shape, unset fields omitted."""
        return json.dumps(self.model_dump(mode="json", exclude_none=True))
