"""API request and response models."""

from .search import (
    FacetCount,
    FacetCounts,
    MultiSearchCollectionParameters,
    MultiSearchParameters,
    MultiSearchParams,
    MultiSearchResult,
    MultiSearchSearchesParameter,
    SearchGroupedHit,
    SearchHighlight,
    SearchResult,
    SearchResultHit,
)

__all__ = [
    "FacetCount",
    "FacetCounts",
    "MultiSearchCollectionParameters",
    "MultiSearchParameters",
    "MultiSearchParams",
    "MultiSearchResult",
    "MultiSearchSearchesParameter",
    "SearchGroupedHit",
    "SearchHighlight",
    "SearchResult",
    "SearchResultHit",
]
