"""Typesense client."""

from src.client.client import Client
from src.client.errors import HTTPStatusError, TransportError, TypesenseError
from src.client.multi_search import MultiSearch

__all__ = [
    "Client",
    "HTTPStatusError",
    "MultiSearch",
    "TransportError",
    "TypesenseError",
]
