"""Errors raised by the Typesense client."""


class TypesenseError(Exception):
    """Base class for client errors."""


class TransportError(TypesenseError):
    """The HTTP call could not be completed (network, timeout, decoding)."""

    def __init__(self, cause: BaseException):
        super().__init__(f"request failed: {cause}")
        self.cause = cause


class HTTPStatusError(TypesenseError):
    """The server answered with a non-success status."""

    def __init__(self, status_code: int, body: bytes = b""):
        super().__init__(f"status: {status_code} response: {body.decode('utf-8', errors='replace')}")
        self.status_code = status_code
        self.body = body
