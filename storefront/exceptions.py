# storefront/exceptions.py

"""Exceptions raised while talking to the catalog service."""


class FetchError(Exception):
    """A catalog request could not produce usable data."""

    def __init__(self, message: str, url: str = "") -> None:
        super().__init__(message)
        self.url = url


class NetworkError(FetchError):
    """Transport failure or a non-200 HTTP status."""

    def __init__(
        self, message: str, url: str = "", status_code: int | None = None,
    ) -> None:
        super().__init__(message, url)
        self.status_code = status_code


class ParseError(FetchError):
    """Response body is not JSON of the expected shape."""
