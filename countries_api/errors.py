# countries_api/errors.py
from __future__ import annotations


class CountriesError(Exception):
    """Base for every error the router turns into an HTTP response."""

    status = 500

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status


class NotFound(CountriesError):
    status = 404


class NoCountriesAvailable(CountriesError):
    status = 404


class MalformedRequest(CountriesError):
    # 400 for unparsable bodies, 415 for a wrong content-type
    status = 400


class MethodNotAllowed(CountriesError):
    status = 405


class MalformedPath(CountriesError):
    status = 404
