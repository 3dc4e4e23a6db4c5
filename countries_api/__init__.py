# countries_api/__init__.py
from .models import Country, Currency
from .store import CountryActions, CountryStore
from .router import RequestRouter, Response

__all__ = [
    "Country",
    "Currency",
    "CountryActions",
    "CountryStore",
    "RequestRouter",
    "Response",
]
