# countries_api/store.py
from __future__ import annotations
import logging
import random
from abc import ABC, abstractmethod
from threading import RLock
from typing import Dict, List, Optional

from .errors import NoCountriesAvailable, NotFound
from .models import Country

log = logging.getLogger(__name__)


class CountryActions(ABC):
    """Operations the router needs from a country backend."""

    @abstractmethod
    def add_country(self, country: Country) -> Country: ...

    @abstractmethod
    def delete_country(self, country_id: str) -> None: ...

    @abstractmethod
    def get_all_countries(self) -> List[Country]: ...

    @abstractmethod
    def get_country_by_id(self, country_id: str) -> Country: ...

    @abstractmethod
    def get_random_country_id(self) -> str:
        """Pick an id to redirect GET /countries/random to."""


class CountryStore(CountryActions):
    """
    In-memory country mapping.

    Rep:
      - _countries maps name.lower() -> Country
      - every key equals its value's key property; add_country is the
        only writer and always stores under country.key
    Safety:
      - every public method holds _lock for its whole read or write
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._countries: Dict[str, Country] = {}
        self._lock = RLock()
        self._rng = rng or random.Random()

    def __len__(self) -> int:
        with self._lock:
            return len(self._countries)

    def add_country(self, country: Country) -> Country:
        with self._lock:
            self._countries[country.key] = country
        log.debug("stored country %r", country.key)
        return country

    def delete_country(self, country_id: str) -> None:
        with self._lock:
            removed = self._countries.pop(country_id.lower(), None)
        if removed is not None:
            log.debug("deleted country %r", country_id.lower())

    def get_all_countries(self) -> List[Country]:
        with self._lock:
            return list(self._countries.values())

    def get_country_by_id(self, country_id: str) -> Country:
        with self._lock:
            country = self._countries.get(country_id.lower())
        if country is None:
            raise NotFound("Country not found.")
        return country

    def get_random_country_id(self) -> str:
        with self._lock:
            ids = list(self._countries)
            if not ids:
                raise NoCountriesAvailable("No countries available to choose randomly.")
            return self._rng.choice(ids)
