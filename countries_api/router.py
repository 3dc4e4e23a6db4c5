# countries_api/router.py
from __future__ import annotations
import json
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

from .errors import (
    CountriesError,
    MalformedPath,
    MalformedRequest,
    MethodNotAllowed,
    NoCountriesAvailable,
    NotFound,
)
from .models import parse_country
from .store import CountryActions

log = logging.getLogger(__name__)

JSON_TYPE = "application/json"
TEXT_TYPE = "text/plain; charset=utf-8"
COLLECTION = "countries"
RANDOM_SEGMENT = "random"


@dataclass
class Response:
    status: int
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""


def json_response(payload, status: int = 200) -> Response:
    try:
        body = json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    except (TypeError, ValueError) as e:
        return text_response(str(e), 500)
    return Response(status, {"content-type": JSON_TYPE}, body)


def text_response(message: str, status: int) -> Response:
    return Response(status, {"content-type": TEXT_TYPE}, message.encode("utf-8"))


class RequestRouter:
    """
    Maps (method, path) onto CountryActions calls.

    /countries          GET list, POST add
    /countries/{id}     GET fetch, DELETE remove
    /countries/random   GET -> 302 to a random /countries/{id}

    Every CountriesError raised while handling a request is turned into a
    plain-text Response here; nothing escapes dispatch().
    """

    def __init__(self, actions: CountryActions):
        self.actions = actions

    def dispatch(
        self,
        method: str,
        path: str,
        headers: Optional[Mapping[str, str]] = None,
        body: bytes = b"",
    ) -> Response:
        method = method.upper()
        parts = path.split("/")
        try:
            if parts == ["", COLLECTION]:
                resp = self._countries(method, headers or {}, body)
            elif len(parts) >= 3 and parts[:2] == ["", COLLECTION]:
                resp = self._country_by_id(method, parts)
            else:
                resp = text_response("Not Found", 404)
        except CountriesError as e:
            log.debug("%s %s rejected: %s", method, path, e.message)
            resp = text_response(e.message, e.status)
        log.info("%s %s -> %d", method, path, resp.status)
        return resp

    # /countries

    def _countries(self, method: str, headers: Mapping[str, str], body: bytes) -> Response:
        if method == "GET":
            return self._list()
        if method == "POST":
            return self._add(headers, body)
        raise MethodNotAllowed("method not allowed")

    def _list(self) -> Response:
        countries = self.actions.get_all_countries()
        return json_response([c.to_dict() for c in countries])

    def _add(self, headers: Mapping[str, str], body: bytes) -> Response:
        ct = _header(headers, "content-type")
        if ct != JSON_TYPE:
            raise MalformedRequest(
                f"need content-type '{JSON_TYPE}', but got '{ct}'", status=415
            )
        country = parse_country(body)
        self.actions.add_country(country)
        return Response(200)

    # /countries/{id}

    def _country_by_id(self, method: str, parts: List[str]) -> Response:
        if method == "GET":
            return self._get(_segment(parts))
        if method == "DELETE":
            return self._delete(_segment(parts))
        raise MethodNotAllowed("method not allowed")

    def _get(self, segment: str) -> Response:
        if segment == RANDOM_SEGMENT:
            return self._random()
        try:
            country = self.actions.get_country_by_id(segment)
        except NotFound as e:
            raise NotFound("Country not found") from e
        return json_response(country.to_dict())

    def _random(self) -> Response:
        try:
            target = self.actions.get_random_country_id()
        except NoCountriesAvailable as e:
            raise NoCountriesAvailable("No countries available to choose randomly") from e
        return Response(302, {"location": f"/{COLLECTION}/{target}"})

    def _delete(self, segment: str) -> Response:
        self.actions.delete_country(segment)
        return Response(200)


def _segment(parts: List[str]) -> str:
    if len(parts) != 3:
        raise MalformedPath("Wrong number of parts on URL path")
    return parts[2]


def _header(headers: Mapping[str, str], name: str) -> str:
    value = headers.get(name)
    if value is not None:
        return value
    for k, v in headers.items():
        if k.lower() == name:
            return v
    return ""
