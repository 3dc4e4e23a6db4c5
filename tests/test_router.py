# tests/test_router.py
import json

import pytest
from countries_api.models import Country
from countries_api.router import RequestRouter
from countries_api.store import CountryActions, CountryStore

JSON = {"content-type": "application/json"}
GREECE = b'{"name":"Greece","alpha2Code":"GR","capital":"Athens","currencies":[{"code":"EUR","name":"Euro","symbol":"E"}]}'
SPAIN = b'{"name":"Spain","alpha2Code":"ES","capital":"Madrid","currencies":[{"code":"EUR","name":"Euro","symbol":"E"}]}'


@pytest.fixture
def router():
    return RequestRouter(CountryStore())


def test_list_empty(router):
    r = router.dispatch("GET", "/countries")
    assert r.status == 200
    assert r.body == b"[]"
    assert r.headers["content-type"] == "application/json"


def test_post_then_get_by_id(router):
    r = router.dispatch("POST", "/countries", JSON, GREECE)
    assert r.status == 200
    assert r.body == b""

    r = router.dispatch("GET", "/countries/greece")
    assert r.status == 200
    assert b'"name":"Greece"' in r.body
    assert json.loads(r.body)["currencies"][0]["code"] == "EUR"


def test_get_by_id_ignores_case(router):
    router.dispatch("POST", "/countries", JSON, GREECE)
    assert router.dispatch("GET", "/countries/GREECE").body == router.dispatch("GET", "/countries/greece").body


def test_post_two_and_list(router):
    router.dispatch("POST", "/countries", JSON, GREECE)
    router.dispatch("POST", "/countries", JSON, SPAIN)
    names = sorted(c["name"] for c in json.loads(router.dispatch("GET", "/countries").body))
    assert names == ["Greece", "Spain"]


def test_post_wrong_content_type(router):
    r = router.dispatch("POST", "/countries", {"content-type": "text/plain"}, GREECE)
    assert r.status == 415
    assert r.body == b"need content-type 'application/json', but got 'text/plain'"


def test_post_missing_content_type(router):
    r = router.dispatch("POST", "/countries", {}, GREECE)
    assert r.status == 415
    assert r.body == b"need content-type 'application/json', but got ''"


def test_content_type_header_name_is_case_insensitive(router):
    r = router.dispatch("POST", "/countries", {"Content-Type": "application/json"}, GREECE)
    assert r.status == 200


def test_post_malformed_json(router):
    r = router.dispatch("POST", "/countries", JSON, b'{"name": ')
    assert r.status == 400
    assert r.body
    assert router.dispatch("GET", "/countries").body == b"[]"


def test_delete_then_get_is_not_found(router):
    router.dispatch("POST", "/countries", JSON, GREECE)
    router.dispatch("POST", "/countries", JSON, SPAIN)

    r = router.dispatch("DELETE", "/countries/spain")
    assert r.status == 200
    assert r.body == b""

    r = router.dispatch("GET", "/countries/spain")
    assert r.status == 404
    assert r.body == b"Country not found"
    assert len(json.loads(router.dispatch("GET", "/countries").body)) == 1


def test_delete_absent_country_succeeds(router):
    assert router.dispatch("DELETE", "/countries/atlantis").status == 200


@pytest.mark.parametrize("path", ["/countries", "/countries/greece"])
@pytest.mark.parametrize("method", ["PATCH", "PUT", "HEAD"])
def test_unsupported_methods(router, method, path):
    r = router.dispatch(method, path)
    assert r.status == 405
    assert r.body == b"method not allowed"


def test_delete_on_collection_not_allowed(router):
    assert router.dispatch("DELETE", "/countries").status == 405


def test_post_on_item_not_allowed(router):
    assert router.dispatch("POST", "/countries/greece", JSON, GREECE).status == 405


@pytest.mark.parametrize("method", ["GET", "DELETE"])
def test_wrong_number_of_parts(router, method):
    r = router.dispatch(method, "/countries/greece/extra")
    assert r.status == 404
    assert r.body == b"Wrong number of parts on URL path"


def test_method_checked_before_path_shape(router):
    assert router.dispatch("PATCH", "/countries/a/b").status == 405


def test_trailing_slash_is_empty_id(router):
    r = router.dispatch("GET", "/countries/")
    assert r.status == 404
    assert r.body == b"Country not found"


def test_random_on_empty_store(router):
    r = router.dispatch("GET", "/countries/random")
    assert r.status == 404
    assert r.body == b"No countries available to choose randomly"


def test_random_redirects_to_a_stored_country(router):
    router.dispatch("POST", "/countries", JSON, GREECE)
    router.dispatch("POST", "/countries", JSON, SPAIN)
    r = router.dispatch("GET", "/countries/random")
    assert r.status == 302
    assert r.body == b""
    assert r.headers["location"] in ("/countries/greece", "/countries/spain")


def test_random_with_one_country(router):
    router.dispatch("POST", "/countries", JSON, GREECE)
    assert router.dispatch("GET", "/countries/random").headers["location"] == "/countries/greece"


def test_unrelated_path(router):
    assert router.dispatch("GET", "/cities").status == 404


class FixedActions(CountryActions):
    """Backend stub: the router only needs the abstract operations."""

    def __init__(self):
        self.deleted = []

    def add_country(self, country):
        return country

    def delete_country(self, country_id):
        self.deleted.append(country_id)

    def get_all_countries(self):
        return [Country(name="Greece")]

    def get_country_by_id(self, country_id):
        return Country(name=country_id)

    def get_random_country_id(self):
        return "greece"


def test_router_works_with_any_backend():
    actions = FixedActions()
    router = RequestRouter(actions)
    assert json.loads(router.dispatch("GET", "/countries").body)[0]["name"] == "Greece"
    assert json.loads(router.dispatch("GET", "/countries/Malta").body)["name"] == "Malta"
    router.dispatch("DELETE", "/countries/Malta")
    assert actions.deleted == ["Malta"]


class BrokenActions(FixedActions):
    def get_all_countries(self):
        return [Country(name=object())]


def test_serialization_failure_is_500():
    r = RequestRouter(BrokenActions()).dispatch("GET", "/countries")
    assert r.status == 500
    assert r.body


def test_post_deeply_nested_json_is_bad_request(router):
    r = router.dispatch("POST", "/countries", JSON, b"[" * 100000 + b"]" * 100000)
    assert r.status == 400
    assert r.body
    assert len(router.actions) == 0


def test_empty_success_bodies_have_no_content_type(router):
    r = router.dispatch("POST", "/countries", JSON, GREECE)
    assert (r.status, r.body, r.headers) == (200, b"", {})

    r = router.dispatch("DELETE", "/countries/greece")
    assert (r.status, r.body, r.headers) == (200, b"", {})
