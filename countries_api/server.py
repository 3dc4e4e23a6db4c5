# countries_api/server.py
from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Optional, Sequence

from flask import Flask, Response, current_app, jsonify, request
from werkzeug.exceptions import MethodNotAllowed

from .config import parse_args
from .errors import MalformedRequest
from .logging_config import setup_logging
from .models import Country
from .router import COLLECTION, RequestRouter
from .store import CountryActions, CountryStore

log = logging.getLogger(__name__)

METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def create_app(actions: Optional[CountryActions] = None) -> Flask:
    """Build a Flask app serving one store; a fresh CountryStore if none is given."""
    app = Flask(__name__)
    app.config["ROUTER"] = RequestRouter(actions if actions is not None else CountryStore())

    @app.get("/health")
    def health():
        router: RequestRouter = current_app.config["ROUTER"]
        return jsonify({"status": "ok", "countries": len(router.actions.get_all_countries())})

    @app.route("/countries", methods=METHODS)
    @app.route("/countries/", methods=METHODS)
    @app.route("/countries/<path:rest>", methods=METHODS)
    def countries(rest: str = ""):
        router: RequestRouter = current_app.config["ROUTER"]
        # read the body before dispatch so the store lock never waits on the socket
        body = request.get_data()
        resp = router.dispatch(request.method, request.path, request.headers, body)
        return _to_flask(resp)

    @app.errorhandler(MethodNotAllowed)
    def method_not_allowed(e):
        # verbs outside METHODS are rejected by werkzeug before reaching the view
        if request.path.split("/")[:2] != ["", COLLECTION]:
            return e
        router: RequestRouter = current_app.config["ROUTER"]
        return _to_flask(router.dispatch(request.method, request.path, request.headers))

    return app


def _to_flask(resp) -> Response:
    out = Response(resp.body, status=resp.status, headers=resp.headers)
    if not any(k.lower() == "content-type" for k in resp.headers):
        # empty success bodies carry no content type
        out.headers.pop("Content-Type", None)
    return out


def load_seed(actions: CountryActions, path: str) -> int:
    """Add every country in a JSON array file; returns how many were loaded."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except ValueError as e:
        raise MalformedRequest(f"seed file {path}: {e}") from e
    if not isinstance(data, list):
        raise MalformedRequest(f"seed file {path}: expected a JSON array of countries")

    for item in data:
        actions.add_country(Country.from_dict(item))
    log.info("loaded %d countries from %s", len(data), path)
    return len(data)


def main(argv: Optional[Sequence[str]] = None) -> None:
    settings = parse_args(argv)
    setup_logging(settings.log_level, settings.log_file)

    store = CountryStore()
    if settings.seed:
        load_seed(store, settings.seed)

    app = create_app(store)
    log.info("serving countries on %s:%d", settings.host, settings.port)
    app.run(host=settings.host, port=settings.port, threaded=True)


if __name__ == "__main__":
    main()
