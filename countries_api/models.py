# countries_api/models.py
from __future__ import annotations
import json
from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from .errors import MalformedRequest


@dataclass(frozen=True)
class Currency:
    code: str = ""
    name: str = ""
    symbol: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "Currency":
        if not isinstance(data, dict):
            raise MalformedRequest(f"cannot decode {_json_type(data)} into currency")
        return cls(
            code=_string_field(data, "code"),
            name=_string_field(data, "name"),
            symbol=_string_field(data, "symbol"),
        )

    def to_dict(self) -> Dict[str, str]:
        return {"code": self.code, "name": self.name, "symbol": self.symbol}


@dataclass(frozen=True)
class Country:
    """
    Immutable country record.

    Stored under name.lower(); alpha2Code plays no part in identity.
    Currencies are held as a tuple so a record handed out by the store
    can't be mutated behind the store's back.
    """

    name: str = ""
    alpha2_code: str = ""
    capital: str = ""
    currencies: Tuple[Currency, ...] = field(default_factory=tuple)

    @property
    def key(self) -> str:
        return self.name.lower()

    @classmethod
    def from_dict(cls, data: Any) -> "Country":
        if not isinstance(data, dict):
            raise MalformedRequest(f"cannot decode {_json_type(data)} into country")

        raw_currencies = data.get("currencies")
        if raw_currencies is None:
            raw_currencies = []
        if not isinstance(raw_currencies, list):
            raise MalformedRequest(
                f"cannot decode {_json_type(raw_currencies)} into field currencies"
            )

        return cls(
            name=_string_field(data, "name"),
            alpha2_code=_string_field(data, "alpha2Code"),
            capital=_string_field(data, "capital"),
            currencies=tuple(Currency.from_dict(c) for c in raw_currencies),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "alpha2Code": self.alpha2_code,
            "capital": self.capital,
            "currencies": [c.to_dict() for c in self.currencies],
        }


def parse_country(body: bytes) -> Country:
    """Decode a request body into a Country, raising MalformedRequest on failure."""
    try:
        data = json.loads(body)
    except (ValueError, RecursionError) as e:
        # RecursionError: nesting deeper than the decoder can follow
        raise MalformedRequest(str(e) or "JSON nested too deeply") from e
    return Country.from_dict(data)


def _string_field(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise MalformedRequest(f"cannot decode {_json_type(value)} into field {key}")
    return value


def _json_type(value: Any) -> str:
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return "null"
