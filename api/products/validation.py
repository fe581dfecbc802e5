"""
Request validation chains for product routes.

A chain is an ordered tuple of `Rule`s. Every rule is evaluated (no short
circuit, not even between rules on the same field) and each failing rule adds
one `{field, message, location}` item, in chain order. Predicates look at the
string form of a value the way express-validator does, except `is_positive`,
which compares the raw value like a JavaScript `value > 0`.
"""

from __future__ import annotations

import json
import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Callable

from fastapi import Request

from core.errors import ValidationFailedError

from . import schemas

logger = logging.getLogger(__name__)

_INT_RE = re.compile(r"^[-+]?[0-9]+$")
_NUMERIC_RE = re.compile(r"^[-+]?(?:[0-9]*\.)?[0-9]+$")
_BOOLEANS = {"true": True, "1": True, "false": False, "0": False}

# Matches the products.name VARCHAR column.
NAME_MAX_LENGTH = 100


def as_text(value: Any) -> str:
    """
    String form used by the predicates. Missing, null and non-scalar values are "".
    """
    if value is None or isinstance(value, (dict, list)):
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def is_int(value: Any) -> bool:
    return bool(_INT_RE.match(as_text(value)))


def is_numeric(value: Any) -> bool:
    text = as_text(value)
    if not _NUMERIC_RE.match(text):
        return False
    # Digit strings too long for a float overflow to inf.
    return math.isfinite(float(text))


def is_not_empty(value: Any) -> bool:
    return as_text(value) != ""


def is_boolean(value: Any) -> bool:
    return as_text(value) in _BOOLEANS


def max_length(limit: int) -> Callable[[Any], bool]:
    def check(value: Any) -> bool:
        return len(as_text(value)) <= limit

    return check


def is_positive(value: Any) -> bool:
    if isinstance(value, (bool, int, float)):
        return value > 0
    if isinstance(value, str):
        raw = value.strip()
        if not raw:
            return False
        try:
            number = float(raw)
        except ValueError:
            return False
        return not math.isnan(number) and number > 0
    return False


@dataclass(frozen=True)
class Rule:
    location: str
    field: str
    predicate: Callable[[Any], bool]
    message: str

    def check(self, sources: dict[str, dict[str, Any]]) -> dict[str, str] | None:
        value = sources.get(self.location, {}).get(self.field)
        if self.predicate(value):
            return None
        return {"field": self.field, "message": self.message, "location": self.location}


def param(field: str, predicate: Callable[[Any], bool], message: str) -> Rule:
    return Rule("params", field, predicate, message)


def body(field: str, predicate: Callable[[Any], bool], message: str) -> Rule:
    return Rule("body", field, predicate, message)


ID_RULES: tuple[Rule, ...] = (
    param("id", is_int, "Invalid ID"),
)

CREATE_RULES: tuple[Rule, ...] = (
    body("name", is_not_empty, "Product name must be provided"),
    body("name", max_length(NAME_MAX_LENGTH), f"Product name must be at most {NAME_MAX_LENGTH} characters"),
    body("price", is_numeric, "Price must be a number"),
    body("price", is_positive, "Price must be a positive number"),
    body("price", is_not_empty, "Product price must be provided"),
)

UPDATE_RULES: tuple[Rule, ...] = ID_RULES + CREATE_RULES + (
    body("availability", is_boolean, "Availability must be boolean"),
)


def run_rules(
    rules: tuple[Rule, ...],
    *,
    params: dict[str, Any] | None = None,
    payload: dict[str, Any] | None = None,
) -> list[dict[str, str]]:
    sources = {"params": params or {}, "body": payload or {}}
    errors: list[dict[str, str]] = []
    for rule in rules:
        error = rule.check(sources)
        if error is not None:
            errors.append(error)
    return errors


async def read_json_body(request: Request) -> dict[str, Any]:
    """
    Parse the request body as a JSON object. Anything else counts as an empty body.
    """
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        payload = json.loads(raw)
    except ValueError:
        logger.info("malformed_json_body path=%s", request.url.path)
        return {}
    return payload if isinstance(payload, dict) else {}


def _raise_if_invalid(
    rules: tuple[Rule, ...],
    *,
    params: dict[str, Any],
    payload: dict[str, Any],
) -> None:
    errors = run_rules(rules, params=params, payload=payload)
    if errors:
        raise ValidationFailedError(errors)


def _to_create(payload: dict[str, Any]) -> schemas.ProductCreate:
    return schemas.ProductCreate(
        name=as_text(payload["name"]),
        price=float(as_text(payload["price"])),
    )


async def validated_id(request: Request) -> int:
    params = dict(request.path_params)
    _raise_if_invalid(ID_RULES, params=params, payload={})
    return int(as_text(params["id"]))


async def validated_create(request: Request) -> schemas.ProductCreate:
    payload = await read_json_body(request)
    _raise_if_invalid(CREATE_RULES, params={}, payload=payload)
    return _to_create(payload)


async def validated_update(request: Request) -> tuple[int, schemas.ProductUpdate]:
    params = dict(request.path_params)
    payload = await read_json_body(request)
    _raise_if_invalid(UPDATE_RULES, params=params, payload=payload)
    base = _to_create(payload)
    update = schemas.ProductUpdate(
        name=base.name,
        price=base.price,
        availability=_BOOLEANS[as_text(payload["availability"])],
    )
    return int(as_text(params["id"])), update
