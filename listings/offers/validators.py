from __future__ import annotations

import math
import re
from collections.abc import Mapping
from typing import Any, Callable, Optional, Union

from listings.offers.config import OfferRules
from listings.offers.models import ErrorKind, Feature, FieldError, OfferType

TIME_PATTERN = re.compile(r"([01]?\d|2[0-3]):[0-5]\d")
DECIMAL_PATTERN = re.compile(r"-?[0-9]+(\.[0-9]+)?")

_OFFER_TYPES = {t.value for t in OfferType}
_FEATURES = {f.value for f in Feature}


def is_missing(value: Any) -> bool:
    """Absent, null or blank string. Numeric zero counts as present."""
    if value is None:
        return True
    return isinstance(value, str) and value.strip() == ""


def parse_number(value: Any) -> Optional[Union[int, float]]:
    """Parse an int, float or plain decimal string. Returns None when not a finite number."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return int(value) if value.is_integer() else value
    if not isinstance(value, str):
        return None
    text = value.strip()
    if DECIMAL_PATTERN.fullmatch(text) is None:
        return None
    try:
        if "." not in text:
            return int(text)
        number = float(text)
    except (OverflowError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


def parse_integer(value: Any) -> Optional[int]:
    number = parse_number(value)
    return number if isinstance(number, int) else None


def coerce_features(value: Any) -> list[Any]:
    if is_missing(value):
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


# ---------------------------------------------------------------------------
# Per-field validators
# ---------------------------------------------------------------------------


def validate_title(value: Any, rules: OfferRules) -> Optional[FieldError]:
    if is_missing(value):
        return FieldError.of("title", ErrorKind.REQUIRED)
    if not isinstance(value, str) or not rules.min_title <= len(value) <= rules.max_title:
        return FieldError.of("title", ErrorKind.TITLE)
    return None


def validate_type(value: Any, rules: OfferRules) -> Optional[FieldError]:
    if is_missing(value):
        return FieldError.of("type", ErrorKind.REQUIRED)
    if not isinstance(value, str) or value not in _OFFER_TYPES:
        return FieldError.of("type", ErrorKind.TYPE)
    return None


def validate_price(value: Any, rules: OfferRules) -> Optional[FieldError]:
    if is_missing(value):
        return FieldError.of("price", ErrorKind.REQUIRED)
    price = parse_integer(value)
    if price is None or not rules.min_price <= price <= rules.max_price:
        return FieldError.of("price", ErrorKind.PRICE)
    return None


def validate_address(value: Any, rules: OfferRules) -> Optional[FieldError]:
    if is_missing(value):
        return FieldError.of("address", ErrorKind.REQUIRED)
    if not isinstance(value, str) or len(value) > rules.max_address_length:
        return FieldError.of("address", ErrorKind.ADDRESS)
    return None


def validate_rooms(value: Any, rules: OfferRules) -> Optional[FieldError]:
    if is_missing(value):
        return FieldError.of("rooms", ErrorKind.REQUIRED)
    rooms = parse_integer(value)
    if rooms is None or not rules.min_rooms <= rooms <= rules.max_rooms:
        return FieldError.of("rooms", ErrorKind.ROOMS)
    return None


def validate_guests(value: Any, rules: OfferRules) -> Optional[FieldError]:
    if is_missing(value):
        return None
    guests = parse_integer(value)
    if guests is None or guests < 0:
        return FieldError.of("guests", ErrorKind.GUESTS)
    return None


def _is_time(value: Any) -> bool:
    return isinstance(value, str) and TIME_PATTERN.fullmatch(value) is not None


def validate_checkin(value: Any, rules: OfferRules) -> Optional[FieldError]:
    if is_missing(value):
        return FieldError.of("checkin", ErrorKind.REQUIRED)
    if not _is_time(value):
        return FieldError.of("checkin", ErrorKind.CHECKIN)
    return None


def validate_checkout(value: Any, rules: OfferRules) -> Optional[FieldError]:
    if is_missing(value):
        return FieldError.of("checkout", ErrorKind.REQUIRED)
    if not _is_time(value):
        return FieldError.of("checkout", ErrorKind.CHECKOUT)
    return None


def validate_features(value: Any, rules: OfferRules) -> Optional[FieldError]:
    features = coerce_features(value)
    if not all(isinstance(f, str) and f in _FEATURES for f in features):
        return FieldError.of("features", ErrorKind.FEATURES)
    if len(set(features)) != len(features):
        return FieldError.of("features", ErrorKind.FEATURES)
    return None


def validate_location(value: Any, rules: OfferRules) -> Optional[FieldError]:
    if value is None:
        return None
    if not isinstance(value, Mapping):
        return FieldError.of("location", ErrorKind.LOCATION)
    if parse_number(value.get("x")) is None or parse_number(value.get("y")) is None:
        return FieldError.of("location", ErrorKind.LOCATION)
    return None


FieldValidator = Callable[[Any, OfferRules], Optional[FieldError]]

# Order here is the order errors are reported in.
FIELD_VALIDATORS: list[tuple[str, FieldValidator]] = [
    ("title", validate_title),
    ("type", validate_type),
    ("price", validate_price),
    ("address", validate_address),
    ("rooms", validate_rooms),
    ("guests", validate_guests),
    ("checkin", validate_checkin),
    ("checkout", validate_checkout),
    ("features", validate_features),
    ("location", validate_location),
]


def validate_fields(fields: Mapping[str, Any], rules: OfferRules) -> list[FieldError]:
    """Run every field validator. Never short-circuits; unknown fields are ignored."""
    errors: list[FieldError] = []
    for name, validator in FIELD_VALIDATORS:
        error = validator(fields.get(name), rules)
        if error is not None:
            errors.append(error)
    return errors
