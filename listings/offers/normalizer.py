from __future__ import annotations

import random
import re
from collections.abc import Mapping
from typing import Any, Optional

from listings.offers.config import OfferRules
from listings.offers.models import ImageRef, Location, Offer
from listings.offers.validators import (
    coerce_features,
    is_missing,
    parse_integer,
    parse_number,
)

ADDRESS_COORDINATES = re.compile(r"\s*(-?[0-9]+(?:\.[0-9]+)?)\s*,\s*(-?[0-9]+(?:\.[0-9]+)?)\s*")


def pick_name(names: list[str], rng: random.Random) -> str:
    """Pick a fallback author name from the pool."""
    return rng.choice(names)


def resolve_name(value: Any, names: list[str], rng: random.Random) -> str:
    if isinstance(value, str) and not is_missing(value):
        return value
    return pick_name(names, rng)


def location_from_address(address: str) -> Optional[Location]:
    """Addresses written as "x, y" double as map coordinates."""
    match = ADDRESS_COORDINATES.fullmatch(address)
    if match is None:
        return None
    return Location(x=parse_number(match.group(1)), y=parse_number(match.group(2)))


def resolve_location(value: Any, address: str) -> Optional[Location]:
    if isinstance(value, Mapping):
        return Location(x=parse_number(value["x"]), y=parse_number(value["y"]))
    return location_from_address(address)


def build_offer(
    fields: Mapping[str, Any],
    date: int,
    rules: OfferRules,
    rng: random.Random,
    avatar: Optional[ImageRef] = None,
    preview: Optional[list[ImageRef]] = None,
) -> Offer:
    """Build the canonical offer from fields that already passed validation."""
    guests = fields.get("guests")
    return Offer(
        date=date,
        name=resolve_name(fields.get("name"), rules.names, rng),
        title=fields["title"],
        type=fields["type"],
        price=parse_integer(fields["price"]),
        address=fields["address"],
        rooms=parse_integer(fields["rooms"]),
        guests=None if is_missing(guests) else parse_integer(guests),
        checkin=fields["checkin"],
        checkout=fields["checkout"],
        features=coerce_features(fields.get("features")),
        location=resolve_location(fields.get("location"), fields["address"]),
        avatar=avatar,
        preview=preview or None,
    )
