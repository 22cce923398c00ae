from __future__ import annotations

import logging
import random
from pathlib import Path
from typing import Any, Optional

from listings.db.database import init_db, reset_db, save_offer
from listings.offers.config import OfferRules, load_config
from listings.offers.models import Feature, OfferType
from listings.offers.normalizer import build_offer
from listings.offers.pipeline import now_ms
from listings.offers.validators import validate_fields

logger = logging.getLogger(__name__)

WEEK_MS = 7 * 24 * 60 * 60 * 1000

SAMPLE_TITLES = [
    "Large comfortable flat in the very centre of the city",
    "Small cosy flat next to the central park and museum",
    "Spacious palace with a garden, fountain and old trees",
    "Tiny quiet bungalow on the river bank with a sunny porch",
    "Family house with a yard in a calm residential district",
    "Affordable flat near the railway station and shopping area",
    "Unusual old house with wooden floors and a fireplace",
    "Bright bungalow a few minutes away from the sea beach",
]

CHECK_TIMES = ["12:00", "13:00", "14:00"]


def generate_random_fields(rng: random.Random, rules: OfferRules) -> dict[str, Any]:
    """Generate raw fields for a random but valid offer."""
    x = rng.randint(300, 900)
    y = rng.randint(150, 500)
    features = rng.sample(list(Feature), rng.randint(0, len(Feature)))
    return {
        "title": rng.choice(SAMPLE_TITLES),
        "type": rng.choice(list(OfferType)).value,
        "price": rng.randint(max(rules.min_price, 1000), min(rules.max_price, 1_000_000)),
        "address": f"{x}, {y}",
        "rooms": rng.randint(max(rules.min_rooms, 1), min(rules.max_rooms, 5)),
        "guests": rng.randint(1, 10),
        "checkin": rng.choice(CHECK_TIMES),
        "checkout": rng.choice(CHECK_TIMES),
        "features": [f.value for f in features],
    }


def seed_offers(
    count: int = 20,
    db_path: Optional[Path] = None,
    rng: Optional[random.Random] = None,
) -> list[int]:
    """Generate and store N random offers dated within the last week. Returns their dates."""
    init_db(db_path)
    rng = rng or random.Random()
    rules = load_config()
    now = now_ms()
    offsets = rng.sample(range(WEEK_MS), count)
    dates: list[int] = []

    for offset in offsets:
        fields = generate_random_fields(rng, rules)
        errors = validate_fields(fields, rules)
        if errors:
            raise ValueError(f"Generated offer is invalid: {errors}")
        offer = build_offer(fields, date=now - offset, rules=rules, rng=rng)
        save_offer(offer, db_path)
        dates.append(offer.date)

    logger.info("Seeded %d offers", len(dates))
    return sorted(dates, reverse=True)


def reset_and_seed(
    count: int = 20,
    db_path: Optional[Path] = None,
    rng: Optional[random.Random] = None,
) -> list[int]:
    """Reset the database and seed with fresh data."""
    init_db(db_path)
    reset_db(db_path)
    return seed_offers(count, db_path=db_path, rng=rng)
