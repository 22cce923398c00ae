from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent.parent / "config" / "offers.json"


class OfferRules(BaseModel):
    """Bounds and vocabularies applied to incoming offers."""

    min_title: int = 30
    max_title: int = 140
    min_price: int = 1
    max_price: int = 100_000
    max_address_length: int = 100
    min_rooms: int = 0
    max_rooms: int = 1000
    page_size: int = Field(default=20, ge=1)
    names: list[str] = Field(
        default_factory=lambda: [
            "Keks",
            "Pavel",
            "Nikolay",
            "Alex",
            "Ulyana",
            "Anya",
            "Alexey",
            "Sergey",
            "Pushok",
        ],
        min_length=1,
    )
    image_mimetypes: list[str] = Field(
        default_factory=lambda: ["image/png", "image/jpeg", "image/gif", "image/webp"]
    )


def load_config(path: Optional[str | Path] = None) -> OfferRules:
    """Load offer rules from a JSON file. Falls back to built-in defaults."""
    if path is None:
        env = os.environ.get("LISTINGS_CONFIG_PATH")
        path = Path(env) if env else DEFAULT_CONFIG_PATH
    else:
        path = Path(path)

    if not path.exists():
        return OfferRules()

    with open(path) as f:
        raw = json.load(f)
    return OfferRules(**raw)
