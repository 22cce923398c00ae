"""Thin HTTP client for the offers backend."""

from __future__ import annotations

import os
from typing import Any, Optional

import httpx

BASE_URL = os.environ.get("LISTINGS_API_URL", "http://localhost:8000")


class OfferRejected(Exception):
    """The backend answered 400 with a list of field errors."""

    def __init__(self, errors: list[dict[str, Any]]) -> None:
        super().__init__("; ".join(f"{e['fieldName']}: {e['errorMessage']}" for e in errors))
        self.errors = errors


def _url(path: str) -> str:
    return f"{BASE_URL}{path}"


def submit_offer(
    fields: dict[str, Any],
    avatar: Optional[tuple[str, bytes, str]] = None,
    preview: Optional[list[tuple[str, bytes, str]]] = None,
) -> dict[str, Any]:
    """POST an offer as multipart form data. Files are (filename, content, mimetype)."""
    files = []
    if avatar is not None:
        files.append(("avatar", avatar))
    for item in preview or []:
        files.append(("preview", item))

    resp = httpx.post(_url("/offers"), data=fields, files=files or None, timeout=10)
    if resp.status_code == 400 and isinstance(resp.json(), list):
        raise OfferRejected(resp.json())
    resp.raise_for_status()
    return resp.json()


def list_offers(skip: int = 0, limit: int = 20) -> dict[str, Any]:
    resp = httpx.get(_url("/offers"), params={"skip": skip, "limit": limit}, timeout=10)
    resp.raise_for_status()
    return resp.json()


def get_offer(date: int) -> dict[str, Any]:
    resp = httpx.get(_url(f"/offers/{date}"), timeout=10)
    resp.raise_for_status()
    return resp.json()


def avatar_url(date: int) -> str:
    return _url(f"/offers/{date}/avatar")


def seed_offers(count: int = 20) -> dict[str, Any]:
    resp = httpx.post(_url("/seed"), json={"count": count}, timeout=30)
    resp.raise_for_status()
    return resp.json()


def reset_and_seed(count: int = 20) -> dict[str, Any]:
    resp = httpx.post(_url("/seed/reset"), json={"count": count}, timeout=30)
    resp.raise_for_status()
    return resp.json()
