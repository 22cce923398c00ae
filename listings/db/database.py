from __future__ import annotations

import json
import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from listings.offers.models import Offer

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path(__file__).resolve().parent.parent.parent / "data" / "listings.db"

SCHEMA = """
CREATE TABLE IF NOT EXISTS offers (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    date INTEGER NOT NULL UNIQUE,
    document TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS offers_date_desc ON offers (date DESC);
"""


class DuplicateDateError(Exception):
    """Raised when an offer with the same date is already stored."""

    def __init__(self, date: int) -> None:
        super().__init__(f"Offer with date {date} already exists")
        self.date = date


def _db_path() -> Path:
    env = os.environ.get("LISTINGS_DB_PATH")
    if env:
        return Path(env)
    return DEFAULT_DB_PATH


@contextmanager
def get_conn(db_path: Path | None = None) -> Generator[sqlite3.Connection, None, None]:
    path = db_path or _db_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def init_db(db_path: Path | None = None) -> None:
    with get_conn(db_path) as conn:
        conn.executescript(SCHEMA)


# ---------------------------------------------------------------------------
# Offer CRUD
# ---------------------------------------------------------------------------


def save_offer(offer: Offer, db_path: Path | None = None) -> None:
    """Insert one offer. The UNIQUE index on date makes the insert the arbiter."""
    try:
        with get_conn(db_path) as conn:
            conn.execute(
                "INSERT INTO offers (date, document) VALUES (?, ?)",
                (offer.date, json.dumps(offer.to_document())),
            )
    except sqlite3.IntegrityError as exc:
        logger.warning("Rejected duplicate offer date %s", offer.date)
        raise DuplicateDateError(offer.date) from exc


def get_offer(date: int, db_path: Path | None = None) -> Offer | None:
    with get_conn(db_path) as conn:
        row = conn.execute(
            "SELECT document FROM offers WHERE date = ?", (date,)
        ).fetchone()
        if row is None:
            return None
        return _row_to_offer(row)


def get_all_offers(db_path: Path | None = None) -> list[Offer]:
    with get_conn(db_path) as conn:
        rows = conn.execute(
            "SELECT document FROM offers ORDER BY date DESC"
        ).fetchall()
        return [_row_to_offer(r) for r in rows]


def _row_to_offer(row: sqlite3.Row) -> Offer:
    # Only the document column is read, so the row id never reaches callers.
    return Offer.model_validate(json.loads(row["document"]))


def count_offers(db_path: Path | None = None) -> int:
    with get_conn(db_path) as conn:
        return conn.execute("SELECT COUNT(*) FROM offers").fetchone()[0]


# ---------------------------------------------------------------------------
# Reset
# ---------------------------------------------------------------------------


def reset_db(db_path: Path | None = None) -> None:
    with get_conn(db_path) as conn:
        conn.execute("DELETE FROM offers")
