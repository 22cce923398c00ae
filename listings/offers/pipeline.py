from __future__ import annotations

import logging
import random
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Literal, Optional, Union

from pydantic import BaseModel

from listings.db.database import DuplicateDateError, save_offer
from listings.images.store import ImageStore
from listings.offers.config import OfferRules, load_config
from listings.offers.images import check_images
from listings.offers.models import FieldError, ImageRef, Offer, RawSubmission
from listings.offers.normalizer import build_offer
from listings.offers.validators import validate_fields

logger = logging.getLogger(__name__)


class Accepted(BaseModel):
    status: Literal["accepted"] = "accepted"
    offer: Offer


class Rejected(BaseModel):
    status: Literal["rejected"] = "rejected"
    errors: list[FieldError]


class Conflict(BaseModel):
    """Persistence failed because the generated date is already taken."""

    status: Literal["conflict"] = "conflict"
    date: int


PipelineResult = Union[Accepted, Rejected, Conflict]


def now_ms() -> int:
    return int(datetime.now(timezone.utc).timestamp() * 1000)


def collect_errors(submission: RawSubmission, rules: OfferRules) -> list[FieldError]:
    """Field errors in schema order, then the shared images error if any."""
    errors = validate_fields(submission.fields, rules)
    image_error = check_images(submission.avatar, submission.preview, rules)
    if image_error is not None:
        errors.append(image_error)
    return errors


def _discard_images(
    avatar: Optional[ImageRef],
    preview: list[ImageRef],
    avatars: ImageStore,
    previews: ImageStore,
) -> None:
    if avatar is None and not preview:
        return
    if avatar is not None:
        avatars.remove(avatar)
    for ref in preview:
        previews.remove(ref)
    logger.warning("Discarded %d orphaned image(s)", len(preview) + (avatar is not None))


def process_offer(
    submission: RawSubmission,
    avatars: ImageStore,
    previews: ImageStore,
    rules: Optional[OfferRules] = None,
    rng: Optional[random.Random] = None,
    clock: Optional[Callable[[], int]] = None,
    db_path: Optional[Path] = None,
) -> PipelineResult:
    """Validate, normalize and persist one submission.

    Nothing is written, neither images nor the offer, unless every
    validator passes.
    """
    rules = rules or load_config()
    errors = collect_errors(submission, rules)
    if errors:
        logger.info(
            "Offer rejected: %s", ", ".join(e.field_name for e in errors)
        )
        return Rejected(errors=errors)

    date = (clock or now_ms)()
    avatar: Optional[ImageRef] = None
    preview: list[ImageRef] = []
    # Images stored so far are removed again on any failure below.
    try:
        if submission.avatar is not None:
            avatar = avatars.store(submission.avatar)
        for upload in submission.preview:
            preview.append(previews.store(upload))

        offer = build_offer(
            submission.fields,
            date=date,
            rules=rules,
            rng=rng or random.Random(),
            avatar=avatar,
            preview=preview,
        )
        save_offer(offer, db_path)
    except DuplicateDateError:
        _discard_images(avatar, preview, avatars, previews)
        return Conflict(date=date)
    except Exception:
        _discard_images(avatar, preview, avatars, previews)
        raise

    logger.info("Offer %s accepted: %s", offer.date, offer.title)
    return Accepted(offer=offer)
