from __future__ import annotations

from typing import Optional

from listings.offers.config import OfferRules
from listings.offers.models import ErrorKind, FieldError, ImageUpload


def is_image(upload: ImageUpload, rules: OfferRules) -> bool:
    return upload.mimetype.lower() in rules.image_mimetypes


def check_images(
    avatar: Optional[ImageUpload],
    preview: list[ImageUpload],
    rules: OfferRules,
) -> Optional[FieldError]:
    """Return one shared images error if any attachment is not an allowed image."""
    uploads = ([avatar] if avatar is not None else []) + list(preview)
    if all(is_image(u, rules) for u in uploads):
        return None
    return FieldError.of("images", ErrorKind.IMAGES)
