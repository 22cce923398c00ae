from __future__ import annotations

import logging
import os
import re
import shutil
import uuid
from pathlib import Path

from listings.offers.models import ImageKind, ImageRef, ImageUpload

logger = logging.getLogger(__name__)

DEFAULT_IMAGES_DIR = Path(__file__).resolve().parent.parent.parent / "data" / "images"

_SAFE_SUFFIX = re.compile(r"\.[a-z0-9]{1,5}")


def _images_root() -> Path:
    env = os.environ.get("LISTINGS_IMAGES_DIR")
    if env:
        return Path(env)
    return DEFAULT_IMAGES_DIR


class ImageStore:
    """Filesystem store for one kind of offer image (avatars or previews)."""

    def __init__(self, kind: ImageKind, root: Path | None = None) -> None:
        self.kind = kind
        self.directory = (root or _images_root()) / kind.value

    def store(self, upload: ImageUpload) -> ImageRef:
        self.directory.mkdir(parents=True, exist_ok=True)
        suffix = Path(upload.filename).suffix.lower()
        if not _SAFE_SUFFIX.fullmatch(suffix):
            suffix = ""
        name = f"{uuid.uuid4().hex}{suffix}"
        with open(self.directory / name, "wb") as out:
            if upload.file is not None:
                upload.file.seek(0)
                shutil.copyfileobj(upload.file, out)
        logger.debug("Stored %s image %s as %s", self.kind, upload.filename, name)
        return ImageRef(name=name, mimetype=upload.mimetype)

    def path_for(self, ref: ImageRef) -> Path:
        # Only the basename is trusted; references never address other directories.
        return self.directory / Path(ref.name).name

    def remove(self, ref: ImageRef) -> None:
        self.path_for(ref).unlink(missing_ok=True)


def get_avatar_store() -> ImageStore:
    return ImageStore(ImageKind.AVATARS)


def get_preview_store() -> ImageStore:
    return ImageStore(ImageKind.PREVIEWS)
