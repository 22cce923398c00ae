from __future__ import annotations

import random
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import FileResponse, JSONResponse
from pydantic import BaseModel

from listings.api.errors import rejection_response
from listings.api.submission import read_submission
from listings.db.database import get_all_offers, get_offer, init_db
from listings.images.store import ImageStore, get_avatar_store, get_preview_store
from listings.offers.config import load_config
from listings.offers.models import ImageRef, Offer
from listings.offers.pipeline import Conflict, Rejected, process_offer

router = APIRouter(prefix="/offers", tags=["offers"])


class OffersPage(BaseModel):
    data: list[Offer]
    total: int
    skip: int
    limit: int


@router.post(
    "",
    response_model=Offer,
    response_model_exclude_none=True,
    status_code=200,
    responses={400: {"description": "Validation errors"}, 409: {"description": "Date conflict"}},
)
async def create_offer(
    request: Request,
    avatars: ImageStore = Depends(get_avatar_store),
    previews: ImageStore = Depends(get_preview_store),
) -> Offer | JSONResponse:
    """Validate a JSON or multipart submission and store it as an offer."""
    init_db()
    async with read_submission(request) as submission:
        result = process_offer(
            submission,
            avatars,
            previews,
            rules=load_config(),
            rng=random.Random(),
        )

    if isinstance(result, Rejected):
        return rejection_response(result.errors)
    if isinstance(result, Conflict):
        raise HTTPException(
            status_code=409, detail=f"Offer with date {result.date} already exists"
        )
    return result.offer


@router.get("", response_model=OffersPage, response_model_exclude_none=True)
async def list_offers(
    skip: int = Query(default=0, ge=0),
    limit: Optional[int] = Query(default=None, ge=0),
) -> OffersPage:
    """Page through offers, newest first. `total` is the size of the returned page."""
    if limit is None:
        limit = load_config().page_size
    init_db()
    page = get_all_offers()[skip : skip + limit]
    return OffersPage(data=page, total=len(page), skip=skip, limit=limit)


def _require_offer(date: int) -> Offer:
    init_db()
    offer = get_offer(date)
    if offer is None:
        raise HTTPException(status_code=404, detail=f"Offer {date} not found")
    return offer


def _image_response(store: ImageStore, ref: Optional[ImageRef]) -> FileResponse:
    if ref is None:
        raise HTTPException(status_code=404, detail="Image not found")
    path = store.path_for(ref)
    if not path.exists():
        raise HTTPException(status_code=404, detail="Image not found")
    return FileResponse(path, media_type=ref.mimetype)


@router.get("/{date}", response_model=Offer, response_model_exclude_none=True)
async def read_offer(date: int) -> Offer:
    return _require_offer(date)


@router.get("/{date}/avatar")
async def read_avatar(
    date: int, avatars: ImageStore = Depends(get_avatar_store)
) -> FileResponse:
    return _image_response(avatars, _require_offer(date).avatar)


@router.get("/{date}/preview/{index}")
async def read_preview(
    date: int, index: int, previews: ImageStore = Depends(get_preview_store)
) -> FileResponse:
    preview = _require_offer(date).preview or []
    ref = preview[index] if 0 <= index < len(preview) else None
    return _image_response(previews, ref)
