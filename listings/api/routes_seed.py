from __future__ import annotations

from pydantic import BaseModel, Field

from fastapi import APIRouter

from listings.offers.seed import reset_and_seed, seed_offers

router = APIRouter(tags=["seed"])


class SeedRequest(BaseModel):
    count: int = Field(default=20, ge=1, le=500)


class SeedResponse(BaseModel):
    generated: int
    dates: list[int]


@router.post("/seed", response_model=SeedResponse, status_code=201)
async def seed_data(request: SeedRequest) -> SeedResponse:
    """Generate random offers for demo purposes."""
    dates = seed_offers(count=request.count)
    return SeedResponse(generated=len(dates), dates=dates)


@router.post("/seed/reset", response_model=SeedResponse, status_code=201)
async def reset_and_seed_data(request: SeedRequest) -> SeedResponse:
    """Wipe stored offers and seed fresh random ones."""
    dates = reset_and_seed(count=request.count)
    return SeedResponse(generated=len(dates), dates=dates)
