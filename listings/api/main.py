from __future__ import annotations

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from listings.api.errors import http_exception_handler, validation_exception_handler
from listings.api.routes_offers import router as offers_router
from listings.api.routes_seed import router as seed_router

app = FastAPI(
    title="Listings",
    version="0.1.0",
    description="Offer submission, validation and paginated reads for a listing service",
)

app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.include_router(offers_router)
app.include_router(seed_router)


@app.get("/health")
async def health() -> dict:
    return {"status": "ok"}
