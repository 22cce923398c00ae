from __future__ import annotations

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from listings.offers.models import FieldError

_TITLES = {
    400: "Bad Request",
    404: "Not Found",
    409: "Conflict",
}


class ProblemDetail(BaseModel):
    """RFC 7807 Problem Details response."""

    type: str = "about:blank"
    title: str
    status: int
    detail: str
    instance: str | None = None
    errors: list[dict] | None = None


def rejection_response(errors: list[FieldError]) -> JSONResponse:
    """Offer validation failures go out as a bare list of field errors."""
    return JSONResponse(
        status_code=400,
        content=[e.model_dump(by_alias=True) for e in errors],
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    detail_parts = []
    error_list = []
    for err in exc.errors():
        loc = " -> ".join(str(part) for part in err["loc"] if part not in ("body", "query", "path"))
        detail_parts.append(f"{loc}: {err['msg']}")
        error_list.append({"field": loc, "message": err["msg"], "type": err["type"]})

    problem = ProblemDetail(
        type="urn:listings:error:validation",
        title="Validation Error",
        status=422,
        detail="; ".join(detail_parts),
        instance=str(request.url),
        errors=error_list,
    )
    return JSONResponse(status_code=422, content=problem.model_dump(exclude_none=True))


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    problem = ProblemDetail(
        title=_TITLES.get(exc.status_code, "Error"),
        status=exc.status_code,
        detail=str(exc.detail),
        instance=str(request.url),
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=problem.model_dump(exclude_none=True),
        headers=getattr(exc, "headers", None),
    )
