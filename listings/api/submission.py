"""Decode JSON and multipart write requests into one RawSubmission shape."""

from __future__ import annotations

import json
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

from fastapi import HTTPException, Request
from starlette.datastructures import FormData, UploadFile

from listings.offers.models import ImageUpload, RawSubmission

FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")

# Fields read from a form; anything else in the request is ignored.
FORM_FIELDS = (
    "name",
    "title",
    "type",
    "price",
    "address",
    "rooms",
    "guests",
    "checkin",
    "checkout",
)


def _to_upload(value: Any) -> Optional[ImageUpload]:
    # Browsers send an empty part with a blank filename for untouched file inputs.
    if not isinstance(value, UploadFile) or not value.filename:
        return None
    return ImageUpload(
        filename=value.filename,
        mimetype=value.content_type or "application/octet-stream",
        file=value.file,
    )


def submission_from_form(form: FormData) -> RawSubmission:
    fields: dict[str, Any] = {}
    for name in FORM_FIELDS:
        value = form.get(name)
        if isinstance(value, str):
            fields[name] = value
    features = [v for v in form.getlist("features") if isinstance(v, str) and v]
    if features:
        fields["features"] = features

    preview = [_to_upload(v) for v in form.getlist("preview")]
    return RawSubmission(
        fields=fields,
        avatar=_to_upload(form.get("avatar")),
        preview=[p for p in preview if p is not None],
    )


def submission_from_json(body: bytes) -> RawSubmission:
    if not body.strip():
        return RawSubmission()
    try:
        data = json.loads(body)
    except ValueError:
        raise HTTPException(status_code=400, detail="Request body is not valid JSON")
    if not isinstance(data, dict):
        raise HTTPException(status_code=400, detail="Request body must be a JSON object")
    return RawSubmission(fields=data)


@asynccontextmanager
async def read_submission(request: Request) -> AsyncIterator[RawSubmission]:
    """Yield the decoded submission; uploaded temp files are closed on exit."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPES):
        async with request.form() as form:
            yield submission_from_form(form)
    else:
        yield submission_from_json(await request.body())
