from __future__ import annotations

from enum import StrEnum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class OfferType(StrEnum):
    FLAT = "flat"
    HOUSE = "house"
    BUNGALOW = "bungalow"
    PALACE = "palace"


class Feature(StrEnum):
    WIFI = "wifi"
    DISHWASHER = "dishwasher"
    PARKING = "parking"
    WASHER = "washer"
    ELEVATOR = "elevator"
    CONDITIONER = "conditioner"


class ImageKind(StrEnum):
    AVATARS = "avatars"
    PREVIEWS = "previews"


class ErrorKind(StrEnum):
    REQUIRED = "Field is required"
    TITLE = "Title should be a string of allowed length"
    TYPE = "Type should be one of: flat, house, bungalow, palace"
    PRICE = "Price should be a number within the allowed range"
    ADDRESS = "Address should be a string of limited length"
    ROOMS = "Rooms should be a number within the allowed range"
    GUESTS = "Guests should be a non-negative number"
    CHECKIN = "Checkin should be a time in HH:MM format"
    CHECKOUT = "Checkout should be a time in HH:MM format"
    FEATURES = "Features should be unique values from the allowed list"
    LOCATION = "Location should contain numeric x and y"
    IMAGES = "Images should have an image mimetype"


class FieldError(BaseModel):
    """A single field-addressable validation error."""

    error: str = "Validation Error"
    field_name: str = Field(serialization_alias="fieldName")
    error_message: str = Field(serialization_alias="errorMessage")

    model_config = ConfigDict(frozen=True)

    @classmethod
    def of(cls, field_name: str, kind: ErrorKind) -> FieldError:
        return cls(field_name=field_name, error_message=kind.value)

    @property
    def kind(self) -> ErrorKind:
        return ErrorKind(self.error_message)


class Location(BaseModel):
    x: Union[int, float]
    y: Union[int, float]


class ImageRef(BaseModel):
    """Stored image reference. Binary content lives in the image store."""

    name: str
    mimetype: str


class ImageUpload(BaseModel):
    """Uploaded file descriptor as decoded from a multipart request."""

    filename: str
    mimetype: str
    file: Any = Field(default=None, exclude=True, repr=False)


class RawSubmission(BaseModel):
    """Uniform shape of a write request, whatever its wire encoding."""

    fields: dict[str, Any] = Field(default_factory=dict)
    avatar: Optional[ImageUpload] = None
    preview: list[ImageUpload] = Field(default_factory=list)


class Offer(BaseModel):
    """Canonical offer record, immutable once built."""

    date: int
    name: str
    title: str
    type: OfferType
    price: int
    address: str
    rooms: int
    guests: Optional[int] = None
    checkin: str
    checkout: str
    features: list[Feature] = Field(default_factory=list)
    location: Optional[Location] = None
    avatar: Optional[ImageRef] = None
    preview: Optional[list[ImageRef]] = None

    model_config = ConfigDict(frozen=True)

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)
