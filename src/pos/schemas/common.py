"""Shared response envelopes."""

from decimal import Decimal
from typing import Annotated, Generic, TypeVar

from pydantic import BaseModel, PlainSerializer

T = TypeVar("T")

# Money stays Decimal in memory and in the cache; only the wire format is numeric
Money = Annotated[
    Decimal,
    PlainSerializer(lambda v: float(round(v, 2)), return_type=float, when_used="json"),
]


class Response(BaseModel, Generic[T]):
    """Success envelope."""

    success: bool = True
    message: str = "Success"
    data: T | None = None


class ErrorResponse(BaseModel):
    """Error envelope."""

    success: bool = False
    messages: list[str]


class Meta(BaseModel):
    """Pagination metadata for list responses."""

    total: int
    limit: int
    skip: int
