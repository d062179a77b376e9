"""Payment schemas for request/response validation."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from pos.schemas.common import Meta

PaymentType = Literal["CASH", "E-WALLET", "EDC"]


class PaymentCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    type: PaymentType
    logo: str | None = Field(None, max_length=500)


class PaymentUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    type: PaymentType | None = None
    logo: str | None = Field(None, max_length=500)


class Payment(BaseModel):
    """Payment method as returned by repositories and stored in the cache."""

    id: int
    name: str
    type: PaymentType
    logo: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class PaymentResponse(BaseModel):
    id: int
    name: str
    type: PaymentType
    logo: str | None

    @classmethod
    def from_domain(cls, payment: Payment | None) -> "PaymentResponse | None":
        if payment is None:
            return None
        return cls(id=payment.id, name=payment.name, type=payment.type, logo=payment.logo)


class PaymentListResponse(BaseModel):
    meta: Meta
    payments: list[PaymentResponse]
