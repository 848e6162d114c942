"""
Pydantic models for product data.

``ProductCreate`` validates the body of a create request.  The only
requirement is that all six keys are present; ``unitCost`` and
``totalSales`` must also not be ``null``.  Values may be falsy, and
the text fields accept any JSON value.  Numeric fields are coerced the
way a loose number conversion would: ``"10"`` becomes ``10``, ``""``,
``null`` and ``false`` become ``0``, ``true`` becomes ``1``.  Values
that are not numbers at all (``"cheap"``, lists, objects, infinities)
are rejected.

Responses wrap stored products in the ``{"status": "success", ...}``
envelope.  Stored products are passed through as plain dictionaries
because updates may add fields or change their types.
"""

import math
from typing import Any, Dict, List, Union

from pydantic import BaseModel, Field, field_validator

Number = Union[int, float]


def to_number(value: Any) -> Number:
    """Coerce a JSON value to a finite number, raising ``ValueError`` otherwise."""
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        try:
            number = int(text)
        except ValueError:
            number = float(text)
    else:
        raise ValueError("must be a number")
    if isinstance(number, float) and not math.isfinite(number):
        raise ValueError("must be a finite number")
    return number


class ProductCreate(BaseModel):
    """Schema for creating a product."""

    name: Any = Field(..., examples=["Laptop"])
    unitCost: Number = Field(..., examples=[1000])
    totalSales: Number = Field(..., examples=[1500])
    inventory: Number = Field(..., examples=[20])
    description: Any = Field(..., examples=["14 inch ultrabook"])
    imageUrl: Any = Field(..., examples=["https://example.com/laptop.jpg"])

    model_config = {
        "extra": "ignore",
    }

    @field_validator("unitCost", "totalSales", mode="before")
    @classmethod
    def required_number(cls, value: Any) -> Number:
        if value is None:
            raise ValueError("is required")
        return to_number(value)

    @field_validator("inventory", mode="before")
    @classmethod
    def coerce_number(cls, value: Any) -> Number:
        return to_number(value)


class ProductListResponse(BaseModel):
    status: str = "success"
    dataCount: int
    data: List[Dict[str, Any]]


class ProductResponse(BaseModel):
    status: str = "success"
    data: Dict[str, Any]


class MessageData(BaseModel):
    message: str


class MessageResponse(BaseModel):
    status: str = "success"
    data: MessageData
