# backend/schemas/product.py
import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Optional, Union

from fastapi import UploadFile
from pydantic import AliasChoices, BaseModel, ConfigDict, Field


# Base configuration for ORM compatibility
class ORMBase(BaseModel):
    model_config = ConfigDict(from_attributes=True)


RawNumber = Union[str, int, float]

# Accepted request keys per field, highest priority first.
NAME_KEYS = ("Tic_Jum_Name", "Name", "name")
PRICE_KEYS = ("Tic_jum_Price_Unit", "Price", "price")
QUANTITY_KEYS = ("Tic_Jum_Qty_Stock", "Quantity", "quantity")
IMAGE_KEYS = ("Image", "Tic_Jum_Img_Path")


def is_supplied(value: Any) -> bool:
    return value is not None and value != ""


def to_number_or_none(value: Any) -> Optional[float]:
    """Coerce form input to a finite number; empty or unparseable input becomes None."""
    if not is_supplied(value):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def to_quantity_or_none(value: Any) -> Optional[int]:
    """Same coercion as prices, rounded half-up to a whole stock count."""
    number = to_number_or_none(value)
    if number is None:
        return None
    return int(Decimal(str(number)).quantize(Decimal(1), rounding=ROUND_HALF_UP))


# Canonical product request. Older clients send the table-specific column
# names, newer ones the short names; when several are present the first key
# in *_KEYS wins.
class ProductForm(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = Field(None, validation_alias=AliasChoices(*NAME_KEYS))
    price: Optional[RawNumber] = Field(None, validation_alias=AliasChoices(*PRICE_KEYS))
    quantity: Optional[RawNumber] = Field(None, validation_alias=AliasChoices(*QUANTITY_KEYS))
    image: Optional[UploadFile] = Field(None, validation_alias=AliasChoices(*IMAGE_KEYS))

    def clean_name(self) -> Optional[str]:
        if self.name is None:
            return None
        return self.name.strip() or None


# Public product representation, as the shop app reads it
class ProductOut(ORMBase):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    price: Optional[float] = None
    quantity: Optional[int] = None
    image_url: Optional[str] = Field(None, alias="imageUrl")


class ProductCreated(BaseModel):
    success: bool = True
    productId: int
    product: ProductOut


class ProductUpdated(BaseModel):
    success: bool = True
    product: ProductOut


class ProductDeleted(BaseModel):
    success: bool = True
    message: str

