from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from .models import DEFAULT_DESCRIPTION

class ProductIn(BaseModel):
    """
    Fields a client may write. Omitted fields take their default here,
    at deserialization time, so the mappers never fill anything in.
    """
    name: str = Field(min_length=1, max_length=200)
    description: str = Field(default=DEFAULT_DESCRIPTION, max_length=1000)
    price: Decimal = Field(default=Decimal("0"), ge=0, max_digits=18, decimal_places=2)
    # strict: a JSON true/false is not a quantity
    stock: int = Field(default=0, ge=0, strict=True)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("name must not be blank")
        return v

class ProductCreate(ProductIn):
    pass

class ProductUpdate(ProductIn):
    # PUT replaces every mutable field; id is only checked against the path
    id: Optional[int] = None

class ProductOut(BaseModel):
    # stock is internal and never leaves the service
    id: int
    name: str
    description: str
    price: Decimal
