from decimal import Decimal
from pydantic import BaseModel, Field, field_validator

class OrderCreate(BaseModel):
    customer_name: str = Field(min_length=1, max_length=200)
    total_amount: Decimal = Field(default=Decimal("0"), ge=0, max_digits=18, decimal_places=2)

    @field_validator("customer_name")
    @classmethod
    def customer_name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("customer_name must not be blank")
        return v

class OrderOut(BaseModel):
    id: int
    customer_name: str
    total_amount: Decimal
