# app/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel
from typing import Annotated, List
from decimal import Decimal
from datetime import datetime

#kwoty w JSON jako liczby (199.99), w Pythonie Decimal
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class ApiModel(BaseModel):
    """Bazowy schema: camelCase w JSON, snake_case w Pythonie (oba przyjmowane na wejsciu)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class UserCreate(ApiModel):
    """Schema dla rejestracji."""

    username: str = Field(..., min_length=1, max_length=150)
    password: str = Field(..., min_length=1, max_length=72)


class UserRead(ApiModel):
    """Schema dla uzytkownika (response), bez hasla."""

    id: int
    username: str


class LoginIn(ApiModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class TokenOut(ApiModel):
    token: str


class CategoryOut(ApiModel):
    id: int
    name: str


class ProductOut(ApiModel):
    id: int
    category_id: int
    title: str
    price: Money
    description: str | None = None
    availability: bool


class ItemIn(ApiModel):
    """Schema dla dodawania produktu do koszyka."""

    product_id: int = Field(..., gt=0, description="ID produktu (musi być > 0)")
    quantity: int = Field(1, gt=0, description="Ilość produktu (musi być > 0)")


class QuantityIn(ApiModel):
    """Schema dla zmiany ilosci (PUT /cart/{product_id})."""

    quantity: int = Field(..., gt=0)


class CartItemOut(ApiModel):
    product_id: int
    quantity: int
    product: ProductOut


class CartOut(ApiModel):
    """Schema dla koszyka (response)."""

    cart_id: int
    user_id: int
    items: List[CartItemOut]
    total: Money


class OrderLineOut(ApiModel):
    product_id: int
    quantity: int
    unit_price: Money
    product: ProductOut


class OrderOut(ApiModel):
    """Schema dla zamówienia (response)."""

    id: int
    user_id: int
    status: str
    total: Money
    created_at: datetime
    lines: List[OrderLineOut]


class OrderCreatedOut(ApiModel):
    order_id: int
    status: str
