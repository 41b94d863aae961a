# schemas.py
from datetime import datetime
from typing import Optional

from pydantic import AliasChoices
from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import EmailStr
from pydantic import Field
from pydantic import field_validator
from pydantic import model_validator
from pydantic.alias_generators import to_camel

from orderdesk.models import OrderStatus
from orderdesk.models import UserRole
from orderdesk.utils import convert_time
from orderdesk.utils import validate_time


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class RequestModel(CamelModel):
    @model_validator(mode="after")
    def reject_explicit_nulls(self):
        # Optional means "may be left out", not "may be null".
        fields = type(self).model_fields
        nulls = sorted(
            fields[name].alias or name
            for name in self.model_fields_set
            if getattr(self, name) is None
        )
        if nulls:
            raise ValueError(f"Fields may not be null: {', '.join(nulls)}")
        return self


# === Customers ===


class CustomerCreate(RequestModel):
    name: str = Field(max_length=100)
    phone: Optional[str] = Field(default=None, max_length=20)
    address: Optional[str] = Field(default=None, max_length=150)
    address_number: Optional[str] = Field(default=None, max_length=10)
    complement: Optional[str] = Field(default=None, max_length=20)
    zip: Optional[str] = Field(default=None, max_length=10)
    recipient: Optional[str] = Field(default=None, max_length=100)


class CustomerPatch(CustomerCreate):
    name: Optional[str] = Field(default=None, max_length=100)


class CustomerRead(CamelModel):
    id: int
    name: str
    phone: Optional[str] = None
    address: Optional[str] = None
    address_number: Optional[str] = None
    complement: Optional[str] = None
    zip: Optional[str] = None
    recipient: Optional[str] = None
    created_at: datetime


# === Products ===


class ProductCreate(RequestModel):
    name: str


class ProductPatch(RequestModel):
    name: Optional[str] = None


class ProductRead(CamelModel):
    id: int
    name: str
    created_at: datetime


# === Users ===


class UserCreate(RequestModel):
    name: str
    role: UserRole
    email: EmailStr
    password: str
    oauth_provider: Optional[str] = None
    oauth_id: Optional[str] = None


class UserPatch(RequestModel):
    name: Optional[str] = None
    role: Optional[UserRole] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = None
    oauth_provider: Optional[str] = None
    oauth_id: Optional[str] = None


class UserRead(CamelModel):
    id: int
    name: str
    role: UserRole
    email: str
    oauth_provider: Optional[str] = None
    oauth_id: Optional[str] = None
    created_at: datetime


# === Orders ===


class DeliveryWindow(RequestModel):
    max_time_delivery: Optional[datetime] = None
    min_time_delivery: Optional[datetime] = None

    @field_validator("max_time_delivery", "min_time_delivery", mode="before")
    @classmethod
    def parse_time_of_day(cls, v):
        if v is None:
            return v
        if not isinstance(v, str) or not validate_time(v):
            raise ValueError("Invalid time format")
        return convert_time(v)


class OrderCreate(DeliveryWindow):
    date: datetime
    order_status: OrderStatus
    customer_id: int
    user_id: int


class OrderPatch(DeliveryWindow):
    date: Optional[datetime] = None
    order_status: Optional[OrderStatus] = None
    customer_id: Optional[int] = None
    user_id: Optional[int] = None


class OrderRead(CamelModel):
    id: int
    date: datetime
    max_time_delivery: Optional[datetime] = None
    min_time_delivery: Optional[datetime] = None
    order_status: OrderStatus
    customer_id: int
    user_id: int
    created_at: datetime


# === Order line items ===


class OrderProductCreate(RequestModel):
    quantity: int
    price: float
    product_id: int
    order_id: int


class OrderProductPatch(RequestModel):
    quantity: Optional[int] = None
    price: Optional[float] = None
    product_id: Optional[int] = None
    order_id: Optional[int] = None


class OrderProductRead(CamelModel):
    id: int
    quantity: int
    price: float
    product_id: int
    order_id: int
    created_at: datetime


class OrderProductDetail(OrderProductRead):
    product: ProductRead


class OrderDetail(OrderRead):
    customer: CustomerRead
    order_products: list[OrderProductDetail] = Field(
        default_factory=list,
        validation_alias=AliasChoices("order_products", "orderProduct"),
        serialization_alias="orderProduct",
    )
