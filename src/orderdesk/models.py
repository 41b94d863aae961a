from datetime import datetime
from datetime import timezone
import enum

from sqlalchemy import Column
from sqlalchemy import DateTime
from sqlalchemy import Enum
from sqlalchemy import Float
from sqlalchemy import ForeignKey
from sqlalchemy import Integer
from sqlalchemy import String
from sqlalchemy.orm import relationship
from sqlalchemy.orm import selectinload

from orderdesk.db import Base


def utcnow():
    return datetime.now(timezone.utc)


class OrderStatus(str, enum.Enum):
    PENDING = "PENDING"
    DELIVERED = "DELIVERED"
    CANCELED = "CANCELED"


class UserRole(str, enum.Enum):
    USER = "USER"
    ADMIN = "ADMIN"


class Customer(Base):
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)
    phone = Column(String(20), nullable=True)
    address = Column(String(150), nullable=True)
    address_number = Column(String(10), nullable=True)
    complement = Column(String(20), nullable=True)
    zip = Column(String(10), nullable=True)
    recipient = Column(String(100), nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    orders = relationship("Order", back_populates="customer")


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    order_products = relationship("OrderProduct", back_populates="product")


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    role = Column(Enum(UserRole, name="user_role"), default=UserRole.USER, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    oauth_provider = Column(String, nullable=True)
    oauth_id = Column(String, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    orders = relationship("Order", back_populates="user")


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True)
    date = Column(DateTime, nullable=False)
    # Times of day, stored on 1970-01-01
    max_time_delivery = Column(DateTime, nullable=True)
    min_time_delivery = Column(DateTime, nullable=True)
    order_status = Column(Enum(OrderStatus, name="order_status"), nullable=False)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    customer = relationship("Customer", back_populates="orders")
    user = relationship("User", back_populates="orders")
    order_products = relationship("OrderProduct", back_populates="order")

    @staticmethod
    def with_details(db):
        """All orders with their customer and line items (and each item's product)."""
        return (
            db.query(Order)
            .options(
                selectinload(Order.customer),
                selectinload(Order.order_products).selectinload(OrderProduct.product),
            )
            .order_by(Order.id)
            .all()
        )


class OrderProduct(Base):
    __tablename__ = "order_products"

    id = Column(Integer, primary_key=True)
    quantity = Column(Integer, nullable=False)
    price = Column(Float, nullable=False)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    product = relationship("Product", back_populates="order_products")
    order = relationship("Order", back_populates="order_products")
