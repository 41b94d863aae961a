from datetime import datetime
from datetime import timezone

from orderdesk.db import SessionLocal
from orderdesk.hashing import hash_password
from orderdesk.models import Customer
from orderdesk.models import Order
from orderdesk.models import OrderProduct
from orderdesk.models import OrderStatus
from orderdesk.models import Product
from orderdesk.models import User
from orderdesk.models import UserRole
from orderdesk.utils import convert_time


def seed(db):
    customer = Customer(name="Demo Customer", phone="555-0100", address="Main St", address_number="42")
    product = Product(name="Demo Product")
    user = User(
        name="Demo User",
        role=UserRole.ADMIN,
        email="demo@example.com",
        password_hash=hash_password("demo"),
    )
    db.add_all([customer, product, user])
    db.flush()

    order = Order(
        date=datetime.now(timezone.utc),
        min_time_delivery=convert_time("09:00"),
        max_time_delivery=convert_time("18:00"),
        order_status=OrderStatus.PENDING,
        customer_id=customer.id,
        user_id=user.id,
    )
    db.add(order)
    db.flush()

    db.add(OrderProduct(quantity=2, price=9.5, product_id=product.id, order_id=order.id))
    db.commit()
    return order


if __name__ == "__main__":
    db = SessionLocal()
    try:
        order = seed(db)
        print(f"Demo order created with id: {order.id}")
    finally:
        db.close()
