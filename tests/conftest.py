import asyncio
from datetime import datetime
import os

# Minimal values for tests
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("SSE_KEEP_ALIVE_INTERVAL", "0")

from httpx import ASGITransport  # noqa: E402
from httpx import AsyncClient  # noqa: E402
import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from orderdesk.app import app  # noqa: E402
from orderdesk.db import Base  # noqa: E402
from orderdesk.db import get_db  # noqa: E402
from orderdesk.event_broker import EventBroker  # noqa: E402
from orderdesk.hashing import hash_password  # noqa: E402
from orderdesk.models import Customer  # noqa: E402
from orderdesk.models import Order  # noqa: E402
from orderdesk.models import OrderProduct  # noqa: E402
from orderdesk.models import OrderStatus  # noqa: E402
from orderdesk.models import Product  # noqa: E402
from orderdesk.models import User  # noqa: E402
from orderdesk.models import UserRole  # noqa: E402
from orderdesk.utils import convert_time  # noqa: E402


class RecordingConnection:
    """In-memory connection that keeps every frame it is sent."""

    def __init__(self, fail=False, delay=0.0):
        self.frames = []
        self.attempts = 0
        self.fail = fail
        self.delay = delay
        self.closed = False

    async def send(self, frame):
        self.attempts += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail:
            raise ConnectionResetError("client went away")
        self.frames.append(frame)

    def close(self):
        self.closed = True


@pytest.fixture
def make_connection():
    return RecordingConnection


@pytest.fixture(scope="session")
def engine():
    test_engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    Base.metadata.create_all(test_engine)
    yield test_engine
    Base.metadata.drop_all(test_engine)


@pytest.fixture(scope="function")
def session(engine):
    connection = engine.connect()
    transaction = connection.begin()
    Session = sessionmaker(bind=connection)
    session = Session()
    yield session
    session.close()
    # A failed commit inside a route may already have rolled the outer transaction back
    if transaction.is_active:
        transaction.rollback()
    connection.close()


# ---- Override get_db to yield our test session ----
@pytest.fixture(autouse=True)
def override_get_db(session):
    def _override():
        yield session

    app.dependency_overrides[get_db] = _override
    yield
    app.dependency_overrides.pop(get_db, None)


# ---- Fresh broker per test, no keep-alive timers ----
@pytest.fixture(autouse=True)
def broker():
    previous = app.state.broker
    app.state.broker = EventBroker(keep_alive_interval=None, write_timeout=1.0)
    yield app.state.broker
    app.state.broker.close()
    app.state.broker = previous


# ---- HTTP client bound to the ASGI app ----
@pytest_asyncio.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def customer(session):
    customer = Customer(name="Ana Souza", phone="555-0101", address="Rua A", zip="01000-000")
    session.add(customer)
    session.commit()
    return customer


@pytest.fixture
def product(session):
    product = Product(name="Water 20L")
    session.add(product)
    session.commit()
    return product


@pytest.fixture
def user(session):
    user = User(
        name="Operator",
        role=UserRole.USER,
        email="operator@example.com",
        password_hash=hash_password("secret"),
    )
    session.add(user)
    session.commit()
    return user


@pytest.fixture
def order(session, customer, user):
    order = Order(
        date=datetime(2024, 5, 1, 8, 0),
        min_time_delivery=convert_time("09:00"),
        max_time_delivery=convert_time("12:30"),
        order_status=OrderStatus.PENDING,
        customer_id=customer.id,
        user_id=user.id,
    )
    session.add(order)
    session.commit()
    return order


@pytest.fixture
def order_product(session, order, product):
    item = OrderProduct(quantity=3, price=12.5, product_id=product.id, order_id=order.id)
    session.add(item)
    session.commit()
    return item
