import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret")

import time
import uuid
from datetime import date, datetime, timedelta, timezone

import pytest
from httpx import ASGITransport, AsyncClient

from app.main import app
from app.core.config import settings
from app.core.enums import UserRole
from app.core.redis import set_redis
from app.core.security import create_access_token, hash_password
from app.db.session import Database
from app.db.store import EntityStore
from app.models.user import User
from app.services.entities import (
    carrier_service,
    customer_service,
    dispatch_service,
    followup_service,
    invoice_service,
    lead_service,
    order_service,
    quote_service,
)

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class FakeRedis:
    """In-process stand-in for the handful of redis.asyncio calls the app makes."""

    def __init__(self):
        self.data = {}
        self.expiry = {}

    def _alive(self, key):
        expires = self.expiry.get(key)
        if expires is not None and expires <= time.time():
            self.data.pop(key, None)
            self.expiry.pop(key, None)
        return key in self.data

    async def ping(self):
        return True

    async def get(self, key):
        return self.data.get(key) if self._alive(key) else None

    async def set(self, key, value, ex=None):
        self.data[key] = value.encode() if isinstance(value, str) else value
        if ex is not None:
            self.expiry[key] = time.time() + ex
        return True

    async def incr(self, key):
        current = int(self.data.get(key, b"0")) if self._alive(key) else 0
        self.data[key] = str(current + 1).encode()
        return current + 1

    async def delete(self, *keys):
        return sum(1 for key in keys if self.data.pop(key, None) is not None)

    async def close(self):
        self.data.clear()


@pytest.fixture
async def database():
    db = Database(TEST_DATABASE_URL)
    await db.create_all()
    app.state.database = db
    yield db
    await db.drop_all()
    await db.dispose()
    app.state.database = None


@pytest.fixture
async def store(database):
    async with database.session_factory() as session:
        yield EntityStore(session)


@pytest.fixture(autouse=True)
def no_redis():
    set_redis(None)
    yield
    set_redis(None)


@pytest.fixture
def fake_redis():
    client = FakeRedis()
    set_redis(client)
    return client


@pytest.fixture
async def test_client(database):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


async def _seed_user(store: EntityStore, username: str, role: UserRole) -> User:
    now = datetime.now(timezone.utc)
    user = await store.create(User, {
        "id": f"user-{username}",
        "username": username,
        "password_hash": hash_password(f"{username}-password"),
        "email": f"{username}@everflown.test",
        "role": role.value,
        "created_at": now,
    })
    await store.commit()
    return user


@pytest.fixture
async def seed_users(store):
    return {
        "admin": await _seed_user(store, "admin", UserRole.ADMIN),
        "broker": await _seed_user(store, "broker", UserRole.BROKER),
        "user": await _seed_user(store, "viewer", UserRole.USER),
    }


@pytest.fixture
def admin_token(seed_users):
    return create_access_token(seed_users["admin"].id, UserRole.ADMIN.value)


@pytest.fixture
def broker_token(seed_users):
    return create_access_token(seed_users["broker"].id, UserRole.BROKER.value)


@pytest.fixture
def user_token(seed_users):
    return create_access_token(seed_users["user"].id, UserRole.USER.value)


@pytest.fixture
def admin_headers(admin_token):
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def broker_headers(broker_token):
    return {"Authorization": f"Bearer {broker_token}"}


@pytest.fixture
def user_headers(user_token):
    return {"Authorization": f"Bearer {user_token}"}


@pytest.fixture
def expired_token(seed_users):
    return create_access_token(seed_users["admin"].id, UserRole.ADMIN.value, expires_minutes=-5)


@pytest.fixture
def valid_idempotency_key():
    return str(uuid.uuid4())


@pytest.fixture
def valid_customer_data():
    return {
        "company_name": "Acme Manufacturing",
        "contact_person": "Jane Smith",
        "email": "jane@acme.test",
        "phone": "555-0100",
        "billing_address": "1 Industrial Way",
        "billing_city": "Dallas",
        "billing_state": "TX",
        "billing_zip_code": "75201",
    }


@pytest.fixture
def valid_carrier_data():
    return {
        "company_name": "Roadrunner Freight",
        "contact_person": "Bob Driver",
        "email": "dispatch@roadrunner.test",
        "phone": "555-0200",
        "mc_number": "MC123456",
        "dot_number": "DOT654321",
    }


@pytest.fixture
def valid_lead_data():
    return {
        "company_name": "Prospect Foods",
        "contact_person": "Sam Buyer",
        "email": "sam@prospect.test",
        "phone": "555-0300",
        "origin_city": "Chicago",
        "origin_state": "IL",
        "destination_city": "Atlanta",
        "destination_state": "GA",
    }


def _order_values(**overrides):
    values = {
        "origin_address": "100 Dock St",
        "origin_city": "Chicago",
        "origin_state": "IL",
        "origin_zip_code": "60601",
        "destination_address": "200 Warehouse Rd",
        "destination_city": "Atlanta",
        "destination_state": "GA",
        "destination_zip_code": "30301",
        "pickup_date": date.today(),
        "equipment_type": "Dry Van",
        "customer_rate": 2500.0,
    }
    values.update(overrides)
    return values


@pytest.fixture
def make_customer(store, valid_customer_data):
    async def _make(**overrides):
        return await customer_service.create(store, {**valid_customer_data, **overrides})
    return _make


@pytest.fixture
def make_carrier(store, valid_carrier_data):
    async def _make(**overrides):
        return await carrier_service.create(store, {**valid_carrier_data, **overrides})
    return _make


@pytest.fixture
def make_lead(store, valid_lead_data):
    async def _make(**overrides):
        return await lead_service.create(store, {**valid_lead_data, **overrides})
    return _make


@pytest.fixture
def make_order(store):
    async def _make(**overrides):
        return await order_service.create(store, _order_values(**overrides))
    return _make


@pytest.fixture
def make_dispatch(store):
    async def _make(order_id, carrier_id, **overrides):
        values = {"order_id": order_id, "carrier_id": carrier_id, "carrier_rate": 1800.0}
        values.update(overrides)
        return await dispatch_service.create(store, values)
    return _make


@pytest.fixture
def make_quote(store):
    async def _make(**overrides):
        values = {
            "origin_city": "Chicago",
            "origin_state": "IL",
            "destination_city": "Atlanta",
            "destination_state": "GA",
            "equipment_type": "Reefer",
            "quoted_rate": 3100.0,
            "valid_until": date.today() + timedelta(days=14),
        }
        values.update(overrides)
        return await quote_service.create(store, values)
    return _make


@pytest.fixture
def make_invoice(store):
    async def _make(**overrides):
        values = {
            "type": "customer",
            "amount": "1500.00",
            "due_date": date.today() + timedelta(days=30),
        }
        values.update(overrides)
        return await invoice_service.create(store, values)
    return _make


@pytest.fixture
def make_followup(store):
    async def _make(**overrides):
        values = {
            "title": "Call back about lane rates",
            "type": "call",
            "due_date": datetime.now(timezone.utc) + timedelta(days=1),
        }
        values.update(overrides)
        return await followup_service.create(store, values)
    return _make


@pytest.fixture
def app_settings():
    return settings


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    config.addinivalue_line(
        "markers", "auth: marks tests related to authentication"
    )
    config.addinivalue_line(
        "markers", "crud: marks tests related to CRUD operations"
    )
    config.addinivalue_line(
        "markers", "integrity: marks tests related to referential integrity"
    )
    config.addinivalue_line(
        "markers", "lifecycle: marks tests related to status lifecycles"
    )
    config.addinivalue_line(
        "markers", "dashboard: marks tests related to dashboard metrics"
    )
    config.addinivalue_line(
        "markers", "documents: marks tests related to PDF documents"
    )
    config.addinivalue_line(
        "markers", "rate_limit: marks tests related to rate limiting"
    )
    config.addinivalue_line(
        "markers", "audit: marks tests related to audit logging"
    )
    config.addinivalue_line(
        "markers", "idempotency: marks tests related to idempotency"
    )
