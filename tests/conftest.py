"""
Shared fixtures: an isolated app per test backed by a fresh in-memory store,
plus helpers that put users and catalog records straight into that store.
"""
import pytest
from fastapi.testclient import TestClient

from stockroom.core.config import Settings
from stockroom.core.security import create_access_token, hash_password
from stockroom.main import create_app
from stockroom.repositories.store import build_memory_store, build_sql_store
from stockroom.schemas.user import UserRole

TEST_PASSWORD = "Password123"


@pytest.fixture(scope="session")
def password_hash():
    # Hash once for the whole run
    return hash_password(TEST_PASSWORD)


@pytest.fixture
def settings():
    return Settings(
        SECRET_KEY="test-secret",
        SEED_DEMO_DATA=False,
        STORAGE_BACKEND="memory",
        ENVIRONMENT="test",
        RATE_LIMIT_MAX_REQUESTS=10000,
        BACKEND_CORS_ORIGINS="http://localhost:3000",
    )


@pytest.fixture
def store():
    return build_memory_store()


@pytest.fixture(params=["memory", "sql"])
def any_store(request):
    """The same tests against both storage backends."""
    if request.param == "sql":
        return build_sql_store("sqlite://")
    return build_memory_store()


@pytest.fixture
def app(settings, store):
    return create_app(settings=settings, store=store)


@pytest.fixture
def client(app):
    return TestClient(app)


class TestDataFactory:
    """Creates records directly through the store's repositories."""

    def __init__(self, store, password_hash, settings):
        self.store = store
        self.password_hash = password_hash
        self.settings = settings
        self._counter = 0

    def _next(self) -> int:
        self._counter += 1
        return self._counter

    def user(self, role=UserRole.USER, email=None, first_name="Test", last_name="User"):
        n = self._next()
        return self.store.users.add({
            "first_name": first_name,
            "last_name": last_name,
            "email": email or f"user{n}@example.com",
            "password": self.password_hash,
            "role": role,
        })

    def headers_for(self, user) -> dict:
        return {"Authorization": f"Bearer {create_access_token(user.id, self.settings)}"}

    def category(self, **overrides):
        n = self._next()
        data = {"name": f"Category {n}", "description": "", "color": "#3B82F6"}
        data.update(overrides)
        return self.store.categories.add(data)

    def supplier(self, **overrides):
        n = self._next()
        data = {
            "name": f"Supplier {n}",
            "contact_person": "Jane Roe",
            "email": f"supplier{n}@example.com",
            "phone": "+1-555-0100",
        }
        data.update(overrides)
        return self.store.suppliers.add(data)

    def product(self, category=None, supplier=None, **overrides):
        n = self._next()
        category = category or self.category()
        supplier = supplier or self.supplier()
        data = {
            "name": f"Product {n}",
            "sku": f"SKU{n:04d}",
            "description": "Test product",
            "price": 20.0,
            "cost": 10.0,
            "category_id": category.id,
            "supplier_id": supplier.id,
            "min_stock": 5,
            "max_stock": 50,
        }
        data.update(overrides)
        return self.store.products.add(data)

    def inventory_item(self, product=None, quantity=10, **overrides):
        product = product or self.product()
        data = {"product_id": product.id, "quantity": quantity, "location": "Warehouse A"}
        data.update(overrides)
        return self.store.inventory.add(data)


@pytest.fixture
def factory(store, password_hash, settings):
    return TestDataFactory(store, password_hash, settings)


@pytest.fixture
def admin(factory):
    return factory.user(role=UserRole.ADMIN, email="admin@example.com", first_name="Admin")


@pytest.fixture
def regular_user(factory):
    return factory.user(role=UserRole.USER, email="staff@example.com", first_name="Staff")


@pytest.fixture
def admin_headers(factory, admin):
    return factory.headers_for(admin)


@pytest.fixture
def user_headers(factory, regular_user):
    return factory.headers_for(regular_user)
