import itertools
import os

os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient

from greengrocer.api.deps import get_repository
from greengrocer.main import app
from greengrocer.models import UserRole, derive_product_status
from greengrocer.repositories import MemoryRepository
from greengrocer.security import hash_password

PASSWORD = "secret-pass"

CHECKOUT = {
    "address": "1 Market St",
    "city": "Springfield",
    "state": "IL",
    "zipCode": "62701",
    "contactEmail": "jane@example.com",
    "contactPhone": "555-0100",
    "deliveryFee": 5.99,
}


def create_user(repository, username, role=UserRole.CUSTOMER.value):
    return repository.create_user({
        "username": username,
        "password": hash_password(PASSWORD),
        "full_name": username.title(),
        "email": f"{username}@example.com",
        "role": role,
    })


def login(client, username, password=PASSWORD):
    response = client.post("/api/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return response


@pytest.fixture
def repository():
    return MemoryRepository()


@pytest.fixture
def make_client(repository):
    app.dependency_overrides[get_repository] = lambda: repository
    yield lambda **kwargs: TestClient(app, **kwargs)
    app.dependency_overrides.clear()


@pytest.fixture
def client(make_client):
    return make_client()


@pytest.fixture
def customer(repository):
    return create_user(repository, "alice")


@pytest.fixture
def other_customer(repository):
    return create_user(repository, "bob")


@pytest.fixture
def admin_user(repository):
    return create_user(repository, "admin", role=UserRole.ADMIN.value)


@pytest.fixture
def customer_client(make_client, customer):
    client = make_client()
    login(client, customer.username)
    return client


@pytest.fixture
def other_client(make_client, other_customer):
    client = make_client()
    login(client, other_customer.username)
    return client


@pytest.fixture
def admin_client(make_client, admin_user):
    client = make_client()
    login(client, admin_user.username)
    return client


@pytest.fixture
def make_product(repository):
    counter = itertools.count(1)

    def _make(**overrides):
        n = next(counter)
        data = {
            "name": f"Product {n}",
            "description": "Fresh from the farm",
            "price": 1.0,
            "unit": "lb",
            "stock": 50,
            "sku": f"SKU-{n:04d}",
        }
        data.update(overrides)
        data["status"] = derive_product_status(data["stock"])
        return repository.create_product(data)

    return _make
