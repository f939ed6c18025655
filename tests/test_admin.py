import pytest

from greengrocer.schemas.order import OrderCreate
from greengrocer.services.order_service import OrderService
from tests.conftest import CHECKOUT


def place(repository, user, *lines):
    cart = repository.get_cart(user.id) or repository.create_cart(user.id)
    for product, quantity in lines:
        repository.add_cart_item({"cart_id": cart.id, "product_id": product.id, "quantity": quantity})
    return OrderService(repository).place_order(user.id, OrderCreate(**CHECKOUT))


def test_stats_on_empty_store(admin_client):
    response = admin_client.get("/api/admin/stats")

    assert response.status_code == 200
    assert response.json() == {
        "customerCount": 0,
        "orderCount": 0,
        "totalRevenue": 0,
        "productsSold": 0,
        "productCount": 0,
    }


def test_stats(admin_client, repository, customer, other_customer, make_product):
    apples = make_product(price=2.0)
    pears = make_product(price=3.0)
    first = place(repository, customer, (apples, 2), (pears, 1))
    second = place(repository, other_customer, (apples, 1.5))

    stats = admin_client.get("/api/admin/stats").json()

    assert stats["customerCount"] == 2
    assert stats["orderCount"] == 2
    assert stats["productCount"] == 2
    assert stats["productsSold"] == pytest.approx(4.5)
    assert stats["totalRevenue"] == pytest.approx(first.total + second.total)


def test_recent_orders_newest_first(admin_client, repository, customer, make_product):
    product = make_product(stock=100)
    placed = [place(repository, customer, (product, 1)) for _ in range(7)]

    response = admin_client.get("/api/admin/orders/recent")

    assert response.status_code == 200
    ids = [o["id"] for o in response.json()]
    assert ids == [o.id for o in reversed(placed)][:5]


def test_recent_orders_include_items(admin_client, repository, customer, make_product):
    product = make_product(name="Chives")
    place(repository, customer, (product, 1))

    order = admin_client.get("/api/admin/orders/recent").json()[0]

    assert order["items"][0]["product"]["name"] == "Chives"


def test_admin_routes_require_admin(customer_client):
    assert customer_client.get("/api/admin/stats").status_code == 403
    assert customer_client.get("/api/admin/orders/recent").status_code == 403
