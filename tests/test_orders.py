import pytest

from greengrocer.exceptions import InsufficientStockError
from greengrocer.schemas.order import OrderCreate
from greengrocer.services.order_service import OrderService
from tests.conftest import CHECKOUT


def fill_cart(client, *lines):
    for product, quantity in lines:
        response = client.post("/api/cart/items", json={"productId": product.id, "quantity": quantity})
        assert response.status_code == 201, response.text


def test_checkout_totals(customer_client, make_product):
    apples = make_product(name="Apples", price=10.0, stock=20)
    pears = make_product(name="Pears", price=5.0, stock=20)
    fill_cart(customer_client, (apples, 2), (pears, 1))

    response = customer_client.post("/api/orders", json=CHECKOUT)

    assert response.status_code == 201
    order = response.json()
    assert order["status"] == "pending"
    assert order["subtotal"] == pytest.approx(25.00)
    assert order["tax"] == pytest.approx(2.50)
    assert order["deliveryFee"] == pytest.approx(5.99)
    assert order["total"] == pytest.approx(33.49)
    assert order["zipCode"] == "62701"
    assert sorted((i["productId"], i["quantity"], i["unitPrice"], i["totalPrice"]) for i in order["items"]) == [
        (apples.id, 2, 10.0, 20.0),
        (pears.id, 1, 5.0, 5.0),
    ]


def test_checkout_lines_sum_to_subtotal(customer_client, make_product):
    fill_cart(
        customer_client,
        (make_product(price=1.25), 3),
        (make_product(price=0.4), 2.5),
        (make_product(price=7.99), 1),
    )

    order = customer_client.post("/api/orders", json=CHECKOUT).json()

    assert sum(i["totalPrice"] for i in order["items"]) == pytest.approx(order["subtotal"])
    assert order["total"] == pytest.approx(order["subtotal"] + order["tax"] + order["deliveryFee"])


def test_checkout_decrements_stock_and_clears_cart(customer_client, repository, customer, make_product):
    product = make_product(stock=12)
    fill_cart(customer_client, (product, 5))
    cart_id = repository.get_cart(customer.id).id

    customer_client.post("/api/orders", json=CHECKOUT)

    updated = repository.get_product(product.id)
    assert updated.stock == 7
    assert updated.status == "low_stock"
    assert repository.get_cart(customer.id).id == cart_id
    assert repository.get_cart_items(cart_id) == []


def test_checkout_can_drain_stock(customer_client, repository, make_product):
    product = make_product(stock=3)
    fill_cart(customer_client, (product, 3))

    assert customer_client.post("/api/orders", json=CHECKOUT).status_code == 201
    assert repository.get_product(product.id).status == "out_of_stock"


def test_checkout_records_creation_history(customer_client, make_product):
    fill_cart(customer_client, (make_product(), 1))
    order = customer_client.post("/api/orders", json=CHECKOUT).json()

    history = customer_client.get(f"/api/orders/{order['id']}/history").json()

    assert [(h["status"], h["notes"]) for h in history] == [("pending", "Order created")]


def test_unit_price_is_kept_after_price_change(customer_client, admin_client, make_product):
    product = make_product(price=3.0)
    fill_cart(customer_client, (product, 1))
    order = customer_client.post("/api/orders", json=CHECKOUT).json()

    admin_client.put(f"/api/products/{product.id}", json={"price": 9.0})

    item = customer_client.get(f"/api/orders/{order['id']}").json()["items"][0]
    assert item["unitPrice"] == 3.0
    assert item["product"]["price"] == 9.0


def test_empty_cart(customer_client):
    response = customer_client.post("/api/orders", json=CHECKOUT)

    assert response.status_code == 400
    assert response.json()["detail"] == "Cart is empty"


def test_invalid_checkout_body(customer_client, make_product):
    fill_cart(customer_client, (make_product(), 1))

    response = customer_client.post("/api/orders", json={**CHECKOUT, "deliveryFee": -1})

    assert response.status_code == 400
    assert response.json()["detail"] == "Validation failed"


def test_insufficient_stock_persists_nothing(customer_client, repository, customer, make_product):
    plenty = make_product(name="Onions", stock=100)
    scarce = make_product(name="Figs", stock=2)
    fill_cart(customer_client, (plenty, 5), (scarce, 3))

    response = customer_client.post("/api/orders", json=CHECKOUT)

    assert response.status_code == 400
    assert response.json()["detail"] == "Not enough stock for Figs. Available: 2"
    assert repository.get_all_orders() == []
    assert repository.get_product(plenty.id).stock == 100
    assert repository.get_product(scarce.id).stock == 2
    assert len(repository.get_cart_items(repository.get_cart(customer.id).id)) == 2


def test_deleted_product_in_cart(customer_client, repository, make_product):
    product = make_product()
    fill_cart(customer_client, (product, 1))
    repository.delete_product(product.id)

    response = customer_client.post("/api/orders", json=CHECKOUT)

    assert response.status_code == 400
    assert response.json()["detail"] == f"Product with ID {product.id} not found"
    assert repository.get_all_orders() == []


def test_failed_decrement_rolls_back_everything(repository, customer, make_product, monkeypatch):
    first = make_product(stock=10)
    second = make_product(stock=10)
    cart = repository.create_cart(customer.id)
    repository.add_cart_item({"cart_id": cart.id, "product_id": first.id, "quantity": 1})
    repository.add_cart_item({"cart_id": cart.id, "product_id": second.id, "quantity": 1})

    decrement = repository.decrement_stock

    def drained_second(product_id, quantity):
        if product_id == second.id:
            return None
        return decrement(product_id, quantity)

    monkeypatch.setattr(repository, "decrement_stock", drained_second)

    with pytest.raises(InsufficientStockError):
        OrderService(repository).place_order(customer.id, OrderCreate(**CHECKOUT))

    assert repository.get_all_orders() == []
    assert repository.get_product(first.id).stock == 10
    assert len(repository.get_cart_items(cart.id)) == 2


def test_unexpected_failure_during_checkout(make_client, customer, repository, make_product, monkeypatch):
    client = make_client(raise_server_exceptions=False)
    client.post("/api/login", json={"username": customer.username, "password": "secret-pass"})
    product = make_product(stock=10)
    fill_cart(client, (product, 1))

    def broken(*args, **kwargs):
        raise RuntimeError("disk full")

    monkeypatch.setattr(repository, "clear_cart", broken)

    response = client.post("/api/orders", json=CHECKOUT)

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}
    assert repository.get_all_orders() == []
    assert repository.get_product(product.id).stock == 10


def test_customers_see_only_their_orders(customer_client, other_client, make_product):
    fill_cart(customer_client, (make_product(), 1))
    mine = customer_client.post("/api/orders", json=CHECKOUT).json()
    fill_cart(other_client, (make_product(), 1))
    theirs = other_client.post("/api/orders", json=CHECKOUT).json()

    assert [o["id"] for o in customer_client.get("/api/orders").json()] == [mine["id"]]
    assert [o["id"] for o in other_client.get("/api/orders").json()] == [theirs["id"]]


def test_customer_cannot_view_another_users_order(customer_client, other_client, make_product):
    fill_cart(customer_client, (make_product(), 1))
    order = customer_client.post("/api/orders", json=CHECKOUT).json()

    response = other_client.get(f"/api/orders/{order['id']}")

    assert response.status_code == 403
    assert response.json()["detail"] == "Not authorized to view this order"
    assert other_client.get(f"/api/orders/{order['id']}/history").status_code == 403


def test_admin_sees_every_order(customer_client, other_client, admin_client, make_product):
    fill_cart(customer_client, (make_product(), 1))
    first = customer_client.post("/api/orders", json=CHECKOUT).json()
    fill_cart(other_client, (make_product(), 1))
    second = other_client.post("/api/orders", json=CHECKOUT).json()

    assert {o["id"] for o in admin_client.get("/api/orders").json()} == {first["id"], second["id"]}
    assert admin_client.get(f"/api/orders/{first['id']}").status_code == 200


def test_unknown_order(customer_client):
    assert customer_client.get("/api/orders/999").status_code == 404
