def test_cart_is_created_on_first_access(customer_client, repository, customer):
    assert repository.get_cart(customer.id) is None

    response = customer_client.get("/api/cart")

    assert response.status_code == 200
    body = response.json()
    assert body["userId"] == customer.id
    assert body["items"] == []
    assert repository.get_cart(customer.id) is not None


def test_add_item_includes_product(customer_client, make_product):
    product = make_product(name="Basil")

    response = customer_client.post("/api/cart/items", json={"productId": product.id, "quantity": 2})

    assert response.status_code == 201
    body = response.json()
    assert body["productId"] == product.id
    assert body["quantity"] == 2
    assert body["product"]["name"] == "Basil"


def test_adding_same_product_merges_lines(customer_client, make_product):
    product = make_product()

    first = customer_client.post("/api/cart/items", json={"productId": product.id, "quantity": 1})
    second = customer_client.post("/api/cart/items", json={"productId": product.id, "quantity": 2})

    assert first.json()["id"] == second.json()["id"]
    items = customer_client.get("/api/cart").json()["items"]
    assert len(items) == 1
    assert items[0]["quantity"] == 3


def test_fractional_quantities(customer_client, make_product):
    product = make_product()

    response = customer_client.post("/api/cart/items", json={"productId": product.id, "quantity": 1.5})

    assert response.json()["quantity"] == 1.5


def test_add_unknown_product(customer_client):
    response = customer_client.post("/api/cart/items", json={"productId": 999, "quantity": 1})

    assert response.status_code == 404


def test_add_requires_positive_quantity(customer_client, make_product):
    product = make_product()

    response = customer_client.post("/api/cart/items", json={"productId": product.id, "quantity": 0})

    assert response.status_code == 400
    assert response.json()["detail"] == "Validation failed"


def test_update_item_quantity(customer_client, make_product):
    product = make_product()
    item = customer_client.post("/api/cart/items", json={"productId": product.id, "quantity": 1}).json()

    response = customer_client.put(f"/api/cart/items/{item['id']}", json={"quantity": 4})

    assert response.status_code == 200
    assert response.json()["quantity"] == 4


def test_update_to_zero_removes_item(customer_client, make_product):
    product = make_product()
    item = customer_client.post("/api/cart/items", json={"productId": product.id, "quantity": 1}).json()

    response = customer_client.put(f"/api/cart/items/{item['id']}", json={"quantity": 0})

    assert response.status_code == 204
    assert customer_client.get("/api/cart").json()["items"] == []


def test_update_rejects_negative_quantity(customer_client, make_product):
    product = make_product()
    item = customer_client.post("/api/cart/items", json={"productId": product.id, "quantity": 1}).json()

    response = customer_client.put(f"/api/cart/items/{item['id']}", json={"quantity": -1})

    assert response.status_code == 400


def test_remove_item(customer_client, make_product):
    product = make_product()
    item = customer_client.post("/api/cart/items", json={"productId": product.id, "quantity": 1}).json()

    assert customer_client.delete(f"/api/cart/items/{item['id']}").status_code == 204
    assert customer_client.get("/api/cart").json()["items"] == []


def test_cannot_touch_another_users_item(customer_client, other_client, make_product):
    product = make_product()
    item = customer_client.post("/api/cart/items", json={"productId": product.id, "quantity": 1}).json()

    assert other_client.put(f"/api/cart/items/{item['id']}", json={"quantity": 9}).status_code == 404
    assert other_client.delete(f"/api/cart/items/{item['id']}").status_code == 404
    assert customer_client.get("/api/cart").json()["items"][0]["quantity"] == 1


def test_clear_cart_keeps_cart(customer_client, repository, customer, make_product):
    customer_client.post("/api/cart/items", json={"productId": make_product().id, "quantity": 1})
    customer_client.post("/api/cart/items", json={"productId": make_product().id, "quantity": 2})
    cart_id = customer_client.get("/api/cart").json()["id"]

    assert customer_client.delete("/api/cart").status_code == 204

    body = customer_client.get("/api/cart").json()
    assert body["id"] == cart_id
    assert body["items"] == []
    assert repository.get_cart(customer.id).id == cart_id


def test_cart_modifications_refresh_updated_at(customer_client, repository, customer, make_product):
    customer_client.get("/api/cart")
    before = repository.get_cart(customer.id).updated_at

    customer_client.post("/api/cart/items", json={"productId": make_product().id, "quantity": 1})

    assert repository.get_cart(customer.id).updated_at >= before


def test_carts_are_per_user(customer_client, other_client, make_product):
    customer_client.post("/api/cart/items", json={"productId": make_product().id, "quantity": 1})

    assert other_client.get("/api/cart").json()["items"] == []
