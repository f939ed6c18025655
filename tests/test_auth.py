from tests.conftest import PASSWORD, login


def test_register_creates_customer_and_logs_in(client):
    response = client.post("/api/register", json={
        "username": "carol",
        "password": "pw",
        "fullName": "Carol King",
        "email": "carol@example.com",
    })

    assert response.status_code == 201
    body = response.json()
    assert body["username"] == "carol"
    assert body["fullName"] == "Carol King"
    assert body["role"] == "customer"
    assert "password" not in body

    me = client.get("/api/user")
    assert me.status_code == 200
    assert me.json()["id"] == body["id"]


def test_register_cannot_choose_admin_role(client, repository):
    response = client.post("/api/register", json={
        "username": "mallory",
        "password": "pw",
        "fullName": "Mallory",
        "email": "mallory@example.com",
        "role": "admin",
    })

    assert response.status_code == 201
    assert repository.get_user_by_username("mallory").role == "customer"


def test_register_duplicate_username(client, customer):
    response = client.post("/api/register", json={
        "username": customer.username,
        "password": "pw",
        "fullName": "Someone Else",
        "email": "else@example.com",
    })

    assert response.status_code == 400
    assert response.json()["detail"] == "Username already exists"


def test_register_rejects_bad_email(client):
    response = client.post("/api/register", json={
        "username": "dave",
        "password": "pw",
        "fullName": "Dave",
        "email": "not-an-email",
    })

    assert response.status_code == 400
    assert response.json()["detail"] == "Validation failed"


def test_password_is_stored_hashed(client, repository):
    client.post("/api/register", json={
        "username": "erin",
        "password": "plain-text",
        "fullName": "Erin",
        "email": "erin@example.com",
    })

    assert repository.get_user_by_username("erin").password != "plain-text"


def test_login_with_wrong_password(client, customer):
    response = client.post("/api/login", json={"username": customer.username, "password": "nope"})

    assert response.status_code == 401
    assert client.get("/api/user").status_code == 401


def test_login_unknown_user(client):
    response = client.post("/api/login", json={"username": "ghost", "password": PASSWORD})

    assert response.status_code == 401


def test_logout_ends_session(customer_client):
    assert customer_client.get("/api/user").status_code == 200

    response = customer_client.post("/api/logout")

    assert response.status_code == 200
    assert customer_client.get("/api/user").status_code == 401


def test_protected_routes_require_login(client):
    assert client.get("/api/cart").status_code == 401
    assert client.get("/api/orders").status_code == 401
    assert client.get("/api/favorites").status_code == 401
    assert client.get("/api/admin/stats").status_code == 401


def test_customer_cannot_use_admin_routes(customer_client):
    response = customer_client.get("/api/admin/stats")

    assert response.status_code == 403
    assert response.json()["detail"] == "Admin access required"


def test_session_for_deleted_user_is_rejected(customer_client, repository, customer):
    del repository._tables["users"][customer.id]

    assert customer_client.get("/api/user").status_code == 401


def test_update_own_profile(customer_client, customer):
    response = customer_client.patch(f"/api/users/{customer.id}", json={
        "fullName": "Alice Liddell",
        "avatar": "https://example.com/alice.png",
    })

    assert response.status_code == 200
    body = response.json()
    assert body["fullName"] == "Alice Liddell"
    assert body["avatar"] == "https://example.com/alice.png"
    assert body["email"] == customer.email


def test_update_password_allows_new_login(customer_client, make_client, customer):
    customer_client.patch(f"/api/users/{customer.id}", json={"password": "new-pass"})

    client = make_client()
    login(client, customer.username, "new-pass")
    assert client.post("/api/login", json={
        "username": customer.username, "password": PASSWORD
    }).status_code == 401


def test_cannot_update_someone_elses_profile(customer_client, other_customer):
    response = customer_client.patch(f"/api/users/{other_customer.id}", json={"fullName": "Hacked"})

    assert response.status_code == 403


def test_admin_can_update_any_profile(admin_client, customer):
    response = admin_client.patch(f"/api/users/{customer.id}", json={"fullName": "Renamed"})

    assert response.status_code == 200
    assert response.json()["fullName"] == "Renamed"


def test_admin_update_unknown_user(admin_client):
    response = admin_client.patch("/api/users/999", json={"fullName": "Nobody"})

    assert response.status_code == 404
