from decimal import Decimal

from conftest import OTHER_OWNER, auth


def _create(client, owner_id="user-1", **body):
    payload = {"name": "Desk", "desc": "Standing desk", "price": 250}
    payload.update(body)
    return client.post("/api/products", json=payload, headers=auth(owner_id))


def test_requests_without_owner_are_unauthorized(client):
    response = client.get("/api/products")

    assert response.status_code == 401
    assert response.json() == {"detail": "Unauthorized"}


def test_create_and_get_product(client):
    response = _create(client, image="uploads/desk.png")

    assert response.status_code == 201
    product = response.json()["data"]
    assert product["name"] == "Desk"
    assert product["description"] == "Standing desk"
    assert Decimal(str(product["price"])) == Decimal("250")
    assert product["image"] == "uploads/desk.png"
    assert product["owner_id"] == "user-1"

    fetched = client.get(f"/api/products/{product['id']}", headers=auth())
    assert fetched.status_code == 200
    assert fetched.json()["data"]["id"] == product["id"]


def test_create_product_missing_fields_is_bad_request(client):
    response = client.post("/api/products", json={"name": "Desk"}, headers=auth())

    assert response.status_code == 400
    assert "description" in response.json()["detail"]


def test_create_product_with_malformed_price_is_bad_request(client):
    response = _create(client, price="lots")

    assert response.status_code == 400


def test_create_product_with_price_too_large_to_store_is_bad_request(client):
    response = _create(client, price=10 ** 12)

    assert response.status_code == 400
    assert response.json()["detail"] == "price cannot exceed 9999999999.99"
    assert client.get(f"/api/products/{10 ** 19}", headers=auth()).status_code == 404


def test_duplicate_product_name_is_conflict_per_owner(client):
    assert _create(client).status_code == 201

    duplicate = _create(client)
    assert duplicate.status_code == 409
    assert "already exists" in duplicate.json()["detail"]

    assert _create(client, owner_id=OTHER_OWNER).status_code == 201


def test_list_products_is_scoped_to_owner(client):
    _create(client, name="Desk")
    _create(client, name="Chair")
    _create(client, owner_id=OTHER_OWNER, name="Lamp")

    response = client.get("/api/products", headers=auth())

    assert response.status_code == 200
    assert [p["name"] for p in response.json()["data"]] == ["Chair", "Desk"]


def test_foreign_product_is_not_found(client):
    product_id = _create(client).json()["data"]["id"]

    assert client.get(f"/api/products/{product_id}", headers=auth(OTHER_OWNER)).status_code == 404
    update = client.put(f"/api/products/{product_id}", json={"price": 1}, headers=auth(OTHER_OWNER))
    assert update.status_code == 404
    delete = client.delete(f"/api/products/{product_id}", headers=auth(OTHER_OWNER))
    assert delete.status_code == 404
    assert delete.json() == {"detail": "Product not found"}


def test_update_product_partially(client):
    product_id = _create(client).json()["data"]["id"]

    response = client.put(f"/api/products/{product_id}", json={"price": "199.99"}, headers=auth())

    assert response.status_code == 200
    data = response.json()["data"]
    assert Decimal(str(data["price"])) == Decimal("199.99")
    assert data["name"] == "Desk"


def test_rename_product_onto_existing_name_is_conflict(client):
    _create(client, name="Desk")
    chair_id = _create(client, name="Chair").json()["data"]["id"]

    response = client.put(f"/api/products/{chair_id}", json={"name": "Desk"}, headers=auth())

    assert response.status_code == 409


def test_delete_product(client):
    product_id = _create(client).json()["data"]["id"]

    response = client.delete(f"/api/products/{product_id}", headers=auth())

    assert response.status_code == 200
    assert response.json() == {"message": "Product deleted successfully"}
    assert client.get(f"/api/products/{product_id}", headers=auth()).status_code == 404


def test_non_integer_product_id_is_bad_request(client):
    assert client.get("/api/products/not-an-id", headers=auth()).status_code == 400


def test_product_response_can_be_sent_back_as_an_update(client):
    product = _create(client).json()["data"]
    product["description"] = "Walnut standing desk"
    product["price"] = "275.00"

    response = client.put(f"/api/products/{product['id']}", json=product, headers=auth())

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["description"] == "Walnut standing desk"
    assert Decimal(str(data["price"])) == Decimal("275.00")
