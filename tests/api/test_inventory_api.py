"""Tests for materials and products API endpoints."""


def test_list_materials_empty(client):
    response = client.get("/api/materials/")
    assert response.status_code == 200
    assert response.json() == {"materials": [], "count": 0}


def test_create_material(client, material):
    assert material["sku"] == "GT-RED-M"
    assert material["on_hand"] == 13
    assert material["is_low_stock"] is True

    data = client.get("/api/materials/", params={"search": "red"}).json()
    assert data["count"] == 1


def test_create_material_duplicate_sku(client, material):
    response = client.post("/api/materials/", json={"name": "Other", "sku": "GT-RED-M"})
    assert response.status_code == 409
    assert response.json()["detail"] == "SKU already exists"


def test_create_material_blank_name(client):
    response = client.post("/api/materials/", json={"name": " ", "sku": "X-1"})
    assert response.status_code == 422


def test_set_quantity(client, material):
    response = client.put(f"/api/materials/{material['id']}/quantity", json={"on_hand": 40})
    assert response.status_code == 200
    assert response.json()["on_hand"] == 40
    assert response.json()["is_low_stock"] is False


def test_set_negative_quantity(client, material):
    response = client.put(f"/api/materials/{material['id']}/quantity", json={"on_hand": -1})
    assert response.status_code == 422

    data = client.get("/api/materials/").json()
    assert data["materials"][0]["on_hand"] == 13


def test_adjust_clamps_at_zero(client, material):
    response = client.post(f"/api/materials/{material['id']}/adjust", json={"delta": -100})
    assert response.status_code == 200
    assert response.json()["on_hand"] == 0


def test_adjust_missing_material(client):
    response = client.post("/api/materials/missing/adjust", json={"delta": 1})
    assert response.status_code == 404


def test_low_stock(client, material):
    client.post("/api/materials/", json={"name": "Tee", "sku": "GT-RED-L", "on_hand": 46, "reorder_point": 24})

    data = client.get("/api/materials/low-stock").json()
    assert [m["sku"] for m in data["materials"]] == ["GT-RED-M"]


def test_archive_material(client, material):
    response = client.post(f"/api/materials/{material['id']}/archive")
    assert response.status_code == 200
    assert response.json()["archived"] is True
    assert client.get("/api/materials/").json()["count"] == 0


def test_create_product_with_sellable(client, product):
    # 13 on hand, 2 per unit
    assert product["sellable"] == 6
    assert product["bom"] == [{"materialId": product["bom"][0]["materialId"], "qty": 2}]


def test_product_without_bom(client):
    response = client.post("/api/products/", json={"name": "Gift Card", "sku": "GIFT"})
    assert response.status_code == 201
    assert response.json()["sellable"] is None
    assert response.json()["bom"] is None


def test_product_bom_qty_must_be_positive(client, material):
    response = client.post(
        "/api/products/",
        json={"name": "Tee", "sku": "P-1", "bom": [{"materialId": material["id"], "qty": 0}]},
    )
    assert response.status_code == 422


def test_list_products_follows_stock(client, material, product):
    client.put(f"/api/materials/{material['id']}/quantity", json={"on_hand": 5})

    data = client.get("/api/products/").json()
    assert data["count"] == 1
    assert data["products"][0]["sellable"] == 2


def test_update_product(client, product):
    response = client.put(
        f"/api/products/{product['id']}",
        json={"name": "Red Tee v2", "sku": "P-RED-M", "bom": []},
    )
    assert response.status_code == 200
    assert response.json()["name"] == "Red Tee v2"
    assert response.json()["sellable"] is None


def test_update_missing_product(client):
    response = client.put("/api/products/missing", json={"name": "X", "sku": "X"})
    assert response.status_code == 404
