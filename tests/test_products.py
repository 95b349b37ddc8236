from unittest.mock import patch


def product_body(category, supplier, **overrides):
    body = {
        "name": "Desk Lamp",
        "sku": "LMP001",
        "description": "LED desk lamp",
        "price": 49.99,
        "cost": 25.0,
        "categoryId": category.id,
        "supplierId": supplier.id,
        "minStock": 5,
        "maxStock": 40,
    }
    body.update(overrides)
    return body


class TestCreateProduct:
    def test_admin_creates_product(self, client, factory, admin_headers):
        category, supplier = factory.category(), factory.supplier()

        response = client.post("/api/products", json=product_body(category, supplier), headers=admin_headers)
        assert response.status_code == 201

        body = response.json()
        assert body["message"] == "Product created successfully"
        product = body["data"]
        assert product["sku"] == "LMP001"
        assert product["categoryId"] == category.id
        assert product["unit"] == "pcs"
        assert product["status"] == "active"
        assert product["id"]
        assert product["createdAt"]

    def test_regular_user_is_forbidden(self, client, factory, user_headers, store):
        category, supplier = factory.category(), factory.supplier()

        response = client.post("/api/products", json=product_body(category, supplier), headers=user_headers)
        assert response.status_code == 403
        assert response.json()["error"] == "Access denied. Admin privileges required."
        assert store.products.get_all() == []

    def test_duplicate_sku_does_not_write(self, client, factory, admin_headers, store):
        existing = factory.product(sku="LMP001")

        with patch.object(store.products, "add") as add_product:
            response = client.post(
                "/api/products",
                json=product_body(factory.category(), factory.supplier()),
                headers=admin_headers,
            )

        assert response.status_code == 400
        assert response.json()["error"] == "SKU already exists"
        add_product.assert_not_called()
        assert [p.id for p in store.products.get_all()] == [existing.id]

    def test_unknown_category(self, client, factory, admin_headers, store):
        supplier = factory.supplier()
        body = product_body(factory.category(), supplier, categoryId="missing")

        response = client.post("/api/products", json=body, headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["error"] == "Category not found"
        assert store.products.get_all() == []

    def test_unknown_supplier(self, client, factory, admin_headers):
        body = product_body(factory.category(), factory.supplier(), supplierId="missing")

        response = client.post("/api/products", json=body, headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["error"] == "Supplier not found"

    def test_negative_price_is_rejected(self, client, factory, admin_headers):
        body = product_body(factory.category(), factory.supplier(), price=-1)

        response = client.post("/api/products", json=body, headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "price"

    def test_missing_fields_are_reported(self, client, admin_headers):
        response = client.post("/api/products", json={"name": "Half a product"}, headers=admin_headers)
        assert response.status_code == 400
        fields = {detail["field"] for detail in response.json()["details"]}
        assert {"sku", "price", "cost", "categoryId", "supplierId"} <= fields

    def test_infinite_cost_is_rejected(self, client, factory, admin_headers, store):
        category, supplier = factory.category(), factory.supplier()
        raw = (
            '{"name": "Lamp", "sku": "LMP009", "price": 10, "cost": Infinity, '
            f'"categoryId": "{category.id}", "supplierId": "{supplier.id}"}}'
        )

        response = client.post(
            "/api/products",
            content=raw,
            headers=dict(admin_headers, **{"Content-Type": "application/json"}),
        )
        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "cost"
        assert store.products.get_all() == []

    def test_min_stock_above_max_stock(self, client, factory, admin_headers, store):
        body = product_body(factory.category(), factory.supplier(), minStock=50, maxStock=10)

        response = client.post("/api/products", json=body, headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["details"][0]["message"] == "minStock cannot be greater than maxStock"
        assert store.products.get_all() == []

    def test_zero_max_stock_means_no_ceiling(self, client, factory, admin_headers):
        body = product_body(factory.category(), factory.supplier(), minStock=5, maxStock=0)
        assert client.post("/api/products", json=body, headers=admin_headers).status_code == 201


class TestListProducts:
    def test_requires_auth(self, client):
        assert client.get("/api/products").status_code == 401

    def test_pagination(self, client, factory, user_headers):
        for _ in range(12):
            factory.product()

        response = client.get("/api/products", params={"page": 2, "limit": 5}, headers=user_headers)
        assert response.status_code == 200

        body = response.json()
        assert len(body["data"]) == 5
        assert body["pagination"] == {
            "page": 2,
            "limit": 5,
            "total": 12,
            "totalPages": 3,
            "hasNextPage": True,
            "hasPrevPage": True,
        }

    def test_items_carry_category_and_supplier(self, client, factory, user_headers):
        category = factory.category(name="Lighting", color="#FFCC00")
        supplier = factory.supplier(name="Bright Co")
        factory.product(category=category, supplier=supplier)

        product = client.get("/api/products", headers=user_headers).json()["data"][0]
        assert product["category"] == {"id": category.id, "name": "Lighting", "color": "#FFCC00"}
        assert product["supplier"] == {"id": supplier.id, "name": "Bright Co"}

    def test_search_matches_name_sku_and_description(self, client, factory, user_headers):
        factory.product(name="Desk Lamp", sku="LMP001")
        factory.product(name="Chair", sku="CHR001", description="Has a lamp holder")
        factory.product(name="Table", sku="TBL001")

        response = client.get("/api/products", params={"search": "LAMP"}, headers=user_headers)
        assert {p["sku"] for p in response.json()["data"]} == {"LMP001", "CHR001"}

    def test_filters(self, client, factory, user_headers):
        category = factory.category()
        kept = factory.product(category=category)
        factory.product(category=category, status="inactive")
        factory.product()

        response = client.get(
            "/api/products",
            params={"category": category.id, "status": "active"},
            headers=user_headers,
        )
        assert [p["id"] for p in response.json()["data"]] == [kept.id]

    def test_get_one(self, client, factory, user_headers):
        product = factory.product()
        response = client.get(f"/api/products/{product.id}", headers=user_headers)
        assert response.status_code == 200
        assert response.json()["data"]["category"]["id"] == product.category_id

    def test_get_missing(self, client, user_headers):
        response = client.get("/api/products/missing", headers=user_headers)
        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Product not found"}


class TestUpdateProduct:
    def test_partial_update(self, client, factory, admin_headers):
        product = factory.product(price=10.0)

        response = client.put(f"/api/products/{product.id}", json={"price": 12.5}, headers=admin_headers)
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["price"] == 12.5
        assert data["name"] == product.name

    def test_sku_conflict(self, client, factory, admin_headers, store):
        factory.product(sku="TAKEN1")
        product = factory.product(sku="MINE01")

        response = client.put(f"/api/products/{product.id}", json={"sku": "TAKEN1"}, headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["error"] == "SKU already exists"
        assert store.products.find_by_id(product.id).sku == "MINE01"

    def test_keeping_own_sku_is_fine(self, client, factory, admin_headers):
        product = factory.product(sku="MINE01")
        response = client.put(
            f"/api/products/{product.id}", json={"sku": "MINE01", "name": "Renamed"}, headers=admin_headers
        )
        assert response.status_code == 200

    def test_unknown_fields_are_ignored(self, client, factory, admin_headers, store):
        product = factory.product()

        response = client.put(
            f"/api/products/{product.id}",
            json={"id": "hijacked", "createdAt": "2000-01-01T00:00:00Z", "name": "Renamed"},
            headers=admin_headers,
        )
        assert response.status_code == 200
        stored = store.products.find_by_id(product.id)
        assert stored.name == "Renamed"
        assert stored.created_at == product.created_at
        assert store.products.find_by_id("hijacked") is None

    def test_update_missing(self, client, admin_headers):
        response = client.put("/api/products/missing", json={"name": "X"}, headers=admin_headers)
        assert response.status_code == 404

    def test_update_with_inverted_stock_levels(self, client, factory, admin_headers, store):
        product = factory.product(min_stock=5, max_stock=50)

        response = client.put(
            f"/api/products/{product.id}", json={"minStock": 30, "maxStock": 20}, headers=admin_headers
        )
        assert response.status_code == 400
        assert store.products.find_by_id(product.id).min_stock == 5


class TestDeleteProduct:
    def test_delete(self, client, factory, admin_headers, store):
        product = factory.product()
        response = client.delete(f"/api/products/{product.id}", headers=admin_headers)
        assert response.status_code == 200
        assert store.products.find_by_id(product.id) is None

    def test_delete_missing(self, client, admin_headers):
        response = client.delete("/api/products/missing", headers=admin_headers)
        assert response.status_code == 404
        assert response.json()["error"] == "Product not found"
