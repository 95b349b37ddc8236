class TestCategories:
    def test_create_and_list(self, client, admin_headers, user_headers):
        response = client.post(
            "/api/categories",
            json={"name": "Toys", "description": "Games and toys", "color": "#A1B2C3"},
            headers=admin_headers,
        )
        assert response.status_code == 201
        created = response.json()["data"]
        assert created["status"] == "active"

        listed = client.get("/api/categories", headers=user_headers).json()
        assert listed["success"] is True
        assert [c["id"] for c in listed["data"]] == [created["id"]]

    def test_invalid_color(self, client, admin_headers, store):
        response = client.post("/api/categories", json={"name": "Toys", "color": "red"}, headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "color"
        assert store.categories.get_all() == []

    def test_update(self, client, factory, admin_headers):
        category = factory.category()
        response = client.put(f"/api/categories/{category.id}", json={"name": "Renamed"}, headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["data"]["name"] == "Renamed"
        assert response.json()["data"]["color"] == category.color

    def test_get_missing(self, client, user_headers):
        response = client.get("/api/categories/missing", headers=user_headers)
        assert response.status_code == 404
        assert response.json()["error"] == "Category not found"

    def test_delete_unused(self, client, factory, admin_headers, store):
        category = factory.category()
        response = client.delete(f"/api/categories/{category.id}", headers=admin_headers)
        assert response.status_code == 200
        assert store.categories.find_by_id(category.id) is None

    def test_delete_in_use_is_refused(self, client, factory, admin_headers, store):
        category = factory.category()
        factory.product(category=category)

        response = client.delete(f"/api/categories/{category.id}", headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["error"] == "Cannot delete category with associated products"
        assert store.categories.find_by_id(category.id) is not None

    def test_regular_user_cannot_create(self, client, user_headers):
        response = client.post("/api/categories", json={"name": "Toys", "color": "#FFFFFF"}, headers=user_headers)
        assert response.status_code == 403


class TestSuppliers:
    def test_create(self, client, admin_headers):
        response = client.post(
            "/api/suppliers",
            json={
                "name": "Parts Unlimited",
                "contactPerson": "Maxine Chambers",
                "email": "maxine@parts.example.com",
                "phone": "+1-555-0199",
            },
            headers=admin_headers,
        )
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["contactPerson"] == "Maxine Chambers"
        assert data["address"] == ""

    def test_invalid_email(self, client, admin_headers):
        response = client.post(
            "/api/suppliers",
            json={"name": "X", "contactPerson": "Y", "email": "nope", "phone": "1"},
            headers=admin_headers,
        )
        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "email"

    def test_search_and_paginate(self, client, factory, user_headers):
        factory.supplier(name="Northwind Traders")
        factory.supplier(contact_person="Nancy North")
        factory.supplier(name="Contoso")

        response = client.get("/api/suppliers", params={"search": "north", "limit": 1}, headers=user_headers)
        body = response.json()
        assert body["pagination"]["total"] == 2
        assert body["pagination"]["totalPages"] == 2
        assert len(body["data"]) == 1

    def test_status_filter(self, client, factory, user_headers):
        factory.supplier()
        inactive = factory.supplier(status="inactive")

        response = client.get("/api/suppliers", params={"status": "inactive"}, headers=user_headers)
        assert [s["id"] for s in response.json()["data"]] == [inactive.id]

    def test_delete_in_use_is_refused(self, client, factory, admin_headers, store):
        supplier = factory.supplier()
        factory.product(supplier=supplier)

        response = client.delete(f"/api/suppliers/{supplier.id}", headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["error"] == "Cannot delete supplier with associated products"
        assert store.suppliers.find_by_id(supplier.id) is not None

    def test_delete_missing(self, client, admin_headers):
        assert client.delete("/api/suppliers/missing", headers=admin_headers).status_code == 404
