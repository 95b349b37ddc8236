"""Stock changes and their ledger entries, run against both storage backends."""
import pytest

from stockroom.repositories.base import classify_stock_change
from stockroom.schemas.inventory import TransactionType


@pytest.fixture
def item(any_store):
    category = any_store.categories.add({"name": "Tools", "color": "#FFAA00"})
    supplier = any_store.suppliers.add({
        "name": "Acme", "contact_person": "Road Runner", "email": "acme@example.com", "phone": "555",
    })
    product = any_store.products.add({
        "name": "Hammer", "sku": "HAM001", "price": 12.5, "cost": 7.0,
        "category_id": category.id, "supplier_id": supplier.id, "min_stock": 5, "max_stock": 40,
    })
    return any_store.inventory.add({"product_id": product.id, "quantity": 10, "location": "Aisle 3"})


class TestClassifyStockChange:
    def test_increase_is_in(self):
        assert classify_stock_change(10, 25) == (TransactionType.IN, 15)

    def test_decrease_is_out_with_positive_amount(self):
        assert classify_stock_change(10, 3) == (TransactionType.OUT, 7)

    def test_no_change(self):
        assert classify_stock_change(4, 4) is None


class TestUpdateQuantity:
    def test_increase_records_in_entry(self, any_store, item):
        updated = any_store.inventory.update_quantity(item.id, 25, "Restock", "user-1")

        assert updated.quantity == 25
        assert updated.last_updated >= item.last_updated
        assert any_store.inventory.find_by_id(item.id).quantity == 25

        ledger = any_store.inventory.get_transactions(item.id)
        assert len(ledger) == 1
        entry = ledger[0]
        assert entry.type == TransactionType.IN
        assert entry.quantity == 15
        assert entry.reason == "Restock"
        assert entry.user_id == "user-1"
        assert entry.inventory_id == item.id

    def test_decrease_records_out_entry(self, any_store, item):
        any_store.inventory.update_quantity(item.id, 4, "Sold", None)

        entry = any_store.inventory.get_transactions(item.id)[0]
        assert entry.type == TransactionType.OUT
        assert entry.quantity == 6
        assert entry.user_id is None

    def test_each_change_appends_one_entry(self, any_store, item):
        any_store.inventory.update_quantity(item.id, 20, "Delivery", "u")
        any_store.inventory.update_quantity(item.id, 12, "Orders", "u")
        any_store.inventory.update_quantity(item.id, 0, "Write-off", "u")

        ledger = any_store.inventory.get_transactions(item.id)
        assert [(t.type, t.quantity) for t in ledger] == [
            (TransactionType.IN, 10),
            (TransactionType.OUT, 8),
            (TransactionType.OUT, 12),
        ]
        assert any_store.inventory.find_by_id(item.id).quantity == 0

    def test_same_quantity_writes_nothing(self, any_store, item):
        result = any_store.inventory.update_quantity(item.id, 10, "Recount", "u")

        assert result.quantity == 10
        assert any_store.inventory.get_transactions(item.id) == []

    def test_unknown_item_writes_nothing(self, any_store, item):
        assert any_store.inventory.update_quantity("missing", 5, "Nope", "u") is None
        assert any_store.inventory.get_transactions() == []

    def test_ledger_filter_by_item(self, any_store, item):
        other_product = any_store.products.add({
            "name": "Saw", "sku": "SAW001", "price": 20, "cost": 11,
            "category_id": "c", "supplier_id": "s", "min_stock": 1, "max_stock": 10,
        })
        other = any_store.inventory.add({"product_id": other_product.id, "quantity": 2, "location": "Aisle 4"})

        any_store.inventory.update_quantity(item.id, 11, "Found one", "u")
        any_store.inventory.update_quantity(other.id, 1, "Sold", "u")

        assert len(any_store.inventory.get_transactions()) == 2
        assert [t.inventory_id for t in any_store.inventory.get_transactions(other.id)] == [other.id]


class TestRepositories:
    def test_find_by_product_id(self, any_store, item):
        assert any_store.inventory.find_by_product_id(item.product_id).id == item.id
        assert any_store.inventory.find_by_product_id("nope") is None

    def test_update_ignores_quantity(self, any_store, item):
        updated = any_store.inventory.update(item.id, {"quantity": 99, "location": "Aisle 9"})
        assert updated.quantity == 10
        assert updated.location == "Aisle 9"

    def test_update_ignores_unknown_fields(self, any_store):
        product = any_store.products.add({
            "name": "Drill", "sku": "DRL001", "price": 80, "cost": 50,
            "category_id": "c", "supplier_id": "s",
        })
        updated = any_store.products.update(product.id, {"id": "hijacked", "price": 90})
        assert updated.id == product.id
        assert updated.price == 90

    def test_update_and_delete_missing(self, any_store):
        assert any_store.products.update("missing", {"name": "x"}) is None
        assert any_store.products.delete("missing") is None

    def test_product_search_is_case_insensitive(self, any_store, item):
        assert [p.sku for p in any_store.products.search("hammer")] == ["HAM001"]
        assert [p.sku for p in any_store.products.search("ham0")] == ["HAM001"]
        assert any_store.products.search("wrench") == []

    def test_search_treats_wildcards_literally(self, any_store, item):
        assert any_store.products.search("%") == []
        assert any_store.products.search("_") == []
        assert any_store.suppliers.search("%") == []

        any_store.products.add({
            "name": "Discount 50% pack", "sku": "DSC_01", "price": 5, "cost": 2,
            "category_id": "c", "supplier_id": "s",
        })
        assert [p.sku for p in any_store.products.search("50%")] == ["DSC_01"]
        assert [p.sku for p in any_store.products.search("c_0")] == ["DSC_01"]

    def test_user_email_lookup_is_case_insensitive(self, any_store):
        user = any_store.users.add({
            "first_name": "Ada", "last_name": "Lovelace", "email": "Ada@Example.com", "password": "x",
        })
        assert user.email == "ada@example.com"
        assert user.name == "Ada Lovelace"
        assert any_store.users.find_by_email("ADA@example.com").id == user.id

    def test_store_is_empty(self, any_store):
        assert any_store.is_empty()
        any_store.users.add({"first_name": "A", "last_name": "B", "email": "a@b.co", "password": "x"})
        assert not any_store.is_empty()
