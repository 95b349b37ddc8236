import logging
from datetime import datetime, timezone

from stockroom.core.config import Settings
from stockroom.core.security import hash_password
from stockroom.repositories.store import Store
from stockroom.schemas.inventory import TransactionType
from stockroom.schemas.user import UserRole

logger = logging.getLogger(__name__)

CATEGORIES = [
    {"name": "Electronics", "description": "Electronic devices and accessories", "color": "#3B82F6"},
    {"name": "Office Furniture", "description": "Office chairs, desks, and furniture", "color": "#10B981"},
    {"name": "Garden & Outdoor", "description": "Garden tools and outdoor equipment", "color": "#F59E0B"},
    {"name": "Kitchen & Dining", "description": "Kitchen appliances and dining items", "color": "#EF4444"},
]

SUPPLIERS = [
    {"name": "Tech Solutions Inc.", "contact_person": "John Smith", "email": "john@techsolutions.com",
     "phone": "+1-555-0123", "address": "123 Tech Street, Silicon Valley, CA 94025"},
    {"name": "Office Supplies Co.", "contact_person": "Sarah Johnson", "email": "sarah@officesupplies.com",
     "phone": "+1-555-0456", "address": "456 Office Ave, Business District, NY 10001"},
    {"name": "Furniture World", "contact_person": "Mike Davis", "email": "mike@furnitureworld.com",
     "phone": "+1-555-0789", "address": "789 Furniture Blvd, Design Center, TX 75001"},
    {"name": "Garden Tools Ltd.", "contact_person": "Lisa Wilson", "email": "lisa@gardentools.com",
     "phone": "+1-555-0321", "address": "321 Garden Lane, Green Acres, FL 33101"},
]

# (product, category index, supplier index, quantity, location, ledger history)
PRODUCTS = [
    ({"name": "Laptop Computer", "sku": "LAP001", "description": "High-performance laptop for business use",
      "price": 999.99, "cost": 750.00, "min_stock": 10, "max_stock": 50},
     0, 0, 15, "Warehouse A - Shelf 1", [(TransactionType.IN, 10, "Purchase order received")]),
    ({"name": "Wireless Mouse", "sku": "MOU001", "description": "Ergonomic wireless mouse with USB receiver",
      "price": 29.99, "cost": 15.00, "min_stock": 20, "max_stock": 200},
     0, 1, 45, "Warehouse A - Shelf 2", [(TransactionType.OUT, 5, "Sales order fulfilled")]),
    ({"name": "Office Chair", "sku": "CHR001", "description": "Comfortable office chair with lumbar support",
      "price": 199.99, "cost": 120.00, "min_stock": 10, "max_stock": 60},
     1, 2, 8, "Warehouse B - Section 1", [(TransactionType.IN, 3, "Restock from supplier")]),
    ({"name": "Garden Hose", "sku": "GRD001", "description": "50ft expandable garden hose",
      "price": 39.99, "cost": 22.50, "min_stock": 5, "max_stock": 40},
     2, 3, 3, "Warehouse C - Outdoor Section", [(TransactionType.OUT, 2, "Customer order")]),
    ({"name": "Chef Knife Set", "sku": "KIT001", "description": "Stainless steel 8-piece knife set",
      "price": 89.99, "cost": 45.00, "min_stock": 5, "max_stock": 30},
     3, 1, 12, "Warehouse A - Shelf 3", [(TransactionType.IN, 8, "New shipment received")]),
]

SEED_TIMESTAMP = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)


def seed_demo_data(store: Store, settings: Settings) -> bool:
    """Load demo records into an empty store. Returns False when data already exists."""
    if not store.is_empty():
        logger.info("Store already has data, skipping demo seed")
        return False

    admin = store.users.add({
        "first_name": "Admin",
        "last_name": "User",
        "email": settings.SEED_ADMIN_EMAIL,
        "password": hash_password(settings.SEED_ADMIN_PASSWORD),
        "role": UserRole.ADMIN,
    })
    store.users.add({
        "first_name": "John",
        "last_name": "Doe",
        "email": "john@example.com",
        "password": hash_password("password123"),
        "role": UserRole.USER,
    })

    categories = [store.categories.add(data) for data in CATEGORIES]
    suppliers = [store.suppliers.add(data) for data in SUPPLIERS]

    for product_data, category_idx, supplier_idx, quantity, location, history in PRODUCTS:
        product = store.products.add(dict(
            product_data,
            category_id=categories[category_idx].id,
            supplier_id=suppliers[supplier_idx].id,
        ))
        item = store.inventory.add({
            "product_id": product.id,
            "quantity": quantity,
            "location": location,
            "last_updated": SEED_TIMESTAMP,
        })
        for transaction_type, amount, reason in history:
            store.inventory.add_transaction({
                "inventory_id": item.id,
                "type": transaction_type,
                "quantity": amount,
                "reason": reason,
                "user_id": admin.id,
                "created_at": SEED_TIMESTAMP,
            })

    logger.info(f"Seeded demo data: {len(PRODUCTS)} products, admin login {settings.SEED_ADMIN_EMAIL}")
    return True
