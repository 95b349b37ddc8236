from sqlalchemy import Column, String, Integer, DateTime

from stockroom.database.session import Base

class Inventory(Base):
    __tablename__ = "inventory"

    id = Column(String, primary_key=True, index=True)
    # One item per product; no foreign key so items outlive deleted products
    product_id = Column(String, nullable=False, unique=True, index=True)
    quantity = Column(Integer, nullable=False, default=0)
    min_stock = Column(Integer, nullable=True)  # null: inherit from product
    max_stock = Column(Integer, nullable=True)
    location = Column(String, nullable=False)
    last_updated = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)
