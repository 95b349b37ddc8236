from sqlalchemy import Column, String, Float, Integer, DateTime, Text

from stockroom.database.session import Base

class Product(Base):
    __tablename__ = "products"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False)
    sku = Column(String, unique=True, nullable=False, index=True)
    description = Column(Text, default="")
    price = Column(Float, nullable=False)
    cost = Column(Float, nullable=False)
    category_id = Column(String, nullable=False, index=True)
    supplier_id = Column(String, nullable=False, index=True)
    min_stock = Column(Integer, default=0)
    max_stock = Column(Integer, default=0)
    unit = Column(String, default="pcs")
    status = Column(String, default="active", index=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)
