from sqlalchemy import Column, String, Integer, DateTime, Enum

from stockroom.database.session import Base
from stockroom.schemas.inventory import TransactionType

class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(String, primary_key=True, index=True)
    inventory_id = Column(String, nullable=False, index=True)
    type = Column(Enum(TransactionType), nullable=False)
    quantity = Column(Integer, nullable=False)  # Absolute size of the change
    reason = Column(String, nullable=False)
    user_id = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)
