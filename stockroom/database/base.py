from stockroom.database.session import Base

# Every model must be imported before create_all runs
from stockroom.models.product import Product
from stockroom.models.category import Category
from stockroom.models.supplier import Supplier
from stockroom.models.inventory import Inventory
from stockroom.models.user import User
from stockroom.models.transaction import Transaction


def create_tables(engine):
    Base.metadata.create_all(bind=engine)
