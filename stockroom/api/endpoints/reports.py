from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, Query

from stockroom.api.deps import get_store
from stockroom.api.endpoints.auth import get_current_user
from stockroom.core.responses import success_response
from stockroom.repositories.store import Store
from stockroom.schemas.inventory import TransactionType
from stockroom.services import reports

router = APIRouter(dependencies=[Depends(get_current_user)])


@router.get("/dashboard")
def get_dashboard(store: Store = Depends(get_store)):
    """Get headline counts, stock value and category/supplier breakdowns."""
    return success_response(reports.dashboard(store))


@router.get("/inventory-summary")
def get_inventory_summary(store: Store = Depends(get_store)):
    """Get the stock status of every inventory item."""
    return success_response(reports.inventory_summary(store))


@router.get("/low-stock")
def get_low_stock_report(store: Store = Depends(get_store)):
    return success_response(reports.low_stock_report(store))


@router.get("/transactions")
def get_transactions_report(
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    transaction_type: Optional[TransactionType] = Query(None, alias="type"),
    store: Store = Depends(get_store),
):
    """Get ledger entries, newest first, with in/out totals."""
    return success_response(reports.transactions_report(
        store,
        start_date=start_date,
        end_date=end_date,
        transaction_type=transaction_type.value if transaction_type else None,
    ))
