"""
tradebook/routers/trade.py

Router for Trade endpoints. Ownership runs through the trade's account; the
service re-checks the destination account when a trade is moved.
"""

from fastapi import APIRouter, Depends, Response, status
from typing import List
from sqlalchemy.orm import Session

from tradebook.database import get_db
from tradebook.dependencies import get_resource_guard
from tradebook.schemas.trade import TradeCreate, TradeRead, TradeUpdate
from tradebook.services import trade as trade_service
from tradebook.services.guard import ResourceGuard

router = APIRouter(tags=["trades"])


@router.get("/", response_model=List[TradeRead])
def list_trades(guard: ResourceGuard = Depends(get_resource_guard)):
    """
    List the caller's trades across all of their accounts.
    """
    return trade_service.get_all_trades(guard)


@router.post("/", response_model=TradeRead, status_code=status.HTTP_201_CREATED)
def create_trade(
    trade: TradeCreate,
    guard: ResourceGuard = Depends(get_resource_guard),
    db: Session = Depends(get_db),
):
    """
    Record a trade. 404 if account_id is not one of the caller's accounts.
    """
    return trade_service.create_trade(trade, guard, db)


@router.put("/{trade_id}", response_model=TradeRead)
def update_trade(
    trade_id: str,
    trade: TradeUpdate,
    guard: ResourceGuard = Depends(get_resource_guard),
    db: Session = Depends(get_db),
):
    """
    Partially update a trade; e.g. {"price": "150.0"} changes only price.
    """
    return trade_service.update_trade(trade_id, trade, guard, db)


@router.delete("/{trade_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_trade(
    trade_id: str,
    guard: ResourceGuard = Depends(get_resource_guard),
    db: Session = Depends(get_db),
):
    trade_service.delete_trade(trade_id, guard, db)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
