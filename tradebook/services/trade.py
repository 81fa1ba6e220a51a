"""
tradebook/services/trade.py

Trade CRUD behind the ResourceGuard.

Ownership is transitive: a trade belongs to whoever owns its account. Every
write therefore checks the trade's current account, and a move to another
account (account_id in the patch) checks the destination account as well,
before anything is written.
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import delete, update
from sqlalchemy.orm import Session

from tradebook.errors import NoFieldsProvided, NotFoundOrUnauthorized
from tradebook.models.trade import Trade
from tradebook.schemas.trade import TradeCreate, TradeUpdate
from tradebook.services.guard import ResourceGuard

logger = logging.getLogger(__name__)


def get_all_trades(guard: ResourceGuard) -> list[Trade]:
    """
    Return the caller's trades, newest trade date first.
    """
    return (
        guard.trades()
        .order_by(Trade.trade_date.desc(), Trade.created_at.desc())
        .all()
    )


def create_trade(trade_data: TradeCreate, guard: ResourceGuard, db: Session) -> Trade:
    """
    Book a trade against one of the caller's accounts.
    """
    guard.require_account(trade_data.account_id)

    new_trade = Trade(
        account_id=trade_data.account_id,
        type=trade_data.type.value,
        asset_type=trade_data.asset_type.value,
        ticker=trade_data.ticker,
        trade_date=trade_data.trade_date,
        quantity=trade_data.quantity,
        price=trade_data.price,
        currency=trade_data.currency,
        reason=trade_data.reason,
    )
    db.add(new_trade)
    db.commit()
    db.refresh(new_trade)
    logger.info("Trade created: user_id=%s trade_id=%s", guard.subject_id, new_trade.id)
    return new_trade


def update_trade(trade_id: str, trade_data: TradeUpdate, guard: ResourceGuard, db: Session) -> Trade:
    """
    Partially update a trade.

    Steps:
      1) Confirm the caller owns the trade (through its account).
      2) Reject an empty patch.
      3) If account_id is changing, confirm the caller owns the new account.
      4) Apply the patch in one UPDATE scoped to the caller's accounts.
    """
    guard.require_trade(trade_id)

    patch = trade_data.patch()
    if not patch:
        raise NoFieldsProvided()

    if "account_id" in patch:
        guard.require_account(patch["account_id"])

    patch["updated_at"] = datetime.now(timezone.utc)
    result = db.execute(
        update(Trade)
        .where(Trade.id == trade_id, Trade.account_id.in_(guard.owned_account_ids()))
        .values(**patch)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        db.rollback()
        raise NotFoundOrUnauthorized("Trade not found.")
    db.commit()

    trade = guard.require_trade(trade_id)
    db.refresh(trade)
    logger.info("Trade updated: user_id=%s trade_id=%s fields=%s",
                guard.subject_id, trade_id, sorted(patch))
    return trade


def delete_trade(trade_id: str, guard: ResourceGuard, db: Session) -> None:
    """
    Delete a trade only if it sits in one of the caller's accounts.
    """
    result = db.execute(
        delete(Trade)
        .where(Trade.id == trade_id, Trade.account_id.in_(guard.owned_account_ids()))
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        db.rollback()
        logger.warning("Trade delete denied: user_id=%s trade_id=%s", guard.subject_id, trade_id)
        raise NotFoundOrUnauthorized("Trade not found.")
    db.commit()
    logger.info("Trade deleted: user_id=%s trade_id=%s", guard.subject_id, trade_id)
