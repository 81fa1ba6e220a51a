"""
tradebook/models/trade.py

A single buy or sell of a stock or crypto asset. A Trade has no user_id of
its own: ownership is resolved through its Account, which keeps one source of
truth when a trade is moved to another account.
"""

import enum
from sqlalchemy import Column, String, Date, DateTime, Numeric, ForeignKey, Text
from sqlalchemy.orm import relationship

from tradebook.database import Base
from tradebook.models.user import new_id, utcnow


class TradeType(str, enum.Enum):
    BUY = "buy"
    SELL = "sell"


class AssetType(str, enum.Enum):
    STOCK = "stock"
    CRYPTO = "crypto"


class Trade(Base):
    __tablename__ = "trades"

    id = Column(String(36), primary_key=True, default=new_id)

    account_id = Column(
        String(36),
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # "buy" or "sell"
    type = Column(String(10), nullable=False)

    # "stock" or "crypto"
    asset_type = Column(String(10), nullable=False)

    ticker = Column(String(32), nullable=False)

    trade_date = Column(Date, nullable=False)

    quantity = Column(Numeric(28, 8), nullable=False)

    price = Column(Numeric(28, 8), nullable=False)

    currency = Column(String(10), nullable=False)

    reason = Column(Text, nullable=True, doc="Free-text note on why the trade was made.")

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    account = relationship("Account", back_populates="trades")

    def __repr__(self):
        return (
            f"<Trade(id={self.id}, account_id={self.account_id}, type={self.type}, "
            f"ticker={self.ticker}, quantity={self.quantity}, price={self.price})>"
        )
