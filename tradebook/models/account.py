"""
tradebook/models/account.py

A financial account (brokerage, bank, exchange wallet...) owned by exactly
one User. Trades hang off an Account, so an Account's user_id is also the
owner of every Trade recorded against it.
"""

from sqlalchemy import Column, String, Numeric, ForeignKey
from sqlalchemy.orm import relationship
from tradebook.database import Base
from tradebook.models.user import new_id


class Account(Base):
    __tablename__ = "accounts"

    id = Column(String(36), primary_key=True, default=new_id)

    # Owner; every read and write filters on this column
    user_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    name = Column(String(255), nullable=False)

    # ISO-style code, e.g. "USD", "TWD", "BTC"
    currency = Column(String(10), nullable=False, default="USD")

    balance = Column(Numeric(18, 2), nullable=False, default=0)

    user = relationship(
        "User",
        back_populates="accounts",
        doc="The user that owns this account."
    )

    trades = relationship(
        "Trade",
        back_populates="account",
        cascade="all, delete-orphan",
        passive_deletes=True,
        doc="Trades booked against this account."
    )

    def __repr__(self):
        return (
            f"<Account(id={self.id}, user_id={self.user_id}, "
            f"name={self.name}, currency={self.currency})>"
        )
