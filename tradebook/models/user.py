"""
tradebook/models/user.py

Represents a user of the Tradebook application. Each user owns many Accounts,
and through them many Trades. Deleting a user removes everything they own.

The password hash never leaves this row: schemas/user.py has no field for it
and only services/user.py reads or writes it.
"""

from __future__ import annotations
import uuid
from datetime import datetime, timezone
from typing import List, Optional, TYPE_CHECKING
from sqlalchemy import String, DateTime
from sqlalchemy.orm import relationship, Mapped, mapped_column
from tradebook.database import Base

if TYPE_CHECKING:
    from tradebook.models.account import Account
    from tradebook.models.investment_profile import InvestmentProfile


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """
    The main user table. Each user has:
      - An immutable UUID primary key
      - A unique email used for sign-in
      - A display name and a unique username
      - A bcrypt password hash
      - A list of accounts and an optional investment profile
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)

    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    username: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)

    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    accounts: Mapped[List[Account]] = relationship(
        "Account",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
        doc="All accounts owned by this user."
    )

    investment_profile: Mapped[Optional[InvestmentProfile]] = relationship(
        "InvestmentProfile",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username})>"
