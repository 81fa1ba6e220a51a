"""
tradebook/services/guard.py

ResourceGuard: ownership checks in front of every Account and Trade query.

A guard is bound to one subject id, taken from a verified access token. All
queries it hands out are already filtered to rows that subject owns:
 - accounts directly, by accounts.user_id
 - trades transitively, by trades.account_id IN (subject's account ids)

Anything outside that scope is reported as NotFoundOrUnauthorized, the same
error as a row that does not exist.
"""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Query, Session

from tradebook.errors import NotFoundOrUnauthorized
from tradebook.models.account import Account
from tradebook.models.trade import Trade

logger = logging.getLogger(__name__)


class ResourceGuard:

    def __init__(self, db: Session, subject_id: str):
        self.db = db
        self.subject_id = subject_id

    def owned_account_ids(self):
        """Subquery of the subject's account ids, for scoping trade statements."""
        return select(Account.id).where(Account.user_id == self.subject_id)

    def accounts(self) -> Query:
        return self.db.query(Account).filter(Account.user_id == self.subject_id)

    def trades(self) -> Query:
        return self.db.query(Trade).filter(Trade.account_id.in_(self.owned_account_ids()))

    def require_account(self, account_id: str) -> Account:
        """
        Return the account if the subject owns it.
        Raises NotFoundOrUnauthorized otherwise, without saying which.
        """
        account = self.accounts().filter(Account.id == account_id).first()
        if account is None:
            logger.warning(
                "Account access denied: user_id=%s account_id=%s", self.subject_id, account_id
            )
            raise NotFoundOrUnauthorized("Account not found.")
        return account

    def require_trade(self, trade_id: str) -> Trade:
        """
        Resolve the trade through its account and confirm the account
        belongs to the subject.
        """
        trade = self.trades().filter(Trade.id == trade_id).first()
        if trade is None:
            logger.warning(
                "Trade access denied: user_id=%s trade_id=%s", self.subject_id, trade_id
            )
            raise NotFoundOrUnauthorized("Trade not found.")
        return trade
