"""
tradebook/services/account.py

Manages creation, update, deletion, and retrieval of Accounts.

Every function takes a ResourceGuard rather than a user id, so there is no
code path that can reach an account without the owner filter. Updates and
deletes are single statements whose WHERE clause carries both the account id
and the owner id; zero affected rows means "not found or not yours".
"""

import logging

from sqlalchemy import delete, update
from sqlalchemy.orm import Session

from tradebook.errors import NoFieldsProvided, NotFoundOrUnauthorized
from tradebook.models.account import Account
from tradebook.schemas.account import AccountCreate, AccountUpdate
from tradebook.services.guard import ResourceGuard

logger = logging.getLogger(__name__)


def get_all_accounts(guard: ResourceGuard) -> list[Account]:
    """
    Fetch the caller's accounts, ordered by name.
    """
    return guard.accounts().order_by(Account.name).all()


def get_account_by_id(account_id: str, guard: ResourceGuard) -> Account:
    return guard.require_account(account_id)


def create_account(account_data: AccountCreate, guard: ResourceGuard, db: Session) -> Account:
    """
    Create a new Account owned by the guard's subject. The owner is never
    taken from the request body.
    """
    new_account = Account(
        user_id=guard.subject_id,
        name=account_data.name,
        currency=account_data.currency,
        balance=account_data.balance,
    )
    db.add(new_account)
    db.commit()
    db.refresh(new_account)
    logger.info("Account created: user_id=%s account_id=%s", guard.subject_id, new_account.id)
    return new_account


def update_account(account_id: str, account_data: AccountUpdate, guard: ResourceGuard, db: Session) -> Account:
    """
    Apply only the fields the client sent, in one owner-scoped UPDATE.

    Raises:
        NoFieldsProvided: the request body had no fields.
        NotFoundOrUnauthorized: no row matched id AND owner.
    """
    patch = account_data.patch()
    if not patch:
        raise NoFieldsProvided()

    result = db.execute(
        update(Account)
        .where(Account.id == account_id, Account.user_id == guard.subject_id)
        .values(**patch)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        db.rollback()
        logger.warning("Account update denied: user_id=%s account_id=%s", guard.subject_id, account_id)
        raise NotFoundOrUnauthorized("Account not found.")
    db.commit()

    account = guard.require_account(account_id)
    db.refresh(account)
    return account


def delete_account(account_id: str, guard: ResourceGuard, db: Session) -> None:
    """
    Delete the account (and, by cascade, its trades) if the caller owns it.
    """
    result = db.execute(
        delete(Account)
        .where(Account.id == account_id, Account.user_id == guard.subject_id)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        db.rollback()
        logger.warning("Account delete denied: user_id=%s account_id=%s", guard.subject_id, account_id)
        raise NotFoundOrUnauthorized("Account not found.")
    db.commit()
    logger.info("Account deleted: user_id=%s account_id=%s", guard.subject_id, account_id)
