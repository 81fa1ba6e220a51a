"""
tradebook/routers/account.py

FastAPI router handling Account endpoints. Every route resolves a
ResourceGuard from the bearer token, so the owner filter is applied before
the service touches a row.
"""

from fastapi import APIRouter, Depends, Response, status
from typing import List
from sqlalchemy.orm import Session

from tradebook.database import get_db
from tradebook.dependencies import get_resource_guard
from tradebook.schemas.account import AccountCreate, AccountUpdate, AccountRead
from tradebook.services import account as account_service
from tradebook.services.guard import ResourceGuard

router = APIRouter(tags=["accounts"])


@router.get("/", response_model=List[AccountRead])
def list_accounts(guard: ResourceGuard = Depends(get_resource_guard)):
    """
    Retrieve the caller's Accounts.
    """
    return account_service.get_all_accounts(guard)


@router.get("/{account_id}", response_model=AccountRead)
def get_account(account_id: str, guard: ResourceGuard = Depends(get_resource_guard)):
    """
    Retrieve one Account, or 404 if it doesn't exist or isn't the caller's.
    """
    return account_service.get_account_by_id(account_id, guard)


@router.post("/", response_model=AccountRead, status_code=status.HTTP_201_CREATED)
def create_account(
    account: AccountCreate,
    guard: ResourceGuard = Depends(get_resource_guard),
    db: Session = Depends(get_db),
):
    """
    Create a new Account owned by the caller.
    """
    return account_service.create_account(account, guard, db)


@router.put("/{account_id}", response_model=AccountRead)
def update_account(
    account_id: str,
    account: AccountUpdate,
    guard: ResourceGuard = Depends(get_resource_guard),
    db: Session = Depends(get_db),
):
    """
    Partially update an Account. Only fields present in the body change.
    400 for an empty body, 404 if not found or not the caller's.
    """
    return account_service.update_account(account_id, account, guard, db)


@router.delete("/{account_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_account(
    account_id: str,
    guard: ResourceGuard = Depends(get_resource_guard),
    db: Session = Depends(get_db),
):
    """
    Delete an Account and its trades, returning 204 on success.
    """
    account_service.delete_account(account_id, guard, db)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
